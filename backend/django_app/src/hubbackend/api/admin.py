from django.contrib import admin

from hubbackend.api.models import ChatgptChat, LeetcodeProblem, Note, NotesFolder, Tag, Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ('title', 'user', 'priority', 'completed', 'dueDate', 'updatedAt')
    list_filter = ('priority', 'completed')
    search_fields = ('title', 'description')


@admin.register(Note)
class NoteAdmin(admin.ModelAdmin):
    list_display = ('title', 'user', 'folder', 'updatedAt')
    search_fields = ('title', 'content')


@admin.register(LeetcodeProblem)
class LeetcodeProblemAdmin(admin.ModelAdmin):
    list_display = ('title', 'user', 'difficulty', 'lastVisited')
    list_filter = ('difficulty',)


@admin.register(ChatgptChat)
class ChatgptChatAdmin(admin.ModelAdmin):
    list_display = ('title', 'user', 'isPinned', 'updatedAt')


admin.site.register(Tag)
admin.site.register(NotesFolder)
