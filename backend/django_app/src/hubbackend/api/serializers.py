from rest_framework import serializers

from hubbackend.api.models import ChatgptChat, LeetcodeProblem, Note, NotesFolder, Tag, Task


def _required(message):
    return {'error_messages': {'required': message, 'blank': message, 'null': message}}


class TagSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ['id', 'name', 'color']


class TaskSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source='user_id', read_only=True)
    tags = TagSerializer(many=True, read_only=True)

    class Meta:
        model = Task
        fields = [
            'id', 'title', 'description', 'completed', 'priority', 'dueDate',
            'progress', 'tags', 'userId', 'createdAt', 'updatedAt',
        ]
        read_only_fields = ['id', 'createdAt', 'updatedAt']
        extra_kwargs = {'title': _required('Title is required')}


class FolderSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = NotesFolder
        fields = ['id', 'name', 'color']


class FolderSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source='user_id', read_only=True)
    noteCount = serializers.SerializerMethodField()

    class Meta:
        model = NotesFolder
        fields = ['id', 'name', 'color', 'userId', 'noteCount', 'createdAt']
        read_only_fields = ['id', 'createdAt']
        extra_kwargs = {'name': _required('Name is required')}

    def get_noteCount(self, obj):
        # list queries annotate the count; fresh rows fall back to a query
        count = getattr(obj, 'note_count', None)
        return obj.notes.count() if count is None else count


class NoteSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source='user_id', read_only=True)
    folderId = serializers.CharField(source='folder_id', read_only=True, allow_null=True)
    folder = FolderSummarySerializer(read_only=True)
    tags = TagSerializer(many=True, read_only=True)

    class Meta:
        model = Note
        fields = [
            'id', 'title', 'content', 'folderId', 'folder', 'tags', 'userId',
            'createdAt', 'updatedAt',
        ]
        read_only_fields = ['id', 'createdAt', 'updatedAt']
        extra_kwargs = {'title': _required('Title is required')}


class NoteSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Note
        fields = ['id', 'title', 'updatedAt']


class LeetcodeProblemSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source='user_id', read_only=True)
    tags = serializers.ListField(
        child=serializers.CharField(max_length=100), required=False, allow_empty=True
    )

    class Meta:
        model = LeetcodeProblem
        fields = [
            'id', 'title', 'link', 'difficulty', 'notes', 'tags', 'lastVisited',
            'userId', 'createdAt',
        ]
        read_only_fields = ['id', 'lastVisited', 'createdAt']
        extra_kwargs = {
            'title': _required('Title is required'),
            'link': _required('Link is required'),
            'difficulty': _required('Difficulty is required'),
        }


class ChatgptChatSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source='user_id', read_only=True)

    class Meta:
        model = ChatgptChat
        fields = [
            'id', 'title', 'link', 'description', 'isPinned', 'userId',
            'createdAt', 'updatedAt',
        ]
        read_only_fields = ['id', 'createdAt', 'updatedAt']
        extra_kwargs = {
            'title': _required('Title is required'),
            'link': _required('Link is required'),
        }
