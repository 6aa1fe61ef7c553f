from django.contrib import admin
from django.urls import path
from hubbackend.api import views as api


def both(route, view):
    """Register ``route`` with and without a trailing slash."""
    return [path(route, view), path(route + '/', view)]


urlpatterns = [
    path('admin/', admin.site.urls),

    *both('healthz', api.healthz),
    *both('api/ping', api.ping),

    # Auth endpoints
    *both('api/auth/register', api.register),
    *both('api/auth/login', api.login_view),
    *both('api/auth/logout', api.logout_view),
    *both('api/auth/me', api.me),

    # Tasks
    *both('api/tasks', api.tasks),
    *both('api/tasks/<str:task_id>', api.task_detail),

    # Notes and folders
    *both('api/notes', api.notes),
    *both('api/notes/<str:note_id>', api.note_detail),
    *both('api/folders', api.folders),

    # LeetCode (extract must precede the detail route)
    *both('api/leetcode', api.leetcode),
    *both('api/leetcode/extract', api.leetcode_extract),
    *both('api/leetcode/<str:problem_id>', api.leetcode_detail),

    # ChatGPT bookmarks
    *both('api/chatgpt', api.chatgpt),
    *both('api/chatgpt/<str:chat_id>', api.chatgpt_detail),

    *both('api/dashboard', api.dashboard),
]
