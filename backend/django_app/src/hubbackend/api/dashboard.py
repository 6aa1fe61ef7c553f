from datetime import datetime, time, timedelta

from django.db.models import Q
from django.utils import timezone

from hubbackend.api.models import ChatgptChat, LeetcodeProblem, Note, Task
from hubbackend.api.serializers import (
    ChatgptChatSerializer,
    LeetcodeProblemSerializer,
    NoteSummarySerializer,
    TaskSerializer,
)

TODAYS_TASKS_LIMIT = 5
RECENT_NOTES_LIMIT = 5
RECENT_LEETCODE_LIMIT = 3
PINNED_CHATS_LIMIT = 3


def day_bounds(now=None):
    """Start of today and of tomorrow in the active time zone."""
    now = timezone.localtime(now)
    start = timezone.make_aware(datetime.combine(now.date(), time.min), now.tzinfo)
    return start, start + timedelta(days=1)


def todays_tasks(user, now=None):
    # an undated task created today counts as due today
    start, end = day_bounds(now)
    due_today = Q(dueDate__gte=start, dueDate__lt=end)
    undated_new = Q(dueDate__isnull=True, createdAt__gte=start)
    return (Task.objects.filter(user=user).filter(due_today | undated_new)
            .prefetch_related('tags')
            .order_by('-createdAt')[:TODAYS_TASKS_LIMIT])


def summarize(user, now=None):
    """Read-only overview of everything the user owns."""
    tasks = Task.objects.filter(user=user)
    notes = Note.objects.filter(user=user)
    return {
        "totalTasks": tasks.count(),
        "completedTasks": tasks.filter(completed=True).count(),
        "totalNotes": notes.count(),
        "todaysTasks": TaskSerializer(todays_tasks(user, now), many=True).data,
        "recentNotes": NoteSummarySerializer(
            notes.order_by('-updatedAt')[:RECENT_NOTES_LIMIT], many=True
        ).data,
        "recentLeetcode": LeetcodeProblemSerializer(
            LeetcodeProblem.objects.filter(user=user).order_by('-lastVisited')[:RECENT_LEETCODE_LIMIT],
            many=True,
        ).data,
        "pinnedChats": ChatgptChatSerializer(
            ChatgptChat.objects.filter(user=user, isPinned=True).order_by('-updatedAt')[:PINNED_CHATS_LIMIT],
            many=True,
        ).data,
    }
