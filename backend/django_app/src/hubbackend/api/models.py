import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone


def _random_id():
    return uuid.uuid4().hex


class Tag(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=_random_id)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='tags')
    name = models.CharField(max_length=100)
    color = models.CharField(max_length=7, default='#6B7280')

    class Meta:
        unique_together = ('user', 'name')
        ordering = ['name']

    def __str__(self):
        return self.name


class Task(models.Model):
    class Priority(models.TextChoices):
        LOW = 'LOW'
        MEDIUM = 'MEDIUM'
        HIGH = 'HIGH'
        URGENT = 'URGENT'

    id = models.CharField(primary_key=True, max_length=64, default=_random_id)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='tasks')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    completed = models.BooleanField(default=False)
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.MEDIUM)
    dueDate = models.DateTimeField(blank=True, null=True)
    progress = models.PositiveSmallIntegerField(
        default=0, validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    tags = models.ManyToManyField(Tag, blank=True, related_name='tasks')
    createdAt = models.DateTimeField(auto_now_add=True)
    updatedAt = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title


class NotesFolder(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=_random_id)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='folders')
    name = models.CharField(max_length=100)
    color = models.CharField(max_length=7, default='#10B981')
    createdAt = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name


class Note(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=_random_id)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='notes')
    folder = models.ForeignKey(
        NotesFolder, on_delete=models.SET_NULL, blank=True, null=True, related_name='notes'
    )
    title = models.CharField(max_length=255)
    content = models.TextField(blank=True, default='')  # markdown
    tags = models.ManyToManyField(Tag, blank=True, related_name='notes')
    createdAt = models.DateTimeField(auto_now_add=True)
    updatedAt = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title


class LeetcodeProblem(models.Model):
    class Difficulty(models.TextChoices):
        EASY = 'EASY'
        MEDIUM = 'MEDIUM'
        HARD = 'HARD'

    id = models.CharField(primary_key=True, max_length=64, default=_random_id)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='leetcode_problems')
    title = models.CharField(max_length=255)
    link = models.URLField(max_length=500)
    difficulty = models.CharField(max_length=10, choices=Difficulty.choices)
    notes = models.TextField(blank=True, default='')
    # Plain labels, not Tag rows
    tags = models.JSONField(default=list, blank=True)
    lastVisited = models.DateTimeField(default=timezone.now)
    createdAt = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.title


class ChatgptChat(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=_random_id)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='chatgpt_chats')
    title = models.CharField(max_length=255)
    link = models.URLField(max_length=500)
    description = models.TextField(blank=True, default='')
    isPinned = models.BooleanField(default=False)
    createdAt = models.DateTimeField(auto_now_add=True)
    updatedAt = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title
