import logging

from django.db import transaction
from django.db.models import Count, Q
from django.utils import timezone

from hubbackend.api.errors import ValidationFailed
from hubbackend.api.guards import get_owned
from hubbackend.api.models import ChatgptChat, LeetcodeProblem, Note, NotesFolder, Task
from hubbackend.api.serializers import (
    ChatgptChatSerializer,
    FolderSerializer,
    LeetcodeProblemSerializer,
    NoteSerializer,
    TaskSerializer,
)
from hubbackend.api.tags import clean_tag_names, normalize_tags

logger = logging.getLogger(__name__)


def _search(queryset, term, *fields):
    term = (term or '').strip()
    if not term:
        return queryset
    query = Q()
    for field in fields:
        query |= Q(**{f'{field}__icontains': term})
    return queryset.filter(query)


def _flag(value):
    if value is None:
        return None
    value = value.strip().lower()
    if value in ('true', '1'):
        return True
    if value in ('false', '0'):
        return False
    return None


def _blank_nulls(body, *fields):
    for field in fields:
        if field in body and body[field] is None:
            body[field] = ''


def delete_owned(model, pk, user, label):
    obj = get_owned(model, pk, user, label)
    obj.delete()
    logger.info("deleted %s %s for user %s", label.lower(), pk, user.pk)


# Tasks

def _tasks():
    return Task.objects.prefetch_related('tags')


def list_tasks(user, params):
    qs = _search(_tasks().filter(user=user), params.get('search'), 'title', 'description')
    completed = _flag(params.get('completed'))
    if completed is not None:
        qs = qs.filter(completed=completed)
    priority = (params.get('priority') or '').strip().upper()
    if priority:
        qs = qs.filter(priority=priority)
    return qs.order_by('-updatedAt')


def _task_payload(body):
    body = dict(body)
    if body.get('dueDate') == '':
        body['dueDate'] = None
    return body


def create_task(user, body):
    body = _task_payload(body)
    names = clean_tag_names(body.pop('tags', None))
    serializer = TaskSerializer(data=body)
    serializer.is_valid(raise_exception=True)
    with transaction.atomic():
        task = serializer.save(user=user)
        if names:
            normalize_tags(user, task, names)
    logger.info("created task %s for user %s", task.pk, user.pk)
    return _tasks().get(pk=task.pk)


def update_task(user, pk, body):
    task = get_owned(Task, pk, user, 'Task')
    body = _task_payload(body)
    replace_tags = 'tags' in body
    names = clean_tag_names(body.pop('tags', None))
    serializer = TaskSerializer(task, data=body, partial=True)
    serializer.is_valid(raise_exception=True)
    with transaction.atomic():
        serializer.save()
        if replace_tags:
            normalize_tags(user, task, names)
    return _tasks().get(pk=task.pk)


# Folders

def list_folders(user):
    return (NotesFolder.objects.filter(user=user)
            .annotate(note_count=Count('notes'))
            .order_by('-createdAt'))


def create_folder(user, body):
    body = dict(body)
    if not body.get('color'):
        body.pop('color', None)
    serializer = FolderSerializer(data=body)
    serializer.is_valid(raise_exception=True)
    folder = serializer.save(user=user)
    logger.info("created folder %s for user %s", folder.pk, user.pk)
    return folder


# Notes

def _notes():
    return Note.objects.select_related('folder').prefetch_related('tags')


def _resolve_folder(user, folder_id):
    if not folder_id:
        return None
    try:
        return NotesFolder.objects.get(pk=folder_id, user=user)
    except NotesFolder.DoesNotExist:
        raise ValidationFailed('Folder not found')


def list_notes(user, params):
    qs = _search(_notes().filter(user=user), params.get('search'), 'title', 'content')
    folder_id = params.get('folderId')
    if folder_id:
        qs = qs.filter(folder_id=folder_id)
    return qs.order_by('-updatedAt')


def get_note(user, pk):
    return get_owned(_notes(), pk, user, 'Note')


def create_note(user, body):
    body = dict(body)
    _blank_nulls(body, 'content')
    names = clean_tag_names(body.pop('tags', None))
    folder = _resolve_folder(user, body.pop('folderId', None))
    serializer = NoteSerializer(data=body)
    serializer.is_valid(raise_exception=True)
    with transaction.atomic():
        note = serializer.save(user=user, folder=folder)
        if names:
            normalize_tags(user, note, names)
    logger.info("created note %s for user %s", note.pk, user.pk)
    return _notes().get(pk=note.pk)


def update_note(user, pk, body):
    note = get_owned(Note, pk, user, 'Note')
    body = dict(body)
    _blank_nulls(body, 'content')
    # tags are only cleared when the key is sent, not on every PUT
    replace_tags = 'tags' in body
    names = clean_tag_names(body.pop('tags', None))
    extra = {}
    if 'folderId' in body:
        extra['folder'] = _resolve_folder(user, body.pop('folderId'))
    serializer = NoteSerializer(note, data=body, partial=True)
    serializer.is_valid(raise_exception=True)
    with transaction.atomic():
        serializer.save(**extra)
        if replace_tags:
            normalize_tags(user, note, names)
    return _notes().get(pk=note.pk)


# LeetCode problems

def list_problems(user, params):
    qs = _search(LeetcodeProblem.objects.filter(user=user), params.get('search'), 'title', 'notes')
    difficulty = (params.get('difficulty') or '').strip().upper()
    if difficulty:
        qs = qs.filter(difficulty=difficulty)
    qs = qs.order_by('-lastVisited')
    wanted = {t.strip() for t in (params.get('tags') or '').split(',') if t.strip()}
    if not wanted:
        return list(qs)
    # tags live in a JSON list, match any-of here rather than in SQL
    return [p for p in qs if wanted.intersection(p.tags or [])]


def _problem_payload(body):
    body = dict(body)
    _blank_nulls(body, 'notes')
    if 'tags' in body and body['tags'] is None:
        body['tags'] = []
    if isinstance(body.get('difficulty'), str):
        body['difficulty'] = body['difficulty'].upper()
    return body


def create_problem(user, body):
    serializer = LeetcodeProblemSerializer(data=_problem_payload(body))
    serializer.is_valid(raise_exception=True)
    problem = serializer.save(user=user)
    logger.info("created leetcode problem %s for user %s", problem.pk, user.pk)
    return problem


def visit_problem(user, pk):
    """Read one problem, stamping ``lastVisited``."""
    problem = get_owned(LeetcodeProblem, pk, user, 'Problem')
    problem.lastVisited = timezone.now()
    problem.save(update_fields=['lastVisited'])
    return problem


def update_problem(user, pk, body):
    problem = get_owned(LeetcodeProblem, pk, user, 'Problem')
    serializer = LeetcodeProblemSerializer(problem, data=_problem_payload(body), partial=True)
    serializer.is_valid(raise_exception=True)
    return serializer.save(lastVisited=timezone.now())


# ChatGPT chats

def list_chats(user, params):
    qs = _search(ChatgptChat.objects.filter(user=user), params.get('search'), 'title', 'description')
    pinned = _flag(params.get('pinned', params.get('isPinned')))
    if pinned:
        qs = qs.filter(isPinned=True)
    return qs.order_by('-updatedAt')


def create_chat(user, body):
    body = dict(body)
    _blank_nulls(body, 'description')
    serializer = ChatgptChatSerializer(data=body)
    serializer.is_valid(raise_exception=True)
    chat = serializer.save(user=user)
    logger.info("created chat %s for user %s", chat.pk, user.pk)
    return chat


def update_chat(user, pk, body):
    chat = get_owned(ChatgptChat, pk, user, 'Chat')
    body = dict(body)
    _blank_nulls(body, 'description')
    serializer = ChatgptChatSerializer(chat, data=body, partial=True)
    serializer.is_valid(raise_exception=True)
    return serializer.save()
