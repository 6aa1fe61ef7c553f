import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.contrib.auth import authenticate, login, logout
from django.contrib.auth.models import User
from django.views.decorators.http import require_http_methods

from hubbackend.api import services
from hubbackend.api.dashboard import summarize
from hubbackend.api.errors import ApiError, ValidationFailed
from hubbackend.api.guards import endpoint, json_body, resolve_user
from hubbackend.api.leetcode import extract_problem
from hubbackend.api.models import ChatgptChat, LeetcodeProblem, Note, Task
from hubbackend.api.serializers import (
    ChatgptChatSerializer,
    FolderSerializer,
    LeetcodeProblemSerializer,
    NoteSerializer,
    TaskSerializer,
)

SERVICE_NAME = 'productivity-hub-backend'
MIN_PASSWORD_LENGTH = 8

logger = logging.getLogger(__name__)


def _user_json(user):
    return {"id": user.id, "name": user.first_name, "email": user.email}


@require_http_methods(["GET"])
def healthz(request):
    return JsonResponse({"ok": True})


@require_http_methods(["GET"])
def ping(request):
    return JsonResponse({"ok": True, "service": SERVICE_NAME})


@csrf_exempt
@require_http_methods(["POST"])
@endpoint(public=True)
def register(request):
    body = json_body(request)
    name = (body.get('name') or '').strip()
    email = (body.get('email') or '').strip().lower()
    password = body.get('password') or ''
    if not email or not password:
        raise ValidationFailed('Email and password are required')
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailed(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
    if User.objects.filter(username=email).exists():
        raise ApiError('Email already registered', status=409)
    user = User.objects.create_user(username=email, email=email, password=password, first_name=name)
    login(request, user)
    logger.info("registered user %s", user.pk)
    return JsonResponse({"user": _user_json(user)}, status=201)


@csrf_exempt
@require_http_methods(["POST"])
@endpoint(public=True)
def login_view(request):
    body = json_body(request)
    email = (body.get('email') or '').strip().lower()
    password = body.get('password') or ''
    user = authenticate(request, username=email, password=password)
    if user is None:
        raise ApiError('Invalid credentials', status=401)
    login(request, user)
    return JsonResponse({"user": _user_json(user)})


@csrf_exempt
@require_http_methods(["POST"])
def logout_view(request):
    logout(request)
    return JsonResponse({"ok": True})


@require_http_methods(["GET"])
def me(request):
    user = resolve_user(request)
    return JsonResponse({"user": _user_json(user) if user else None})


# Tasks

@csrf_exempt
@require_http_methods(["GET", "POST"])
@endpoint()
def tasks(request, user):
    if request.method == 'GET':
        items = services.list_tasks(user, request.GET)
        return JsonResponse(TaskSerializer(items, many=True).data, safe=False)
    task = services.create_task(user, json_body(request))
    return JsonResponse(TaskSerializer(task).data, status=201)


@csrf_exempt
@require_http_methods(["PUT", "DELETE"])
@endpoint()
def task_detail(request, user, task_id: str):
    if request.method == 'DELETE':
        services.delete_owned(Task, task_id, user, 'Task')
        return JsonResponse({"message": "Task deleted successfully"})
    task = services.update_task(user, task_id, json_body(request))
    return JsonResponse(TaskSerializer(task).data)


# Notes and folders

@csrf_exempt
@require_http_methods(["GET", "POST"])
@endpoint()
def notes(request, user):
    if request.method == 'GET':
        items = services.list_notes(user, request.GET)
        return JsonResponse(NoteSerializer(items, many=True).data, safe=False)
    note = services.create_note(user, json_body(request))
    return JsonResponse(NoteSerializer(note).data, status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@endpoint()
def note_detail(request, user, note_id: str):
    if request.method == 'GET':
        return JsonResponse(NoteSerializer(services.get_note(user, note_id)).data)
    if request.method == 'DELETE':
        services.delete_owned(Note, note_id, user, 'Note')
        return JsonResponse({"message": "Note deleted successfully"})
    note = services.update_note(user, note_id, json_body(request))
    return JsonResponse(NoteSerializer(note).data)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@endpoint()
def folders(request, user):
    if request.method == 'GET':
        items = services.list_folders(user)
        return JsonResponse(FolderSerializer(items, many=True).data, safe=False)
    folder = services.create_folder(user, json_body(request))
    return JsonResponse(FolderSerializer(folder).data, status=201)


# LeetCode

@csrf_exempt
@require_http_methods(["GET", "POST"])
@endpoint()
def leetcode(request, user):
    if request.method == 'GET':
        items = services.list_problems(user, request.GET)
        return JsonResponse(LeetcodeProblemSerializer(items, many=True).data, safe=False)
    problem = services.create_problem(user, json_body(request))
    return JsonResponse(LeetcodeProblemSerializer(problem).data, status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@endpoint()
def leetcode_detail(request, user, problem_id: str):
    if request.method == 'GET':
        problem = services.visit_problem(user, problem_id)
        return JsonResponse(LeetcodeProblemSerializer(problem).data)
    if request.method == 'DELETE':
        services.delete_owned(LeetcodeProblem, problem_id, user, 'Problem')
        return JsonResponse({"message": "Problem deleted successfully"})
    problem = services.update_problem(user, problem_id, json_body(request))
    return JsonResponse(LeetcodeProblemSerializer(problem).data)


@csrf_exempt
@require_http_methods(["POST"])
@endpoint()
def leetcode_extract(request, user):
    return JsonResponse(extract_problem(json_body(request).get('url')))


# ChatGPT bookmarks

@csrf_exempt
@require_http_methods(["GET", "POST"])
@endpoint()
def chatgpt(request, user):
    if request.method == 'GET':
        items = services.list_chats(user, request.GET)
        return JsonResponse(ChatgptChatSerializer(items, many=True).data, safe=False)
    chat = services.create_chat(user, json_body(request))
    return JsonResponse(ChatgptChatSerializer(chat).data, status=201)


@csrf_exempt
@require_http_methods(["PUT", "DELETE"])
@endpoint()
def chatgpt_detail(request, user, chat_id: str):
    if request.method == 'DELETE':
        services.delete_owned(ChatgptChat, chat_id, user, 'Chat')
        return JsonResponse({"message": "Chat deleted successfully"})
    chat = services.update_chat(user, chat_id, json_body(request))
    return JsonResponse(ChatgptChatSerializer(chat).data)


@require_http_methods(["GET"])
@endpoint()
def dashboard(request, user):
    return JsonResponse(summarize(user))
