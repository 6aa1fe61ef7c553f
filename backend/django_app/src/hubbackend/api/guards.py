import json
import logging
from functools import wraps

from django.http import JsonResponse
from rest_framework import serializers

from hubbackend.api.errors import ApiError, NotFound, Unauthenticated, ValidationFailed

logger = logging.getLogger(__name__)


def resolve_user(request):
    """Return the session's user, or None for anonymous callers."""
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return None
    return user


def get_owned(source, pk, user, label):
    """Fetch ``pk`` filtered by owner in a single query.

    A row that exists but belongs to someone else is reported exactly like
    a missing row.
    """
    queryset = source._default_manager.all() if isinstance(source, type) else source
    try:
        return queryset.get(pk=pk, user=user)
    except queryset.model.DoesNotExist:
        raise NotFound(f'{label} not found')


def json_body(request):
    if not request.body:
        return {}
    try:
        body = json.loads(request.body)
    except ValueError:
        raise ValidationFailed('Invalid JSON body')
    if not isinstance(body, dict):
        raise ValidationFailed('Invalid JSON body')
    return body


def first_error(detail):
    """Flatten DRF error detail into one message, naming the field."""
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = first_error(value)
            # list items are keyed by index; the parent field names them
            if isinstance(field, int):
                return message
            if field == 'non_field_errors' or field.lower() in message.lower():
                return message
            return f'{field}: {message}'
        return 'Invalid input'
    if isinstance(detail, (list, tuple)):
        return first_error(detail[0]) if detail else 'Invalid input'
    return str(detail)


def endpoint(public=False):
    """Decorate a view with session resolution and the error boundary.

    Non-public views receive the resolved user as their second positional
    argument; anonymous callers get a 401 before the view runs.
    """
    def decorator(view):
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            try:
                if public:
                    return view(request, *args, **kwargs)
                user = resolve_user(request)
                if user is None:
                    raise Unauthenticated()
                return view(request, user, *args, **kwargs)
            except ApiError as e:
                return JsonResponse({"error": e.message}, status=e.status)
            except serializers.ValidationError as e:
                return JsonResponse({"error": first_error(e.detail)}, status=400)
            except Exception:
                logger.exception("%s %s failed", request.method, request.path)
                return JsonResponse({"error": "Internal server error"}, status=500)
        return wrapper
    return decorator
