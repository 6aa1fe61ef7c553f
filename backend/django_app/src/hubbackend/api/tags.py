import logging

from django.db import transaction
from rest_framework import serializers

from hubbackend.api.models import Tag

logger = logging.getLogger(__name__)

_tag_names_field = serializers.ListField(
    child=serializers.CharField(max_length=100, allow_blank=True, trim_whitespace=True),
    allow_empty=True,
)


def clean_tag_names(raw):
    """Validate a ``tags`` payload into a list of distinct non-blank names.

    Order of first occurrence is kept. Names are case-sensitive.
    """
    if raw is None:
        return []
    try:
        names = _tag_names_field.run_validation(raw)
    except serializers.ValidationError as e:
        raise serializers.ValidationError({'tags': e.detail})
    return list(dict.fromkeys(name for name in names if name))


def normalize_tags(user, entity, names):
    """Point ``entity.tags`` at exactly the caller's tags named ``names``.

    Missing tags are created for ``user``; existing ones are reused. The
    previous association is replaced, never merged, and tags that end up
    unused are left in place.
    """
    with transaction.atomic():
        tags = []
        for name in names:
            tag, created = Tag.objects.get_or_create(user=user, name=name)
            if created:
                logger.debug("created tag %s for user %s", tag.pk, user.pk)
            tags.append(tag)
        entity.tags.set(tags)
    return tags
