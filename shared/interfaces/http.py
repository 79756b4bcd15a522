"""Request parsing shared by the booking and item viewsets."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework import serializers  # type: ignore

from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import PageRequest


def _shareit_setting(name: str):
    return settings.SHAREIT[name]


def caller_id(request) -> int:
    """Return the pre-resolved caller id carried in the user header."""

    header = _shareit_setting("USER_ID_HEADER")
    raw_value = request.headers.get(header)
    if raw_value is None:
        raise serializers.ValidationError({"error": f"Header {header} is required."})
    try:
        return int(raw_value)
    except (TypeError, ValueError):
        raise serializers.ValidationError({"error": f"Header {header} must be an integer."})


def _int_param(request, name: str, default: int) -> int:
    raw_value = request.query_params.get(name)
    if raw_value in (None, ""):
        return default
    try:
        return int(raw_value)
    except ValueError:
        raise serializers.ValidationError({"error": f"Parameter {name} must be an integer."})


def page_request(request) -> PageRequest:
    """Build a PageRequest from the ``from``/``size`` query parameters."""

    offset = _int_param(request, "from", 0)
    size = _int_param(request, "size", _shareit_setting("DEFAULT_PAGE_SIZE"))
    return PageRequest.from_offset(offset, size)


def bool_param(request, name: str) -> bool:
    """Parse a mandatory ``true``/``false`` query parameter."""

    raw_value = request.query_params.get(name)
    if raw_value is None:
        raise ValidationError(f"Parameter {name} is required")
    normalized = raw_value.strip().lower()
    if normalized in ("true", "1"):
        return True
    if normalized in ("false", "0"):
        return False
    raise ValidationError(f"Parameter {name} must be true or false")
