"""Translate domain errors into REST responses."""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import ConflictError, DomainError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
)


def domain_exception_handler(exc, context):  # type: ignore
    """DRF exception handler that knows about ``DomainError``.

    Domain errors are rendered as ``{"error": message}``; anything else is
    delegated to the stock DRF handler.
    """

    if not isinstance(exc, DomainError):
        return exception_handler(exc, context)

    response_status = status.HTTP_400_BAD_REQUEST
    for error_class, mapped_status in STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            response_status = mapped_status
            break

    view = context.get("view")
    logger.warning(
        "Domain error in %s: %s",
        view.__class__.__name__ if view is not None else "unknown view",
        exc.message,
        extra={"entity": exc.entity, "entity_id": exc.entity_id},
    )
    return Response({"error": exc.message}, status=response_status)
