"""
Domain Exceptions

Three error kinds surface from the domain layer:
- NotFoundError: referenced entity is absent, or the caller may not see it
- ValidationError: a business rule rejected the request
- ConflictError: the request reached a state the domain cannot map

The interface layer translates them into HTTP responses.
"""

from typing import Optional


class DomainError(Exception):
    """Base class for errors raised by domain and application code."""

    def __init__(
        self,
        message: str,
        *,
        entity: Optional[str] = None,
        entity_id: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.entity = entity
        self.entity_id = entity_id

    def __str__(self):
        return self.message


class NotFoundError(DomainError):
    """Entity is absent or hidden from the caller."""


class ValidationError(DomainError):
    """Request violates a business rule."""


class ConflictError(DomainError):
    """Request reached a state the domain has no mapping for."""
