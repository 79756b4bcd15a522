"""
Booking States

Query-time categories used to filter booking lists. Unlike the entity
status, a state may be time based (CURRENT, PAST, FUTURE) and is
evaluated against "now" supplied by a clock.
"""

from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Union

from apps.bookings.domain.entities import BookingStatus
from apps.bookings.domain.specifications import (
    EndsBefore,
    HasStatus,
    MatchAll,
    Spans,
    Specification,
    StartsAfter,
)
from shared.domain.exceptions import ConflictError, ValidationError


class BookingState(Enum):
    ALL = 'ALL'
    CURRENT = 'CURRENT'
    PAST = 'PAST'
    FUTURE = 'FUTURE'
    WAITING = 'WAITING'
    REJECTED = 'REJECTED'

    @classmethod
    def parse(cls, value: Union[str, 'BookingState']) -> 'BookingState':
        """Resolve a state name; names are case-sensitive"""
        if isinstance(value, cls):
            return value
        try:
            return cls[value]
        except (KeyError, TypeError):
            raise ValidationError(f"Unknown state: {value}")

    def specification(self, now: datetime) -> Specification:
        builder = _STATE_SPECIFICATIONS.get(self)
        if builder is None:
            raise ConflictError(f"Unsupported state: {self.value}")
        return builder(now)


_STATE_SPECIFICATIONS: Dict[BookingState, Callable[[datetime], Specification]] = {
    BookingState.ALL: lambda now: MatchAll(),
    BookingState.CURRENT: lambda now: Spans(now),
    BookingState.PAST: lambda now: EndsBefore(now),
    BookingState.FUTURE: lambda now: StartsAfter(now),
    BookingState.WAITING: lambda now: HasStatus(BookingStatus.WAITING),
    BookingState.REJECTED: lambda now: HasStatus(BookingStatus.REJECTED),
}
