"""
Booking Specifications

Composable predicates over a booking's (item, booker, owner, start, end,
status). Each specification can be evaluated in memory with
``is_satisfied_by`` or translated into an ORM filter by the repository,
so the same rule serves both the in-memory and the Django store.

Specifications combine with ``&``, ``|`` and ``~``:

    BookedBy(user_id) & EndsBefore(now) & HasStatus(BookingStatus.APPROVED)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from apps.bookings.domain.entities import Booking, BookingStatus
from shared.domain.value_objects import TimeRange


class Specification(ABC):

    @abstractmethod
    def is_satisfied_by(self, booking: Booking) -> bool:
        pass

    def __and__(self, other: 'Specification') -> 'Specification':
        return AndSpecification(self, other)

    def __or__(self, other: 'Specification') -> 'Specification':
        return OrSpecification(self, other)

    def __invert__(self) -> 'Specification':
        return NotSpecification(self)


@dataclass(frozen=True)
class AndSpecification(Specification):
    left: Specification
    right: Specification

    def is_satisfied_by(self, booking: Booking) -> bool:
        return self.left.is_satisfied_by(booking) and self.right.is_satisfied_by(booking)


@dataclass(frozen=True)
class OrSpecification(Specification):
    left: Specification
    right: Specification

    def is_satisfied_by(self, booking: Booking) -> bool:
        return self.left.is_satisfied_by(booking) or self.right.is_satisfied_by(booking)


@dataclass(frozen=True)
class NotSpecification(Specification):
    inner: Specification

    def is_satisfied_by(self, booking: Booking) -> bool:
        return not self.inner.is_satisfied_by(booking)


@dataclass(frozen=True)
class MatchAll(Specification):

    def is_satisfied_by(self, booking: Booking) -> bool:
        return True


@dataclass(frozen=True)
class HasId(Specification):
    booking_id: int

    def is_satisfied_by(self, booking: Booking) -> bool:
        return booking.id == self.booking_id


@dataclass(frozen=True)
class BookedBy(Specification):
    booker_id: int

    def is_satisfied_by(self, booking: Booking) -> bool:
        return booking.booker_id == self.booker_id


@dataclass(frozen=True)
class OwnedBy(Specification):
    """Booking of an item owned by the user"""
    owner_id: int

    def is_satisfied_by(self, booking: Booking) -> bool:
        return booking.owner_id == self.owner_id


@dataclass(frozen=True)
class ForItem(Specification):
    item_id: int

    def is_satisfied_by(self, booking: Booking) -> bool:
        return booking.item_id == self.item_id


@dataclass(frozen=True)
class HasStatus(Specification):
    status: BookingStatus

    def is_satisfied_by(self, booking: Booking) -> bool:
        return booking.status is self.status


@dataclass(frozen=True)
class StartsBefore(Specification):
    instant: datetime

    def is_satisfied_by(self, booking: Booking) -> bool:
        return booking.start < self.instant


@dataclass(frozen=True)
class StartsAfter(Specification):
    instant: datetime

    def is_satisfied_by(self, booking: Booking) -> bool:
        return booking.start > self.instant


@dataclass(frozen=True)
class EndsBefore(Specification):
    instant: datetime

    def is_satisfied_by(self, booking: Booking) -> bool:
        return booking.end < self.instant


@dataclass(frozen=True)
class Spans(Specification):
    """start <= instant <= end"""
    instant: datetime

    def is_satisfied_by(self, booking: Booking) -> bool:
        return booking.period.contains(self.instant)


@dataclass(frozen=True)
class Overlaps(Specification):
    """Half-open overlap with a period: start < period.end and end > period.start"""
    period: TimeRange

    def is_satisfied_by(self, booking: Booking) -> bool:
        return booking.period.overlaps_with(self.period)


# ===== Named rules used by the application layer =====

def last_booking_of(item_id: int, now: datetime) -> Specification:
    """Candidates for the item's last booking: started before now, not rejected"""
    return ForItem(item_id) & StartsBefore(now) & ~HasStatus(BookingStatus.REJECTED)


def next_booking_of(item_id: int, now: datetime) -> Specification:
    """Candidates for the item's next booking: approved and starting after now"""
    return ForItem(item_id) & StartsAfter(now) & HasStatus(BookingStatus.APPROVED)


def completed_rental(booker_id: int, item_id: int, now: datetime) -> Specification:
    """An approved booking of the item by the booker that has already ended"""
    return (
        BookedBy(booker_id)
        & ForItem(item_id)
        & HasStatus(BookingStatus.APPROVED)
        & EndsBefore(now)
    )


def approved_overlapping(item_id: int, period: TimeRange) -> Specification:
    """Approved bookings of the item that would collide with the period"""
    return ForItem(item_id) & HasStatus(BookingStatus.APPROVED) & Overlaps(period)
