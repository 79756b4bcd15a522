"""
Booking Domain Entities

Core business entities for the booking domain:
- Booking: Main aggregate representing a reservation of an item
- BookingStatus: FSM states for booking lifecycle
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from shared.domain.base import Aggregate
from shared.domain.exceptions import NotFoundError, ValidationError
from shared.domain.value_objects import TimeRange


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions:
    - WAITING -> APPROVED (owner approved)
    - WAITING -> REJECTED (owner rejected)

    APPROVED and REJECTED are terminal.
    """
    WAITING = 'WAITING'
    APPROVED = 'APPROVED'
    REJECTED = 'REJECTED'

    @property
    def is_terminal(self) -> bool:
        return self is not BookingStatus.WAITING


@dataclass(eq=False)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    Represents a user's reservation of an item for a time interval.

    Key invariants:
    - start < end (enforced by TimeRange on creation)
    - A new booking is always WAITING
    - Only the item owner moves a booking out of WAITING, exactly once

    ``owner_id`` is resolved through the item when the booking is loaded;
    it is not stored on the booking itself.
    """

    item_id: int
    booker_id: int
    owner_id: int
    start: datetime
    end: datetime
    status: BookingStatus = BookingStatus.WAITING
    id: Optional[int] = None
    item_name: str = ''

    @classmethod
    def create(
        cls,
        item_id: int,
        booker_id: int,
        owner_id: int,
        period: TimeRange,
        item_name: str = '',
    ) -> 'Booking':
        """Create a new WAITING booking for the given period"""
        return cls(
            item_id=item_id,
            booker_id=booker_id,
            owner_id=owner_id,
            start=period.start,
            end=period.end,
            status=BookingStatus.WAITING,
            item_name=item_name,
        )

    @property
    def period(self) -> TimeRange:
        return TimeRange(self.start, self.end)

    def is_visible_to(self, user_id: int) -> bool:
        """Only the booker and the item owner may see a booking"""
        return user_id in (self.booker_id, self.owner_id)

    def decide(self, acting_user_id: int, approve: bool) -> BookingStatus:
        """
        Approve or reject (WAITING -> APPROVED | REJECTED)

        The booker is told the booking does not exist rather than that
        they lack the right to decide on it.
        Events: BookingApproved or BookingRejected
        """
        if acting_user_id == self.booker_id:
            raise NotFoundError(
                f"Booker with id:{acting_user_id} cannot change his own booking with id:{self.id}.",
                entity='booking',
                entity_id=self.id,
            )
        if acting_user_id != self.owner_id:
            raise ValidationError(
                f"User with id:{acting_user_id} isn't owner of item with id:{self.item_id}.",
                entity='item',
                entity_id=self.item_id,
            )
        if self.status is not BookingStatus.WAITING:
            raise ValidationError(
                f"Booking with id:{self.id} not waiting for approval",
                entity='booking',
                entity_id=self.id,
            )

        from apps.bookings.domain.events import BookingApproved, BookingRejected

        previous = self.status
        self.status = BookingStatus.APPROVED if approve else BookingStatus.REJECTED
        event_class = BookingApproved if approve else BookingRejected
        self.add_event(event_class(
            self.id,
            self.item_id,
            acting_user_id,
            aggregate_id=self.id,
        ))
        return previous

    def record_creation(self):
        """Emit BookingCreated once the store has assigned an id"""
        from apps.bookings.domain.events import BookingCreated

        self.add_event(BookingCreated(
            self.id,
            self.item_id,
            self.booker_id,
            self.period,
            aggregate_id=self.id,
        ))

    def __str__(self):
        return f"Booking #{self.id} of item {self.item_id} ({self.status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, item_id={self.item_id}, booker_id={self.booker_id}, "
            f"status={self.status.value}, start={self.start!r}, end={self.end!r})"
        )
