"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass

from shared.domain.base import DomainEvent
from shared.domain.value_objects import TimeRange


@dataclass(frozen=True)
class BookingCreated(DomainEvent):
    """Event: A booker requested an item for a period (new WAITING booking)"""
    booking_id: int
    item_id: int
    booker_id: int
    period: TimeRange


@dataclass(frozen=True)
class BookingApproved(DomainEvent):
    """Event: The owner approved a booking (WAITING -> APPROVED)"""
    booking_id: int
    item_id: int
    owner_id: int


@dataclass(frozen=True)
class BookingRejected(DomainEvent):
    """Event: The owner rejected a booking (WAITING -> REJECTED)"""
    booking_id: int
    item_id: int
    owner_id: int
