"""
Booking Command Handlers

These are the use cases that change bookings.
They orchestrate domain operations within a unit of work.

Commands:
- CreateBookingCommand: A user requests an item for a period
- SetApprovalCommand: The item owner approves or rejects a booking
"""

from dataclasses import dataclass
from datetime import datetime
import logging

from shared.application.uow import DjangoUnitOfWork
from shared.domain.directories import ItemDirectory, UserDirectory
from shared.domain.exceptions import NotFoundError, ValidationError
from shared.domain.value_objects import TimeRange
from apps.bookings.domain.entities import Booking
from apps.bookings.domain.specifications import HasId, approved_overlapping
from apps.bookings.repositories import AbstractBookingRepository

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass(frozen=True)
class CreateBookingCommand:
    """Command to create a new booking; the booker id comes from the caller"""
    booker_id: int
    item_id: int
    start: datetime
    end: datetime


@dataclass(frozen=True)
class SetApprovalCommand:
    """Command to approve (approved=True) or reject a WAITING booking"""
    acting_user_id: int
    booking_id: int
    approved: bool


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    Checks, in order, each with its own failure:
    1. Item exists (NotFound)
    2. Booker exists (NotFound)
    3. Item is available (Validation)
    4. Booker is not the owner (NotFound)
    5. start < end (Validation)
    6. No approved booking of the item overlaps, if overlap
       prevention is on (Validation)

    The stored record is re-read after saving and returned.
    """

    def __init__(
        self,
        booking_repo: AbstractBookingRepository,
        user_directory: UserDirectory,
        item_directory: ItemDirectory,
        uow_factory=DjangoUnitOfWork,
        prevent_overlap: bool = True,
    ):
        self.booking_repo = booking_repo
        self.user_directory = user_directory
        self.item_directory = item_directory
        self.uow_factory = uow_factory
        self.prevent_overlap = prevent_overlap

    def __call__(self, command: CreateBookingCommand) -> Booking:
        return self.handle(command)

    def handle(self, command: CreateBookingCommand) -> Booking:
        logger.info(
            f"Creating booking of item {command.item_id} for user {command.booker_id}, "
            f"period {command.start} - {command.end}"
        )

        item = self.item_directory.find_item(command.item_id)
        booker = self.user_directory.find_user(command.booker_id)

        if not item.available:
            raise ValidationError(
                f"Item with id:{item.id} isn't available", entity='item', entity_id=item.id
            )

        if booker.id == item.owner_id:
            raise NotFoundError(
                f"Owner with id:{booker.id} cannot book his item with id:{item.id}.",
                entity='item',
                entity_id=item.id,
            )

        period = TimeRange(command.start, command.end)

        with self.uow_factory() as uow:
            if self.prevent_overlap:
                self.booking_repo.lock_item(item.id)
                if self.booking_repo.exists(approved_overlapping(item.id, period)):
                    raise ValidationError(
                        f"Item with id:{item.id} is already booked for {period}",
                        entity='item',
                        entity_id=item.id,
                    )

            booking = Booking.create(
                item_id=item.id,
                booker_id=booker.id,
                owner_id=item.owner_id,
                period=period,
                item_name=item.name,
            )
            self.booking_repo.save(booking)
            booking.record_creation()
            uow.collect_events(booking)

        stored = self.booking_repo.get_by_id(booking.id)
        logger.info(f"Created booking with id:{stored.id}")
        return stored


class SetApprovalHandler:
    """
    Handler for SetApproval command

    The status change is a compare-and-set on WAITING, so of two racing
    decisions only the first one wins; the loser gets the same
    "not waiting for approval" error as a late caller.
    """

    def __init__(
        self,
        booking_repo: AbstractBookingRepository,
        uow_factory=DjangoUnitOfWork,
        prevent_overlap: bool = True,
    ):
        self.booking_repo = booking_repo
        self.uow_factory = uow_factory
        self.prevent_overlap = prevent_overlap

    def __call__(self, command: SetApprovalCommand) -> Booking:
        return self.handle(command)

    def handle(self, command: SetApprovalCommand) -> Booking:
        decision = 'Approving' if command.approved else 'Rejecting'
        logger.info(f"{decision} booking {command.booking_id} by user {command.acting_user_id}")

        with self.uow_factory() as uow:
            booking = self.booking_repo.get_by_id(command.booking_id)
            previous = booking.decide(command.acting_user_id, command.approved)

            if command.approved and self.prevent_overlap:
                self.booking_repo.lock_item(booking.item_id)
                clashing = approved_overlapping(booking.item_id, booking.period) & ~HasId(booking.id)
                if self.booking_repo.exists(clashing):
                    raise ValidationError(
                        f"Item with id:{booking.item_id} is already booked for {booking.period}",
                        entity='item',
                        entity_id=booking.item_id,
                    )

            if not self.booking_repo.update_status(booking.id, previous, booking.status):
                raise ValidationError(
                    f"Booking with id:{booking.id} not waiting for approval",
                    entity='booking',
                    entity_id=booking.id,
                )
            uow.collect_events(booking)

        logger.info(f"Updated booking with id:{booking.id} to {booking.status.value}")
        return self.booking_repo.get_by_id(booking.id)
