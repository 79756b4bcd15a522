"""
Booking Event Handlers

Subscribers to booking domain events. Notification delivery is out of
scope, so the handlers only leave an audit trail in the logs.
"""

import logging

from apps.bookings.domain.events import BookingApproved, BookingCreated, BookingRejected

logger = logging.getLogger(__name__)


def log_booking_created(event: BookingCreated) -> None:
    logger.info(
        "Booking %s requested: item %s by user %s for %s",
        event.booking_id,
        event.item_id,
        event.booker_id,
        event.period,
    )


def log_booking_decided(event) -> None:
    decision = "approved" if isinstance(event, BookingApproved) else "rejected"
    logger.info(
        "Booking %s %s by owner %s (item %s)",
        event.booking_id,
        decision,
        event.owner_id,
        event.item_id,
    )


def register_event_handlers(bus) -> None:
    bus.register_event_handler(BookingCreated, log_booking_created)
    bus.register_event_handler(BookingApproved, log_booking_decided)
    bus.register_event_handler(BookingRejected, log_booking_decided)
