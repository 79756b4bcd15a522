"""Composition root: builds the services and wires command handlers to the bus.

``bootstrap()`` runs once from ``BookingsConfig.ready()``. Tests call it
again with their own clock or stores; the latest wiring replaces the
previous one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from django.conf import settings  # type: ignore

from apps.bookings.application.command_handlers import (
    CreateBookingCommand,
    CreateBookingHandler,
    SetApprovalCommand,
    SetApprovalHandler,
)
from apps.bookings.application.event_handlers import register_event_handlers
from apps.bookings.application.queries import BookingQueryService
from apps.bookings.repositories import AbstractBookingRepository, DjangoBookingRepository
from apps.items.repositories import AbstractCommentRepository, DjangoCommentRepository
from apps.items.services import (
    CreateCommentCommand,
    CreateCommentHandler,
    ItemAvailabilityView,
    ItemQueryService,
)
from shared.application.message_bus import MessageBus, message_bus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.clock import Clock, SystemClock
from shared.domain.directories import ItemDirectory, UserDirectory

logger = logging.getLogger(__name__)


@dataclass
class Services:
    booking_queries: BookingQueryService
    item_queries: ItemQueryService


_services: Optional[Services] = None


def bootstrap(
    bus: MessageBus = message_bus,
    *,
    clock: Optional[Clock] = None,
    booking_repo: Optional[AbstractBookingRepository] = None,
    comment_repo: Optional[AbstractCommentRepository] = None,
    user_directory: Optional[UserDirectory] = None,
    item_directory: Optional[ItemDirectory] = None,
    uow_factory=DjangoUnitOfWork,
    prevent_overlap: Optional[bool] = None,
) -> Services:
    """Create the services, register handlers on ``bus`` and return them."""

    global _services

    from apps.items.directory import DjangoItemDirectory
    from apps.users.directory import DjangoUserDirectory

    clock = clock or SystemClock()
    booking_repo = booking_repo or DjangoBookingRepository()
    comment_repo = comment_repo or DjangoCommentRepository()
    user_directory = user_directory or DjangoUserDirectory()
    item_directory = item_directory or DjangoItemDirectory()
    if prevent_overlap is None:
        prevent_overlap = settings.SHAREIT["PREVENT_OVERLAP"]

    availability = ItemAvailabilityView(booking_repo, comment_repo, clock)

    bus.register_command_handler(
        CreateBookingCommand,
        CreateBookingHandler(
            booking_repo,
            user_directory,
            item_directory,
            uow_factory=uow_factory,
            prevent_overlap=prevent_overlap,
        ),
        replace=True,
    )
    bus.register_command_handler(
        SetApprovalCommand,
        SetApprovalHandler(booking_repo, uow_factory=uow_factory, prevent_overlap=prevent_overlap),
        replace=True,
    )
    bus.register_command_handler(
        CreateCommentCommand,
        CreateCommentHandler(comment_repo, user_directory, item_directory, availability, clock),
        replace=True,
    )
    register_event_handlers(bus)

    _services = Services(
        booking_queries=BookingQueryService(booking_repo, user_directory, clock),
        item_queries=ItemQueryService(user_directory, item_directory, availability),
    )
    logger.debug(f"Wired handlers (overlap prevention: {prevent_overlap})")
    return _services


def services() -> Services:
    """The services of the latest ``bootstrap()`` call."""

    if _services is None:
        return bootstrap()
    return _services
