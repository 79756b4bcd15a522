"""Wiring done by ``config.bootstrap``."""

from __future__ import annotations

from datetime import timedelta

import pytest

import config.bootstrap
from apps.bookings.application.command_handlers import CreateBookingCommand, SetApprovalCommand
from apps.bookings.domain.entities import BookingStatus
from apps.items.services import CreateCommentCommand


@pytest.fixture
def wired(monkeypatch, bus, clock, booking_repo, comment_repo, users, items, uow_factory):
    monkeypatch.setattr(config.bootstrap, "_services", None)
    return config.bootstrap.bootstrap(
        bus,
        clock=clock,
        booking_repo=booking_repo,
        comment_repo=comment_repo,
        user_directory=users,
        item_directory=items,
        uow_factory=uow_factory,
        prevent_overlap=True,
    )


def test_commands_reach_handlers_on_the_given_bus(wired, bus, now):
    booking = bus.handle_command(
        CreateBookingCommand(
            booker_id=2, item_id=10, start=now + timedelta(hours=1), end=now + timedelta(hours=2)
        )
    )
    bus.handle_command(SetApprovalCommand(1, booking.id, True))

    assert wired.booking_queries.get_booking(2, booking.id).status is BookingStatus.APPROVED
    assert config.bootstrap.services() is wired


def test_every_command_has_a_handler(wired, bus):
    with pytest.raises(LookupError):
        bus.handle_command(object())
    for command_type in (CreateBookingCommand, SetApprovalCommand, CreateCommentCommand):
        assert command_type in bus._command_handlers


def test_bootstrapping_again_replaces_the_wiring(wired, bus, clock, booking_repo, comment_repo, users, items):
    rewired = config.bootstrap.bootstrap(
        bus,
        clock=clock,
        booking_repo=booking_repo,
        comment_repo=comment_repo,
        user_directory=users,
        item_directory=items,
        prevent_overlap=False,
    )

    assert rewired is not wired
    assert config.bootstrap.services() is rewired
