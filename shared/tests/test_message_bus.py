"""Message bus and unit of work behaviour."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from shared.application.message_bus import MessageBus
from shared.application.uow import InMemoryUnitOfWork
from shared.domain.base import Aggregate, DomainEvent


@dataclass(frozen=True)
class Happened(DomainEvent):
    what: str


@dataclass(eq=False)
class Thing(Aggregate):
    id: int = 1


@dataclass(frozen=True)
class DoIt:
    value: int


def test_command_is_routed_to_its_handler():
    bus = MessageBus()
    bus.register_command_handler(DoIt, lambda command: command.value * 2)

    assert bus.handle_command(DoIt(21)) == 42


def test_second_handler_needs_replace():
    bus = MessageBus()
    bus.register_command_handler(DoIt, lambda command: 1)

    with pytest.raises(ValueError):
        bus.register_command_handler(DoIt, lambda command: 2)

    bus.register_command_handler(DoIt, lambda command: 2, replace=True)
    assert bus.handle_command(DoIt(0)) == 2


def test_unregistered_command():
    with pytest.raises(LookupError):
        MessageBus().handle_command(DoIt(1))


def test_failing_subscriber_does_not_stop_others():
    bus = MessageBus()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    bus.register_event_handler(Happened, broken)
    bus.register_event_handler(Happened, received.append)
    bus.publish_events([Happened("x")])

    assert [e.what for e in received] == ["x"]


def test_unit_of_work_publishes_on_clean_exit():
    bus = MessageBus()
    received = []
    bus.register_event_handler(Happened, received.append)
    thing = Thing()
    thing.add_event(Happened("done"))

    with InMemoryUnitOfWork(bus) as uow:
        uow.collect_events(thing)

    assert uow.committed
    assert thing.events == []
    assert [e.what for e in received] == ["done"]


def test_unit_of_work_discards_events_on_error():
    bus = MessageBus()
    received = []
    bus.register_event_handler(Happened, received.append)
    thing = Thing()
    thing.add_event(Happened("lost"))

    with pytest.raises(RuntimeError):
        with InMemoryUnitOfWork(bus) as uow:
            uow.collect_events(thing)
            raise RuntimeError("abort")

    assert not uow.committed
    assert received == []
