"""
Unit of Work Pattern

Manages database transactions and ensures that domain events
are published only after successful transaction commit.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
import logging

from django.db import transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    def __init__(self, bus=None):
        self._events: List[DomainEvent] = []
        self._bus = bus

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        """Commit the transaction"""
        pass

    def rollback(self):
        """Rollback changes and discard events"""
        if self._events:
            logger.warning(f"Rolling back unit of work, discarding {len(self._events)} events")
        self._events.clear()

    def collect_events(self, aggregate):
        """
        Collect events from aggregate root

        Extracts all domain events from the aggregate and
        clears them from the aggregate.
        """
        new_events = aggregate.events
        if new_events:
            self._events.extend(new_events)
            aggregate.clear_events()
            logger.debug(
                f"Collected {len(new_events)} events from "
                f"{aggregate.__class__.__name__} (ID: {aggregate.id})"
            )

    def _publish_events(self, events: List[DomainEvent]):
        """Hand collected events to the message bus"""
        bus = self._bus
        if bus is None:
            from shared.application.message_bus import message_bus as bus

        logger.info(f"Publishing {len(events)} domain events after commit")
        bus.publish_events(events)


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Unit of Work over ``transaction.atomic()``

    Collected events are handed to the bus from ``transaction.on_commit``,
    so subscribers never see a change that was rolled back.

    Usage:
        with DjangoUnitOfWork() as uow:
            booking = booking_repo.get_by_id(booking_id)
            previous = booking.decide(owner_id, approve=True)
            booking_repo.update_status(booking.id, previous, booking.status)
            uow.collect_events(booking)
    """

    def __init__(self, bus=None):
        super().__init__(bus)
        self._transaction: Optional[transaction.Atomic] = None

    def __enter__(self):
        self._transaction = transaction.atomic()
        self._transaction.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            super().__exit__(exc_type, exc_val, exc_tb)
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)

    def commit(self):
        """Schedule publishing of the collected events for after the commit"""
        events = self._events.copy()
        self._events.clear()
        logger.debug(f"Committing unit of work with {len(events)} events")

        if events:
            transaction.on_commit(lambda: self._publish_events(events))


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """
    Unit of Work for in-memory repositories

    There is no transaction to wait for, so events are published
    as soon as the block exits cleanly.
    """

    def __init__(self, bus=None):
        super().__init__(bus)
        self.committed = False

    def commit(self):
        events = self._events.copy()
        self._events.clear()
        self.committed = True
        if events:
            self._publish_events(events)
