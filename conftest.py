"""Shared fixtures: in-memory directories and stores, a fixed clock."""

from __future__ import annotations

from datetime import datetime, timezone as dt_timezone
from typing import Dict, List

import pytest

from shared.domain.clock import FixedClock
from shared.domain.directories import ItemDirectory, ItemRef, UserDirectory, UserRef
from shared.domain.exceptions import NotFoundError

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=dt_timezone.utc)


class InMemoryUserDirectory(UserDirectory):

    def __init__(self):
        self.users: Dict[int, UserRef] = {}

    def add(self, user_id: int, name: str = "") -> UserRef:
        user = UserRef(id=user_id, name=name or f"user{user_id}")
        self.users[user_id] = user
        return user

    def find_user(self, user_id: int) -> UserRef:
        try:
            return self.users[user_id]
        except KeyError:
            raise NotFoundError(f"User with id:{user_id} not found", entity="user", entity_id=user_id)


class InMemoryItemDirectory(ItemDirectory):

    def __init__(self):
        self.items: Dict[int, ItemRef] = {}

    def add(self, item_id: int, owner_id: int, available: bool = True, name: str = "") -> ItemRef:
        item = ItemRef(id=item_id, owner_id=owner_id, available=available, name=name or f"item{item_id}")
        self.items[item_id] = item
        return item

    def find_item(self, item_id: int) -> ItemRef:
        try:
            return self.items[item_id]
        except KeyError:
            raise NotFoundError(f"Item with id:{item_id} not found", entity="item", entity_id=item_id)

    def items_of_owner(self, owner_id: int, offset: int, limit: int) -> List[ItemRef]:
        owned = sorted((i for i in self.items.values() if i.owner_id == owner_id), key=lambda i: i.id)
        return owned[offset:offset + limit]


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def users():
    directory = InMemoryUserDirectory()
    for user_id in (1, 2, 3):
        directory.add(user_id)
    return directory


@pytest.fixture
def items(users):
    directory = InMemoryItemDirectory()
    directory.add(10, owner_id=1, name="Drill")
    return directory


@pytest.fixture
def booking_repo():
    from apps.bookings.repositories import InMemoryBookingRepository

    return InMemoryBookingRepository()


@pytest.fixture
def comment_repo():
    from apps.items.repositories import InMemoryCommentRepository

    return InMemoryCommentRepository()


@pytest.fixture
def bus():
    from shared.application.message_bus import MessageBus

    return MessageBus()


@pytest.fixture
def uow_factory(bus):
    from shared.application.uow import InMemoryUnitOfWork

    return lambda: InMemoryUnitOfWork(bus)


@pytest.fixture
def now():
    return NOW
