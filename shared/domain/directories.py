"""
Directory Ports

Read-only lookups of users and items consumed by the booking core.
Users and items are owned by their own apps; the booking core only
needs these projections of them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from shared.domain.base import ValueObject


@dataclass(frozen=True)
class UserRef(ValueObject):
    """User projection: identity and display name"""
    id: int
    name: str = ''


@dataclass(frozen=True)
class ItemRef(ValueObject):
    """Item projection used for booking rules and item views"""
    id: int
    owner_id: int
    available: bool
    name: str = ''
    description: str = ''


class UserDirectory(ABC):

    @abstractmethod
    def find_user(self, user_id: int) -> UserRef:
        """Return the user or raise NotFoundError"""


class ItemDirectory(ABC):

    @abstractmethod
    def find_item(self, item_id: int) -> ItemRef:
        """Return the item or raise NotFoundError"""

    @abstractmethod
    def items_of_owner(self, owner_id: int, offset: int, limit: int) -> List[ItemRef]:
        """The owner's items ordered by id, one slice of them"""
