"""Item views enriched with booking data, and the comment workflow."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from apps.bookings.domain.entities import Booking
from apps.bookings.domain.specifications import (
    completed_rental,
    last_booking_of,
    next_booking_of,
)
from apps.bookings.repositories import AbstractBookingRepository
from shared.domain.clock import Clock
from shared.domain.directories import ItemDirectory, ItemRef, UserDirectory
from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import PageRequest

from .repositories import AbstractCommentRepository, CommentRecord

logger = logging.getLogger(__name__)

LAST_BOOKING_ORDERING = ("-start", "-id")
NEXT_BOOKING_ORDERING = ("start", "id")


@dataclass
class EnrichedItem:
    """Item as shown to a viewer: bookings only for the owner, comments for all."""

    id: int
    name: str
    description: str
    available: bool
    owner_id: int
    last_booking: Optional[Booking] = None
    next_booking: Optional[Booking] = None
    comments: List[CommentRecord] = field(default_factory=list)


class ItemAvailabilityView:
    """Derives last/next booking and comment eligibility for items."""

    def __init__(
        self,
        booking_repo: AbstractBookingRepository,
        comment_repo: AbstractCommentRepository,
        clock: Clock,
    ):
        self.booking_repo = booking_repo
        self.comment_repo = comment_repo
        self.clock = clock

    def enrich(self, item: ItemRef, viewer_id: int) -> EnrichedItem:
        last_booking = next_booking = None
        if viewer_id == item.owner_id:
            now = self.clock.now()
            last_booking = self.booking_repo.first(
                last_booking_of(item.id, now), LAST_BOOKING_ORDERING
            )
            next_booking = self.booking_repo.first(
                next_booking_of(item.id, now), NEXT_BOOKING_ORDERING
            )
        return EnrichedItem(
            id=item.id,
            name=item.name,
            description=item.description,
            available=item.available,
            owner_id=item.owner_id,
            last_booking=last_booking,
            next_booking=next_booking,
            comments=self.comment_repo.list_for_item(item.id),
        )

    def can_comment(self, booker_id: int, item_id: int, now: Optional[datetime] = None) -> bool:
        """True once the user has an approved booking of the item that has ended."""

        if now is None:
            now = self.clock.now()
        return self.booking_repo.exists(completed_rental(booker_id, item_id, now))


@dataclass(frozen=True)
class CreateCommentCommand:
    author_id: int
    item_id: int
    text: str


class CreateCommentHandler:
    """Adds a comment to an item once the author's rental of it is complete."""

    def __init__(
        self,
        comment_repo: AbstractCommentRepository,
        user_directory: UserDirectory,
        item_directory: ItemDirectory,
        availability: ItemAvailabilityView,
        clock: Clock,
    ):
        self.comment_repo = comment_repo
        self.user_directory = user_directory
        self.item_directory = item_directory
        self.availability = availability
        self.clock = clock

    def __call__(self, command: CreateCommentCommand) -> CommentRecord:
        return self.handle(command)

    def handle(self, command: CreateCommentCommand) -> CommentRecord:
        author = self.user_directory.find_user(command.author_id)
        item = self.item_directory.find_item(command.item_id)

        text = (command.text or "").strip()
        if not text:
            raise ValidationError("Comment text cannot be blank", entity="comment")

        now = self.clock.now()
        if not self.availability.can_comment(author.id, item.id, now):
            raise ValidationError(
                f"User with id:{author.id} didn't rent item with id:{item.id}, "
                f"or rent is still incomplete.",
                entity="item",
                entity_id=item.id,
            )

        comment = self.comment_repo.add(item.id, author.id, author.name, text, now)
        logger.info(f"Created comment with id:{comment.id}")
        return comment


class ItemQueryService:

    def __init__(
        self,
        user_directory: UserDirectory,
        item_directory: ItemDirectory,
        availability: ItemAvailabilityView,
    ):
        self.user_directory = user_directory
        self.item_directory = item_directory
        self.availability = availability

    def get_item(self, viewer_id: int, item_id: int) -> EnrichedItem:
        self.user_directory.find_user(viewer_id)
        logger.info(f"Getting item with id:{item_id}")
        item = self.item_directory.find_item(item_id)
        return self.availability.enrich(item, viewer_id)

    def list_owner_items(self, owner_id: int, page: PageRequest = PageRequest()) -> List[EnrichedItem]:
        self.user_directory.find_user(owner_id)
        items = self.item_directory.items_of_owner(owner_id, page.offset, page.limit)
        return [self.availability.enrich(item, owner_id) for item in items]
