"""Comment storage for the item views."""

from __future__ import annotations

import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommentRecord:
    """A stored comment with its author's display name"""

    id: int
    item_id: int
    author_id: int
    author_name: str
    text: str
    created: datetime


class AbstractCommentRepository(ABC):

    @abstractmethod
    def list_for_item(self, item_id: int) -> List[CommentRecord]:
        """Comments of the item, oldest first"""

    @abstractmethod
    def add(
        self, item_id: int, author_id: int, author_name: str, text: str, created: datetime
    ) -> CommentRecord:
        pass


class DjangoCommentRepository(AbstractCommentRepository):
    """Comments in the ``items_comment`` table."""

    def __init__(self):
        from .models import Comment

        self._model = Comment

    @staticmethod
    def _to_record(row) -> CommentRecord:
        return CommentRecord(
            id=row.pk,
            item_id=row.item_id,
            author_id=row.author_id,
            author_name=row.author.name,
            text=row.text,
            created=row.created,
        )

    def list_for_item(self, item_id: int) -> List[CommentRecord]:
        queryset = (
            self._model.objects.select_related("author")
            .filter(item_id=item_id)
            .order_by("created", "id")
        )
        return [self._to_record(row) for row in queryset]

    def add(
        self, item_id: int, author_id: int, author_name: str, text: str, created: datetime
    ) -> CommentRecord:
        row = self._model.objects.create(
            item_id=item_id, author_id=author_id, text=text, created=created
        )
        logger.debug(f"Inserted comment {row.pk}")
        return CommentRecord(
            id=row.pk,
            item_id=item_id,
            author_id=author_id,
            author_name=author_name,
            text=text,
            created=created,
        )


class InMemoryCommentRepository(AbstractCommentRepository):

    def __init__(self):
        self._rows: Dict[int, CommentRecord] = {}
        self._ids = itertools.count(1)

    def list_for_item(self, item_id: int) -> List[CommentRecord]:
        found = [c for c in self._rows.values() if c.item_id == item_id]
        return sorted(found, key=lambda c: (c.created, c.id))

    def add(
        self, item_id: int, author_id: int, author_name: str, text: str, created: datetime
    ) -> CommentRecord:
        record = CommentRecord(
            id=next(self._ids),
            item_id=item_id,
            author_id=author_id,
            author_name=author_name,
            text=text,
            created=created,
        )
        self._rows[record.id] = record
        return record
