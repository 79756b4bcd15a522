"""
Booking Repositories

The booking store: persistence of Booking aggregates plus queries by
specification with ordering and pagination.

- DjangoBookingRepository translates specifications into ``Q`` objects
  so filtering, sorting and slicing happen in the database.
- InMemoryBookingRepository evaluates the same specifications in
  Python; it backs the unit tests and any process without a database.
"""

from __future__ import annotations

import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from functools import singledispatch
from typing import Dict, List, Optional, Sequence

from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.domain.entities import Booking, BookingStatus
from apps.bookings.domain.specifications import (
    AndSpecification,
    BookedBy,
    EndsBefore,
    ForItem,
    HasId,
    HasStatus,
    MatchAll,
    NotSpecification,
    OrSpecification,
    Overlaps,
    OwnedBy,
    Spans,
    Specification,
    StartsAfter,
    StartsBefore,
)
from shared.domain.exceptions import NotFoundError
from shared.domain.value_objects import PageRequest

logger = logging.getLogger(__name__)

# Newest start first; id breaks ties so pages are stable.
DEFAULT_ORDERING: Sequence[str] = ("-start", "-id")
SORTABLE_FIELDS = ("id", "start", "end", "status", "item_id", "booker_id")


def _booking_not_found(booking_id: int) -> NotFoundError:
    return NotFoundError(
        f"Booking with id:{booking_id} not found", entity="booking", entity_id=booking_id
    )


class AbstractBookingRepository(ABC):

    @abstractmethod
    def save(self, booking: Booking) -> Booking:
        """Insert a new booking (assigning its id) or overwrite an existing one"""

    @abstractmethod
    def get_by_id(self, booking_id: int) -> Booking:
        """Return the booking or raise NotFoundError"""

    @abstractmethod
    def find(
        self,
        specification: Specification,
        ordering: Sequence[str] = DEFAULT_ORDERING,
        page: Optional[PageRequest] = None,
    ) -> List[Booking]:
        """Bookings satisfying the specification, sorted, optionally one page"""

    @abstractmethod
    def exists(self, specification: Specification) -> bool:
        pass

    @abstractmethod
    def update_status(
        self, booking_id: int, expected: BookingStatus, new: BookingStatus
    ) -> bool:
        """
        Compare-and-set the status

        Returns False when the stored status is no longer ``expected``.
        """

    def lock_item(self, item_id: int) -> None:
        """Serialize writers of one item's bookings (no-op by default)"""

    def first(
        self, specification: Specification, ordering: Sequence[str] = DEFAULT_ORDERING
    ) -> Optional[Booking]:
        found = self.find(specification, ordering, PageRequest(index=0, size=1))
        return found[0] if found else None


# ===== Django store =====

@singledispatch
def specification_to_q(specification: Specification) -> Q:
    raise TypeError(f"No ORM translation for {type(specification).__name__}")


@specification_to_q.register(AndSpecification)
def _(specification: AndSpecification) -> Q:
    return specification_to_q(specification.left) & specification_to_q(specification.right)


@specification_to_q.register(OrSpecification)
def _(specification: OrSpecification) -> Q:
    return specification_to_q(specification.left) | specification_to_q(specification.right)


@specification_to_q.register(NotSpecification)
def _(specification: NotSpecification) -> Q:
    return ~specification_to_q(specification.inner)


@specification_to_q.register(MatchAll)
def _(specification: MatchAll) -> Q:
    return Q()


@specification_to_q.register(HasId)
def _(specification: HasId) -> Q:
    return Q(pk=specification.booking_id)


@specification_to_q.register(BookedBy)
def _(specification: BookedBy) -> Q:
    return Q(booker_id=specification.booker_id)


@specification_to_q.register(OwnedBy)
def _(specification: OwnedBy) -> Q:
    return Q(item__owner_id=specification.owner_id)


@specification_to_q.register(ForItem)
def _(specification: ForItem) -> Q:
    return Q(item_id=specification.item_id)


@specification_to_q.register(HasStatus)
def _(specification: HasStatus) -> Q:
    return Q(status=specification.status.value)


@specification_to_q.register(StartsBefore)
def _(specification: StartsBefore) -> Q:
    return Q(start__lt=specification.instant)


@specification_to_q.register(StartsAfter)
def _(specification: StartsAfter) -> Q:
    return Q(start__gt=specification.instant)


@specification_to_q.register(EndsBefore)
def _(specification: EndsBefore) -> Q:
    return Q(end__lt=specification.instant)


@specification_to_q.register(Spans)
def _(specification: Spans) -> Q:
    return Q(start__lte=specification.instant) & Q(end__gte=specification.instant)


@specification_to_q.register(Overlaps)
def _(specification: Overlaps) -> Q:
    return Q(start__lt=specification.period.end) & Q(end__gt=specification.period.start)


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    return queryset.select_for_update()


def _orm_ordering(ordering: Sequence[str]) -> List[str]:
    fields = []
    for term in ordering:
        name = term.lstrip("-")
        if name not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot order bookings by {name!r}")
        fields.append(term)
    return fields


class DjangoBookingRepository(AbstractBookingRepository):
    """Booking store over the ``bookings_booking`` table."""

    def __init__(self):
        from apps.bookings.models import Booking as BookingModel

        self._model = BookingModel

    def _queryset(self):
        return self._model.objects.select_related("item")

    @staticmethod
    def _to_entity(row) -> Booking:
        return Booking(
            id=row.pk,
            item_id=row.item_id,
            booker_id=row.booker_id,
            owner_id=row.item.owner_id,
            start=row.start,
            end=row.end,
            status=BookingStatus(row.status),
            item_name=row.item.name,
        )

    def save(self, booking: Booking) -> Booking:
        if booking.id is None:
            row = self._model.objects.create(
                item_id=booking.item_id,
                booker_id=booking.booker_id,
                start=booking.start,
                end=booking.end,
                status=booking.status.value,
            )
            booking.id = row.pk
            logger.debug(f"Inserted booking {row.pk}")
            return booking

        updated = self._model.objects.filter(pk=booking.id).update(
            start=booking.start,
            end=booking.end,
            status=booking.status.value,
            updated_at=timezone.now(),
        )
        if not updated:
            raise _booking_not_found(booking.id)
        return booking

    def get_by_id(self, booking_id: int) -> Booking:
        try:
            row = self._queryset().get(pk=booking_id)
        except self._model.DoesNotExist:
            raise _booking_not_found(booking_id)
        return self._to_entity(row)

    def find(
        self,
        specification: Specification,
        ordering: Sequence[str] = DEFAULT_ORDERING,
        page: Optional[PageRequest] = None,
    ) -> List[Booking]:
        queryset = (
            self._queryset()
            .filter(specification_to_q(specification))
            .order_by(*_orm_ordering(ordering))
        )
        if page is not None:
            queryset = queryset[page.offset:page.offset + page.limit]
        return [self._to_entity(row) for row in queryset]

    def exists(self, specification: Specification) -> bool:
        return self._model.objects.filter(specification_to_q(specification)).exists()

    def update_status(
        self, booking_id: int, expected: BookingStatus, new: BookingStatus
    ) -> bool:
        updated = self._model.objects.filter(pk=booking_id, status=expected.value).update(
            status=new.value,
            updated_at=timezone.now(),
        )
        return updated == 1

    def lock_item(self, item_id: int) -> None:
        from apps.items.models import Item

        list(_lock_queryset_if_possible(Item.objects.filter(pk=item_id)).values_list("pk", flat=True))


# ===== In-memory store =====

def _sorted(bookings: List[Booking], ordering: Sequence[str]) -> List[Booking]:
    result = list(bookings)
    # Stable sorts applied from the least to the most significant key.
    for term in reversed(ordering):
        name = term.lstrip("-")
        if name not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot order bookings by {name!r}")

        def key(booking, name=name):
            value = getattr(booking, name)
            return value.value if isinstance(value, BookingStatus) else value

        result.sort(key=key, reverse=term.startswith("-"))
    return result


class InMemoryBookingRepository(AbstractBookingRepository):
    """Booking store kept in a dict; hands out copies, never stored instances."""

    def __init__(self):
        self._rows: Dict[int, Booking] = {}
        self._ids = itertools.count(1)

    def save(self, booking: Booking) -> Booking:
        if booking.id is None:
            booking.id = next(self._ids)
        elif booking.id not in self._rows:
            raise _booking_not_found(booking.id)
        self._rows[booking.id] = replace(booking)
        return booking

    def get_by_id(self, booking_id: int) -> Booking:
        try:
            return replace(self._rows[booking_id])
        except KeyError:
            raise _booking_not_found(booking_id)

    def find(
        self,
        specification: Specification,
        ordering: Sequence[str] = DEFAULT_ORDERING,
        page: Optional[PageRequest] = None,
    ) -> List[Booking]:
        matching = [b for b in self._rows.values() if specification.is_satisfied_by(b)]
        matching = _sorted(matching, ordering)
        if page is not None:
            matching = matching[page.offset:page.offset + page.limit]
        return [replace(b) for b in matching]

    def exists(self, specification: Specification) -> bool:
        return any(specification.is_satisfied_by(b) for b in self._rows.values())

    def update_status(
        self, booking_id: int, expected: BookingStatus, new: BookingStatus
    ) -> bool:
        stored = self._rows.get(booking_id)
        if stored is None or stored.status is not expected:
            return False
        self._rows[booking_id] = replace(stored, status=new)
        return True

    def __len__(self) -> int:
        return len(self._rows)
