"""Booking query engine tests: visibility, state filters, ordering, pages."""

from __future__ import annotations

from datetime import timedelta

import pytest

from apps.bookings.application.queries import BookingQueryService
from apps.bookings.domain.entities import Booking, BookingStatus
from apps.bookings.domain.states import BookingState
from shared.domain.exceptions import NotFoundError, ValidationError
from shared.domain.value_objects import PageRequest, TimeRange

OWNER, BOOKER, STRANGER, ITEM = 1, 2, 3, 10


@pytest.fixture
def queries(booking_repo, users, clock):
    return BookingQueryService(booking_repo, users, clock)


@pytest.fixture
def store(booking_repo, now):
    def add(start_hours, end_hours, status=BookingStatus.WAITING, booker=BOOKER, owner=OWNER, item=ITEM):
        booking = Booking.create(
            item_id=item,
            booker_id=booker,
            owner_id=owner,
            period=TimeRange(now + timedelta(hours=start_hours), now + timedelta(hours=end_hours)),
        )
        booking.status = status
        return booking_repo.save(booking)

    return add


@pytest.fixture
def scenario(store):
    """Past approved, current waiting and future rejected bookings of one item."""
    return {
        "past": store(-5, -3, BookingStatus.APPROVED),
        "current": store(-1, 1, BookingStatus.WAITING),
        "future": store(3, 5, BookingStatus.REJECTED),
    }


def ids(bookings):
    return [b.id for b in bookings]


class TestGetBooking:

    def test_booker_and_owner_see_booking(self, queries, store):
        booking = store(1, 2)
        assert queries.get_booking(BOOKER, booking.id).id == booking.id
        assert queries.get_booking(OWNER, booking.id).owner_id == OWNER

    def test_stranger_is_told_it_does_not_exist(self, queries, store):
        booking = store(1, 2)
        with pytest.raises(NotFoundError, match="can only be requested by owner of item"):
            queries.get_booking(STRANGER, booking.id)

    def test_unknown_booking(self, queries):
        with pytest.raises(NotFoundError, match="Booking with id:5 not found"):
            queries.get_booking(BOOKER, 5)

    def test_unknown_caller(self, queries, store):
        booking = store(1, 2)
        with pytest.raises(NotFoundError, match="User with id:77 not found"):
            queries.get_booking(77, booking.id)


class TestListByState:

    @pytest.mark.parametrize(
        "state,expected",
        [
            ("ALL", ["future", "current", "past"]),
            ("CURRENT", ["current"]),
            ("PAST", ["past"]),
            ("FUTURE", ["future"]),
            ("WAITING", ["current"]),
            ("REJECTED", ["future"]),
        ],
    )
    def test_booker_lists(self, queries, scenario, state, expected):
        found = queries.list_for_booker(BOOKER, state, PageRequest(0, 10))
        assert ids(found) == [scenario[name].id for name in expected]

    @pytest.mark.parametrize("state", [s.value for s in BookingState])
    def test_owner_sees_the_same_bookings(self, queries, scenario, state):
        assert ids(queries.list_for_owner(OWNER, state)) == ids(queries.list_for_booker(BOOKER, state))

    def test_other_users_see_nothing(self, queries, scenario):
        assert queries.list_for_booker(STRANGER, "ALL") == []
        assert queries.list_for_owner(BOOKER, "ALL") == []

    def test_owner_only_sees_own_items(self, queries, store):
        mine = store(1, 2)
        store(1, 2, owner=STRANGER, item=11)
        assert ids(queries.list_for_owner(OWNER, "ALL")) == [mine.id]

    def test_unknown_state(self, queries):
        with pytest.raises(ValidationError, match="Unknown state: UNSUPPORTED_STATUS"):
            queries.list_for_booker(BOOKER, "UNSUPPORTED_STATUS")

    def test_unknown_user(self, queries):
        with pytest.raises(NotFoundError, match="User with id:77 not found"):
            queries.list_for_owner(77, "ALL")

    def test_states_follow_the_clock(self, queries, scenario, clock):
        clock.advance(timedelta(hours=10))
        assert ids(queries.list_for_booker(BOOKER, "PAST")) == ids(queries.list_for_booker(BOOKER, "ALL"))
        assert queries.list_for_booker(BOOKER, "CURRENT") == []


class TestOrderingAndPages:

    def test_sorted_by_start_descending(self, queries, store):
        for start in (4, 1, 9, 6):
            store(start, start + 1)
        starts = [b.start for b in queries.list_for_booker(BOOKER, "ALL")]
        assert starts == sorted(starts, reverse=True)

    def test_equal_starts_are_ordered_by_id_descending(self, queries, store):
        first, second = store(1, 2), store(1, 3)
        assert ids(queries.list_for_booker(BOOKER, "ALL")) == [second.id, first.id]

    def test_pagination(self, queries, store):
        for start in range(5):
            store(start, start + 1)
        all_ids = ids(queries.list_for_booker(BOOKER, "ALL"))

        assert ids(queries.list_for_booker(BOOKER, "ALL", PageRequest(0, 2))) == all_ids[:2]
        assert ids(queries.list_for_booker(BOOKER, "ALL", PageRequest(2, 2))) == all_ids[4:]
        assert queries.list_for_booker(BOOKER, "ALL", PageRequest(3, 2)) == []
