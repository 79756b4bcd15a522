"""Unit tests for the booking aggregate, time ranges and state filters."""

from __future__ import annotations

from datetime import timedelta

import pytest

from apps.bookings.domain.entities import Booking, BookingStatus
from apps.bookings.domain.events import BookingApproved, BookingCreated, BookingRejected
from apps.bookings.domain.specifications import (
    BookedBy,
    HasStatus,
    Overlaps,
    Spans,
    completed_rental,
    last_booking_of,
    next_booking_of,
)
from apps.bookings.domain.states import BookingState
from shared.domain.exceptions import NotFoundError, ValidationError
from shared.domain.value_objects import PageRequest, TimeRange

OWNER, BOOKER, STRANGER, ITEM = 1, 2, 3, 10


def make_booking(now, start_offset, end_offset, status=BookingStatus.WAITING, booking_id=1):
    booking = Booking.create(
        item_id=ITEM,
        booker_id=BOOKER,
        owner_id=OWNER,
        period=TimeRange(now + timedelta(hours=start_offset), now + timedelta(hours=end_offset)),
    )
    booking.id = booking_id
    booking.status = status
    return booking


class TestTimeRange:

    def test_start_after_end_is_rejected(self, now):
        with pytest.raises(ValidationError, match="Start time cannot be later than end time"):
            TimeRange(now, now - timedelta(hours=1))

    def test_start_equal_to_end_is_rejected(self, now):
        with pytest.raises(ValidationError, match="Start time cannot be equal to end time"):
            TimeRange(now, now)

    def test_adjacent_ranges_do_not_overlap(self, now):
        first = TimeRange(now, now + timedelta(hours=2))
        second = TimeRange(now + timedelta(hours=2), now + timedelta(hours=3))
        assert not first.overlaps_with(second)
        assert first.overlaps_with(TimeRange(now + timedelta(hours=1), now + timedelta(hours=3)))

    def test_contains_is_inclusive(self, now):
        period = TimeRange(now, now + timedelta(hours=1))
        assert period.contains(now)
        assert period.contains(now + timedelta(hours=1))
        assert not period.contains(now + timedelta(hours=2))


class TestPageRequest:

    def test_from_offset_computes_page_index(self):
        page = PageRequest.from_offset(20, 10)
        assert (page.index, page.offset, page.limit) == (2, 20, 10)

    def test_offset_inside_a_page_rounds_down(self):
        assert PageRequest.from_offset(15, 10).index == 1

    @pytest.mark.parametrize("offset,size", [(-1, 10), (0, 0), (0, -5)])
    def test_invalid_values_are_rejected(self, offset, size):
        with pytest.raises(ValidationError):
            PageRequest.from_offset(offset, size)


class TestBookingDecision:

    def test_new_booking_is_waiting(self, now):
        booking = Booking.create(ITEM, BOOKER, OWNER, TimeRange(now, now + timedelta(days=1)))
        assert booking.status is BookingStatus.WAITING
        assert booking.start < booking.end

    def test_owner_approves(self, now):
        booking = make_booking(now, 1, 2)
        previous = booking.decide(OWNER, approve=True)

        assert previous is BookingStatus.WAITING
        assert booking.status is BookingStatus.APPROVED
        [event] = booking.events
        assert isinstance(event, BookingApproved)
        assert (event.booking_id, event.owner_id, event.aggregate_id) == (1, OWNER, 1)

    def test_owner_rejects(self, now):
        booking = make_booking(now, 1, 2)
        booking.decide(OWNER, approve=False)

        assert booking.status is BookingStatus.REJECTED
        assert isinstance(booking.events[0], BookingRejected)

    @pytest.mark.parametrize("status", list(BookingStatus))
    @pytest.mark.parametrize("approve", [True, False])
    def test_booker_is_told_booking_does_not_exist(self, now, status, approve):
        booking = make_booking(now, 1, 2, status=status)
        with pytest.raises(NotFoundError, match="Booker with id:2 cannot change his own booking with id:1."):
            booking.decide(BOOKER, approve)
        assert booking.status is status
        assert booking.events == []

    def test_stranger_cannot_decide(self, now):
        booking = make_booking(now, 1, 2)
        with pytest.raises(ValidationError, match="User with id:3 isn't owner of item with id:10."):
            booking.decide(STRANGER, True)

    @pytest.mark.parametrize("status", [BookingStatus.APPROVED, BookingStatus.REJECTED])
    def test_terminal_states_are_final(self, now, status):
        booking = make_booking(now, 1, 2, status=status)
        with pytest.raises(ValidationError, match="Booking with id:1 not waiting for approval"):
            booking.decide(OWNER, True)
        assert booking.status is status
        assert booking.events == []

    def test_creation_event_carries_period(self, now):
        booking = make_booking(now, 1, 2)
        booking.record_creation()
        [event] = booking.events
        assert isinstance(event, BookingCreated)
        assert event.period == booking.period
        assert event.to_dict()["event_type"] == "BookingCreated"
        assert event.to_dict()["aggregate_id"] == 1

    def test_visibility(self, now):
        booking = make_booking(now, 1, 2)
        assert booking.is_visible_to(OWNER)
        assert booking.is_visible_to(BOOKER)
        assert not booking.is_visible_to(STRANGER)


class TestBookingState:

    def test_parse_is_case_sensitive(self):
        assert BookingState.parse("PAST") is BookingState.PAST
        with pytest.raises(ValidationError, match="Unknown state: past"):
            BookingState.parse("past")

    def test_unknown_state(self):
        with pytest.raises(ValidationError, match="Unknown state: UNSUPPORTED_STATUS"):
            BookingState.parse("UNSUPPORTED_STATUS")

    def test_time_states_partition_non_overlapping_bookings(self, now):
        past = make_booking(now, -5, -3, booking_id=1)
        current = make_booking(now, -1, 1, booking_id=2)
        future = make_booking(now, 3, 5, booking_id=3)

        def matching(state):
            spec = BookingState[state].specification(now)
            return [b.id for b in (past, current, future) if spec.is_satisfied_by(b)]

        assert matching("PAST") == [1]
        assert matching("CURRENT") == [2]
        assert matching("FUTURE") == [3]
        assert matching("ALL") == [1, 2, 3]

    def test_current_includes_both_boundaries(self, now):
        spec = BookingState.CURRENT.specification(now)
        assert spec.is_satisfied_by(make_booking(now, 0, 1))
        assert spec.is_satisfied_by(make_booking(now, -1, 0))

    def test_status_states(self, now):
        waiting = make_booking(now, 1, 2)
        rejected = make_booking(now, 1, 2, status=BookingStatus.REJECTED)
        assert BookingState.WAITING.specification(now).is_satisfied_by(waiting)
        assert not BookingState.WAITING.specification(now).is_satisfied_by(rejected)
        assert BookingState.REJECTED.specification(now).is_satisfied_by(rejected)


class TestSpecifications:

    def test_composition(self, now):
        booking = make_booking(now, 1, 2, status=BookingStatus.APPROVED)
        assert (BookedBy(BOOKER) & HasStatus(BookingStatus.APPROVED)).is_satisfied_by(booking)
        assert (BookedBy(STRANGER) | HasStatus(BookingStatus.APPROVED)).is_satisfied_by(booking)
        assert not (~BookedBy(BOOKER)).is_satisfied_by(booking)

    def test_overlap_is_half_open(self, now):
        booking = make_booking(now, 0, 2)
        assert Overlaps(TimeRange(now + timedelta(hours=1), now + timedelta(hours=3))).is_satisfied_by(booking)
        assert not Overlaps(TimeRange(now + timedelta(hours=2), now + timedelta(hours=3))).is_satisfied_by(booking)

    def test_spans_includes_both_ends(self, now):
        booking = make_booking(now, 0, 2)
        assert Spans(now).is_satisfied_by(booking)
        assert Spans(now + timedelta(hours=2)).is_satisfied_by(booking)
        assert not Spans(now + timedelta(hours=3)).is_satisfied_by(booking)

    def test_last_booking_excludes_rejected_only(self, now):
        spec = last_booking_of(ITEM, now)
        assert spec.is_satisfied_by(make_booking(now, -2, -1, status=BookingStatus.WAITING))
        assert spec.is_satisfied_by(make_booking(now, -2, -1, status=BookingStatus.APPROVED))
        assert not spec.is_satisfied_by(make_booking(now, -2, -1, status=BookingStatus.REJECTED))

    def test_next_booking_requires_approval(self, now):
        spec = next_booking_of(ITEM, now)
        assert spec.is_satisfied_by(make_booking(now, 1, 2, status=BookingStatus.APPROVED))
        assert not spec.is_satisfied_by(make_booking(now, 1, 2, status=BookingStatus.WAITING))

    def test_completed_rental(self, now):
        spec = completed_rental(BOOKER, ITEM, now)
        assert spec.is_satisfied_by(make_booking(now, -3, -1, status=BookingStatus.APPROVED))
        assert not spec.is_satisfied_by(make_booking(now, -3, 1, status=BookingStatus.APPROVED))
        assert not spec.is_satisfied_by(make_booking(now, -3, -1, status=BookingStatus.WAITING))
