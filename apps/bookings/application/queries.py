"""
Booking Queries

Read side of the booking domain: a single booking for one of its two
parties, and booking lists of a booker or of an owner filtered by state.
"""

from typing import List, Union
import logging

from shared.domain.clock import Clock
from shared.domain.directories import UserDirectory
from shared.domain.exceptions import NotFoundError
from shared.domain.value_objects import PageRequest
from apps.bookings.domain.entities import Booking
from apps.bookings.domain.specifications import BookedBy, OwnedBy, Specification
from apps.bookings.domain.states import BookingState
from apps.bookings.repositories import DEFAULT_ORDERING, AbstractBookingRepository

logger = logging.getLogger(__name__)


class BookingQueryService:

    def __init__(
        self,
        booking_repo: AbstractBookingRepository,
        user_directory: UserDirectory,
        clock: Clock,
    ):
        self.booking_repo = booking_repo
        self.user_directory = user_directory
        self.clock = clock

    def get_booking(self, caller_id: int, booking_id: int) -> Booking:
        """
        Return a booking to its booker or to the item owner

        Anyone else is told the booking does not exist.
        """
        booking = self.booking_repo.get_by_id(booking_id)
        self.user_directory.find_user(caller_id)
        if not booking.is_visible_to(caller_id):
            raise NotFoundError(
                f"Booking with id:{booking.id} information can only be requested by owner "
                f"of item, or user who created booking.",
                entity='booking',
                entity_id=booking.id,
            )
        logger.info(f"Getting booking with id:{booking_id} for user with id:{caller_id}")
        return booking

    def list_for_booker(
        self,
        booker_id: int,
        state: Union[str, BookingState] = BookingState.ALL,
        page: PageRequest = PageRequest(),
    ) -> List[Booking]:
        """Bookings made by the user, newest start first"""
        return self._list(booker_id, BookedBy(booker_id), state, page)

    def list_for_owner(
        self,
        owner_id: int,
        state: Union[str, BookingState] = BookingState.ALL,
        page: PageRequest = PageRequest(),
    ) -> List[Booking]:
        """Bookings of items owned by the user, newest start first"""
        return self._list(owner_id, OwnedBy(owner_id), state, page)

    def _list(
        self,
        user_id: int,
        party: Specification,
        state: Union[str, BookingState],
        page: PageRequest,
    ) -> List[Booking]:
        booking_state = BookingState.parse(state)
        self.user_directory.find_user(user_id)
        specification = party & booking_state.specification(self.clock.now())
        bookings = self.booking_repo.find(specification, DEFAULT_ORDERING, page)
        logger.info(
            f"Found {len(bookings)} bookings for user {user_id}, "
            f"state {booking_state.value}, page {page.index}/{page.size}"
        )
        return bookings
