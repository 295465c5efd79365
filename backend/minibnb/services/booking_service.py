# backend/minibnb/services/booking_service.py
"""
Booking Service for the MiniBnB platform.

Handles booking creation (with the overlap guard), listing of a guest's or
a listing's bookings, and guest cancellation. Cache invalidation after a
write is awaited by the route layer once the service call has returned.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.exceptions import (
    BookingConflictException,
    ForbiddenException,
    GuestLimitExceededException,
    NotFoundException,
    ValidationException,
)
from ..models.booking import Booking
from ..repositories import RepositoryFactory
from ..repositories.booking_repository import BookingRepository
from ..repositories.listing_repository import ListingRepository
from ..schemas.booking import BookingCreate
from ..utils.date_ranges import nights_between
from .base import BaseService
from .conflict_checker import ConflictChecker

logger = logging.getLogger(__name__)


class BookingService(BaseService):
    """
    Service layer for booking operations.

    Centralizes booking business rules: listing state, guest limits,
    date conflicts and pricing.
    """

    def __init__(
        self,
        db: Session,
        conflict_checker: Optional[ConflictChecker] = None,
        repository: Optional[BookingRepository] = None,
        listing_repository: Optional[ListingRepository] = None,
    ):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_booking_repository(db)
        self.listing_repository = (
            listing_repository or RepositoryFactory.create_listing_repository(db)
        )
        self.conflict_checker = conflict_checker or ConflictChecker(db, self.repository)

    @BaseService.measure_operation("create_booking")
    def create_booking(self, guest_id: str, booking_data: BookingCreate) -> Booking:
        """
        Create a booking after validating the listing and the requested stay.

        Args:
            guest_id: Profile id of the guest making the booking
            booking_data: Listing, dates and guest count

        Returns:
            The persisted booking

        Raises:
            ValidationException: If the dates are not ordered
            NotFoundException: If the listing is missing or inactive
            GuestLimitExceededException: If guest_count exceeds max_guests
            BookingConflictException: If the stay overlaps an existing booking
        """
        if booking_data.check_out <= booking_data.check_in:
            raise ValidationException("check_out must be after check_in")

        listing = self.listing_repository.get_by_id(booking_data.listing_id)
        if not listing or not listing.is_active:
            raise NotFoundException("Listing not found or inactive")

        if booking_data.guest_count > listing.max_guests:
            raise GuestLimitExceededException(listing.max_guests, booking_data.guest_count)

        if self.conflict_checker.has_conflict(
            listing.id, booking_data.check_in, booking_data.check_out
        ):
            raise BookingConflictException(
                listing.id,
                booking_data.check_in.isoformat(),
                booking_data.check_out.isoformat(),
            )

        total_price = nights_between(booking_data.check_in, booking_data.check_out) * listing.price

        with self.transaction():
            booking = self.repository.create(
                listing_id=listing.id,
                guest_id=guest_id,
                check_in=booking_data.check_in,
                check_out=booking_data.check_out,
                guest_count=booking_data.guest_count,
                total_price=total_price,
            )

        self.logger.info(
            f"Booking {booking.id} created for listing {listing.id} "
            f"({booking.check_in}..{booking.check_out}, total {total_price})"
        )
        return booking

    @BaseService.measure_operation("get_bookings_for_guest")
    def get_bookings_for_guest(
        self, guest_id: str, page: int = 1, limit: int = 10
    ) -> Tuple[List[Booking], int]:
        """A guest's bookings, newest check-in first, with listings loaded."""
        return self.repository.get_for_guest(guest_id, offset=(page - 1) * limit, limit=limit)

    @BaseService.measure_operation("get_bookings_for_listing")
    def get_bookings_for_listing(
        self, listing_id: int, user_id: str, page: int = 1, limit: int = 10
    ) -> Tuple[List[Booking], int]:
        """
        A listing's bookings, visible to its host and co-hosts.

        Raises:
            ForbiddenException: If the user neither hosts nor co-hosts the listing
        """
        if not self._can_view_bookings(listing_id, user_id):
            raise ForbiddenException("You do not have permission to view bookings")
        return self.repository.get_for_listing(listing_id, offset=(page - 1) * limit, limit=limit)

    @BaseService.measure_operation("cancel_booking")
    def cancel_booking(self, booking_id: int, user_id: str) -> Booking:
        """
        Cancel (delete) a booking on behalf of its guest.

        Returns:
            The deleted booking, so callers know which listing to invalidate
        """
        booking = self.repository.get_by_id(booking_id)
        if not booking:
            raise NotFoundException("Booking not found")
        if booking.guest_id != user_id:
            raise ForbiddenException("You can only cancel your own bookings")

        with self.transaction():
            self.repository.delete(booking_id)

        self.logger.info(f"Booking {booking_id} cancelled by guest {user_id}")
        return booking

    def _can_view_bookings(self, listing_id: int, user_id: str) -> bool:
        listing = self.listing_repository.get_by_id(listing_id)
        if listing is not None and listing.host_id == user_id:
            return True
        return self.listing_repository.get_co_host(listing_id, user_id) is not None
