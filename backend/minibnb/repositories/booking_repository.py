# backend/minibnb/repositories/booking_repository.py
"""
Booking Repository for the MiniBnB platform.

Period queries return every booking of a listing; overlap filtering is left
to the service layer so availability reporting and the booking guard apply
one predicate.
"""

import logging
from typing import List, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.booking import Booking
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[Booking]):
    """Data access for bookings."""

    def __init__(self, db: Session):
        super().__init__(db, Booking)

    def get_periods_for_listing(self, listing_id: int) -> List[Booking]:
        """All bookings of a listing ordered by check-in."""
        try:
            return (
                self.db.query(Booking)
                .filter(Booking.listing_id == listing_id)
                .order_by(Booking.check_in, Booking.id)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading bookings for listing {listing_id}: {str(e)}")
            raise RepositoryException(f"Failed to fetch bookings: {str(e)}")

    def get_for_guest(self, guest_id: str, offset: int, limit: int) -> Tuple[List[Booking], int]:
        """A guest's bookings, newest check-in first, with the listing loaded."""
        try:
            query = self.db.query(Booking).filter(Booking.guest_id == guest_id)
            total = query.count()
            items = (
                query.options(joinedload(Booking.listing))
                .order_by(Booking.check_in.desc(), Booking.id.desc())
                .offset(offset)
                .limit(limit)
                .all()
            )
            return items, total
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading bookings for guest {guest_id}: {str(e)}")
            raise RepositoryException(f"Failed to fetch bookings: {str(e)}")

    def get_for_listing(
        self, listing_id: int, offset: int, limit: int
    ) -> Tuple[List[Booking], int]:
        """A listing's bookings, newest check-in first, with the guest loaded."""
        try:
            query = self.db.query(Booking).filter(Booking.listing_id == listing_id)
            total = query.count()
            items = (
                query.options(joinedload(Booking.guest))
                .order_by(Booking.check_in.desc(), Booking.id.desc())
                .offset(offset)
                .limit(limit)
                .all()
            )
            return items, total
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading bookings for listing {listing_id}: {str(e)}")
            raise RepositoryException(f"Failed to fetch bookings: {str(e)}")
