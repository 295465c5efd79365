# backend/minibnb/services/availability_service.py
"""
Availability Service for the MiniBnB platform.

Reports which closed periods of a listing are already booked within a
query range. The overlap test is shared with ConflictChecker through
utils.date_ranges, so a range reported free here is never rejected at
booking time and vice versa.
"""

from datetime import date
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.constants import DEFAULT_AVAILABILITY_MONTHS
from ..core.exceptions import NotFoundException, RepositoryException
from ..repositories import RepositoryFactory
from ..repositories.booking_repository import BookingRepository
from ..repositories.listing_repository import ListingRepository
from ..utils.date_ranges import add_months, periods_overlap, utc_today
from .base import BaseService

logger = logging.getLogger(__name__)


class AvailabilityService(BaseService):
    """Booked-period reporting for a listing."""

    def __init__(
        self,
        db: Session,
        listing_repository: Optional[ListingRepository] = None,
        booking_repository: Optional[BookingRepository] = None,
    ):
        super().__init__(db)
        self.listing_repository = (
            listing_repository or RepositoryFactory.create_listing_repository(db)
        )
        self.booking_repository = (
            booking_repository or RepositoryFactory.create_booking_repository(db)
        )

    @staticmethod
    def resolve_range(
        start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> tuple[date, date]:
        """Apply the default window: today (UTC) through start + 3 months."""
        start = start_date or utc_today()
        end = end_date or add_months(start, DEFAULT_AVAILABILITY_MONTHS)
        return start, end

    @BaseService.measure_operation("get_availability")
    def get_availability(
        self,
        listing_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Dict[str, Any]:
        """
        Booked periods of a listing overlapping [start_date, end_date].

        Args:
            listing_id: Listing to report on
            start_date: First day of the range, defaults to today (UTC)
            end_date: Last day of the range, defaults to start_date + 3 months

        Returns:
            Dict with listing_id, is_active, booked_periods and query_range

        Raises:
            NotFoundException: If the listing is absent or could not be loaded
        """
        start, end = self.resolve_range(start_date, end_date)

        try:
            listing = self.listing_repository.get_by_id(listing_id)
        except RepositoryException as exc:
            self.logger.warning(f"Listing lookup failed for availability of {listing_id}: {exc}")
            listing = None
        if listing is None:
            raise NotFoundException("Listing not found")

        bookings = self.booking_repository.get_periods_for_listing(listing_id) or []

        booked_periods: List[Dict[str, str]] = [
            {
                "check_in": booking.check_in.isoformat(),
                "check_out": booking.check_out.isoformat(),
            }
            for booking in bookings
            if periods_overlap(booking.check_in, booking.check_out, start, end)
        ]

        return {
            "listing_id": listing.id,
            "is_active": bool(listing.is_active),
            "booked_periods": booked_periods,
            "query_range": {
                "start_date": start.isoformat(),
                "end_date": end.isoformat(),
            },
        }
