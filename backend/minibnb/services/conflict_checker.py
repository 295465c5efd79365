# backend/minibnb/services/conflict_checker.py
"""
Conflict Checker Service for the MiniBnB platform.

Detects bookings that overlap a requested stay. Stays are closed intervals:
a request checking in on the day another guest checks out conflicts.
"""

from datetime import date
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..repositories import RepositoryFactory
from ..repositories.booking_repository import BookingRepository
from ..utils.date_ranges import periods_overlap
from .base import BaseService

logger = logging.getLogger(__name__)


class ConflictChecker(BaseService):
    """
    Service for checking booking conflicts.

    Uses the same overlap predicate as AvailabilityService.
    """

    def __init__(self, db: Session, repository: Optional[BookingRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_booking_repository(db)

    @BaseService.measure_operation("find_conflicts")
    def find_conflicts(
        self,
        listing_id: int,
        check_in: date,
        check_out: date,
        exclude_booking_id: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Existing bookings of a listing overlapping [check_in, check_out].

        Returns:
            List of conflicts with booking id and dates
        """
        bookings = self.repository.get_periods_for_listing(listing_id) or []

        conflicts = [
            {
                "booking_id": booking.id,
                "check_in": booking.check_in.isoformat(),
                "check_out": booking.check_out.isoformat(),
            }
            for booking in bookings
            if booking.id != exclude_booking_id
            and periods_overlap(booking.check_in, booking.check_out, check_in, check_out)
        ]

        if conflicts:
            self.logger.info(
                f"Found {len(conflicts)} booking conflicts for listing {listing_id} "
                f"between {check_in} and {check_out}"
            )

        return conflicts

    @BaseService.measure_operation("has_conflict")
    def has_conflict(self, listing_id: int, check_in: date, check_out: date) -> bool:
        """Simplified boolean check for quick validation."""
        return len(self.find_conflicts(listing_id, check_in, check_out)) > 0
