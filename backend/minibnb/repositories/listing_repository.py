# backend/minibnb/repositories/listing_repository.py
"""
Listing Repository for the MiniBnB platform.

Search queries for the public catalogue plus co-host lookups used by
permission checks.
"""

from datetime import date
import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException
from ..models.booking import Booking
from ..models.listing import CoHost, Listing
from ..utils.date_ranges import overlap_clause
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ListingRepository(BaseRepository[Listing]):
    """Data access for listings and their co-hosts."""

    def __init__(self, db: Session):
        super().__init__(db, Listing)

    def search(
        self,
        *,
        city: Optional[str] = None,
        min_price: Optional[int] = None,
        max_price: Optional[int] = None,
        guests: Optional[int] = None,
        host_id: Optional[str] = None,
        q: Optional[str] = None,
        property_type: Optional[str] = None,
        property_types: Optional[Sequence[str]] = None,
        min_bedrooms: Optional[int] = None,
        min_beds: Optional[int] = None,
        min_bathrooms: Optional[float] = None,
        min_rating: Optional[float] = None,
        available_from: Optional[date] = None,
        available_to: Optional[date] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Listing], int]:
        """
        Search active listings.

        When both available_from and available_to are given, listings with a
        booking overlapping that closed range are excluded.

        Returns:
            (page of listings, total matching count)
        """
        try:
            query: Query = self.db.query(Listing).filter(Listing.is_active.is_(True))

            if city:
                query = query.filter(Listing.city.ilike(f"%{city}%"))
            if min_price is not None:
                query = query.filter(Listing.price >= min_price)
            if max_price is not None:
                query = query.filter(Listing.price <= max_price)
            if guests is not None:
                query = query.filter(Listing.max_guests >= guests)
            if host_id:
                query = query.filter(Listing.host_id == host_id)
            if q:
                query = query.filter(
                    or_(Listing.name.ilike(f"%{q}%"), Listing.description.ilike(f"%{q}%"))
                )
            if property_type:
                query = query.filter(Listing.property_type == property_type)
            if property_types:
                query = query.filter(Listing.property_type.in_(list(property_types)))
            if min_bedrooms is not None:
                query = query.filter(Listing.bedrooms >= min_bedrooms)
            if min_beds is not None:
                query = query.filter(Listing.beds >= min_beds)
            if min_bathrooms is not None:
                query = query.filter(Listing.bathrooms >= min_bathrooms)
            if min_rating is not None:
                query = query.filter(Listing.review_scores_value >= min_rating)

            if available_from is not None and available_to is not None:
                busy_listing_ids = select(Booking.listing_id).where(
                    overlap_clause(
                        Booking.check_in, Booking.check_out, available_from, available_to
                    )
                )
                query = query.filter(Listing.id.not_in(busy_listing_ids))

            total = query.count()
            items = query.order_by(Listing.id).offset(offset).limit(limit).all()
            return items, total
        except SQLAlchemyError as e:
            self.logger.error(f"Error searching listings: {str(e)}")
            raise RepositoryException(f"Failed to search listings: {str(e)}")

    def get_co_host(self, listing_id: int, profile_id: str) -> Optional[CoHost]:
        """Co-host grant for a profile on a listing, if any."""
        try:
            return (
                self.db.query(CoHost)
                .filter(CoHost.listing_id == listing_id, CoHost.co_host_id == profile_id)
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading co-host for listing {listing_id}: {str(e)}")
            raise RepositoryException(f"Failed to load co-host: {str(e)}")

    def add_co_host(self, **kwargs: object) -> CoHost:
        try:
            co_host = CoHost(**kwargs)
            self.db.add(co_host)
            self.db.flush()
            return co_host
        except SQLAlchemyError as e:
            self.logger.error(f"Error adding co-host: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to add co-host: {str(e)}")

    def get_co_host_by_id(self, co_host_id: int) -> Optional[CoHost]:
        try:
            return self.db.get(CoHost, co_host_id)
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading co-host {co_host_id}: {str(e)}")
            raise RepositoryException(f"Failed to load co-host: {str(e)}")

    def delete_co_host(self, co_host: CoHost) -> None:
        try:
            self.db.delete(co_host)
            self.db.flush()
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting co-host {co_host.id}: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to delete co-host: {str(e)}")
