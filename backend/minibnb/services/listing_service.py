# backend/minibnb/services/listing_service.py
"""
Listing Service for the MiniBnB platform.

Catalogue search, listing CRUD with host/co-host permissions, and co-host
grants.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.exceptions import ForbiddenException, NotFoundException
from ..models.listing import CoHost, Listing
from ..repositories import RepositoryFactory
from ..repositories.listing_repository import ListingRepository
from ..repositories.profile_repository import ProfileRepository
from ..schemas.listing import CoHostCreate, ListingCreate, ListingFilters, ListingUpdate
from .base import BaseService

logger = logging.getLogger(__name__)


class ListingService(BaseService):
    """Service layer for listings."""

    def __init__(
        self,
        db: Session,
        repository: Optional[ListingRepository] = None,
        profile_repository: Optional[ProfileRepository] = None,
    ):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_listing_repository(db)
        self.profile_repository = (
            profile_repository or RepositoryFactory.create_profile_repository(db)
        )

    @BaseService.measure_operation("search_listings")
    def get_all(
        self, filters: ListingFilters, page: int = 1, limit: int = 10
    ) -> Tuple[List[Listing], int]:
        """Active listings matching the filters, one page at a time."""
        available_from = available_to = None
        if filters.check_in and filters.check_out:
            available_from, available_to = filters.check_in, filters.check_out

        return self.repository.search(
            city=filters.city,
            min_price=filters.min_price,
            max_price=filters.max_price,
            guests=filters.guests,
            host_id=filters.host_id,
            q=filters.q,
            property_type=filters.property_type,
            property_types=filters.property_types,
            min_bedrooms=filters.min_bedrooms,
            min_beds=filters.min_beds,
            min_bathrooms=filters.min_bathrooms,
            min_rating=filters.min_rating,
            available_from=available_from,
            available_to=available_to,
            offset=(page - 1) * limit,
            limit=limit,
        )

    @BaseService.measure_operation("get_listing")
    def get_by_id(self, listing_id: int) -> Listing:
        listing = self.repository.get_by_id(listing_id)
        if not listing:
            raise NotFoundException("Listing not found")
        return listing

    @BaseService.measure_operation("create_listing")
    def create_listing(self, host_id: str, listing_data: ListingCreate) -> Listing:
        """
        Create a listing owned by the caller.

        Raises:
            ForbiddenException: If the caller's profile is not a host
        """
        profile = self.profile_repository.get_by_id(host_id)
        if not profile or not profile.is_host:
            raise ForbiddenException("Only hosts can create listings")

        with self.transaction():
            listing = self.repository.create(
                host_id=host_id,
                host_name=f"{profile.first_name} {profile.last_name}".strip(),
                **listing_data.model_dump(),
            )

        self.logger.info(f"Listing {listing.id} created by host {host_id}")
        return listing

    @BaseService.measure_operation("update_listing")
    def update_listing(
        self, listing_id: int, user_id: str, update_data: ListingUpdate
    ) -> Listing:
        """
        Partially update a listing.

        Allowed for the host and for co-hosts granted can_edit_listing.
        """
        listing = self.get_by_id(listing_id)
        if not self._can_edit(listing, user_id):
            raise ForbiddenException("You do not have permission to edit this listing")

        with self.transaction():
            changes = update_data.model_dump(exclude_unset=True, exclude_none=True)
            updated = self.repository.update(listing.id, **changes)

        return updated or listing

    @BaseService.measure_operation("delete_listing")
    def delete_listing(self, listing_id: int, user_id: str) -> None:
        listing = self.get_by_id(listing_id)
        if listing.host_id != user_id:
            raise ForbiddenException("Only the host can delete the listing")

        with self.transaction():
            self.repository.delete(listing.id)

        self.logger.info(f"Listing {listing_id} deleted by host {user_id}")

    @BaseService.measure_operation("add_co_host")
    def add_co_host(self, listing_id: int, user_id: str, co_host_data: CoHostCreate) -> CoHost:
        """
        Grant a profile co-host permissions on a listing.

        Raises:
            NotFoundException: If the listing does not exist
            ForbiddenException: If the caller is not the listing's host
        """
        listing = self.get_by_id(listing_id)
        if listing.host_id != user_id:
            raise ForbiddenException("Only host can add co-hosts")

        with self.transaction():
            co_host = self.repository.add_co_host(
                listing_id=listing.id,
                host_id=user_id,
                **co_host_data.model_dump(include=set(CoHostCreate.model_fields)),
            )

        return co_host

    @BaseService.measure_operation("remove_co_host")
    def remove_co_host(self, co_host_id: int, user_id: str) -> None:
        """
        Revoke a co-host grant.

        Allowed for the listing's host and for the co-host giving up their own grant.
        """
        co_host = self.repository.get_co_host_by_id(co_host_id)
        if not co_host:
            raise NotFoundException("Co-host record not found")

        listing = self.repository.get_by_id(co_host.listing_id)
        host_id = listing.host_id if listing else None
        if user_id not in (host_id, co_host.co_host_id):
            raise ForbiddenException("You do not have permission to remove this co-host")

        with self.transaction():
            self.repository.delete_co_host(co_host)

    def _can_edit(self, listing: Listing, user_id: str) -> bool:
        if listing.host_id == user_id:
            return True
        co_host = self.repository.get_co_host(listing.id, user_id)
        return bool(co_host and co_host.can_edit_listing)
