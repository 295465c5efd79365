# backend/minibnb/routes/v1/listings.py
"""
Listing routes - API v1

Versioned listing endpoints under /api/v1/listings.
All business logic delegated to ListingService and BookingService.

Endpoints:
    GET / - Search active listings (cached 5 min)
    POST / - Create a listing (hosts only)
    GET /{listing_id} - Listing details (cached 1 h)
    PATCH /{listing_id} - Update a listing (host or editing co-host)
    DELETE /{listing_id} - Delete a listing (host only)
    GET /{listing_id}/bookings - Bookings of a listing (host or co-host)
    POST /{listing_id}/cohosts - Add a co-host (host only)

Every write invalidates the cached views it affects before responding.
"""

import asyncio
from datetime import date
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status
from pydantic import ValidationError

from ...api.dependencies import (
    get_booking_service,
    get_cache_service_dep,
    get_current_user,
    get_listing_service,
)
from ...auth import AuthenticatedUser
from ...core.config import settings
from ...core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ...core.exceptions import ValidationException
from ...middleware.response_cache import CachedRoute, cache_middleware
from ...schemas.base_responses import ApiResponse, MessageData, PaginationMeta, created, ok
from ...schemas.booking import ListingBookingResponse
from ...schemas.listing import (
    CoHostCreate,
    CoHostResponse,
    ListingCreate,
    ListingFilters,
    ListingResponse,
    ListingUpdate,
)
from ...services.booking_service import BookingService
from ...services.cache_service import CacheService
from ...services.listing_service import ListingService

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["listings-v1"], route_class=CachedRoute)


def get_listing_filters(
    city: Optional[str] = Query(None),
    min_price: Optional[int] = Query(None),
    max_price: Optional[int] = Query(None),
    guests: Optional[int] = Query(None),
    host_id: Optional[str] = Query(None),
    q: Optional[str] = Query(None, description="Search in name and description"),
    property_type: Optional[str] = Query(None),
    property_types: Optional[List[str]] = Query(None),
    min_bedrooms: Optional[int] = Query(None),
    min_beds: Optional[int] = Query(None),
    min_bathrooms: Optional[float] = Query(None),
    min_rating: Optional[float] = Query(None),
    check_in: Optional[date] = Query(None),
    check_out: Optional[date] = Query(None),
) -> ListingFilters:
    """Collect catalogue filters from the query string."""
    try:
        return ListingFilters(
            city=city,
            min_price=min_price,
            max_price=max_price,
            guests=guests,
            host_id=host_id,
            q=q,
            property_type=property_type,
            property_types=property_types,
            min_bedrooms=min_bedrooms,
            min_beds=min_beds,
            min_bathrooms=min_bathrooms,
            min_rating=min_rating,
            check_in=check_in,
            check_out=check_out,
        )
    except ValidationError as exc:
        raise ValidationException(
            "Invalid listing filters",
            code="VALIDATION_ERROR",
            details={"errors": exc.errors(include_url=False, include_context=False)},
        )


@router.get("", response_model=ApiResponse[List[ListingResponse]])
@cache_middleware(settings.listings_cache_ttl)
async def list_listings(
    filters: ListingFilters = Depends(get_listing_filters),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    listing_service: ListingService = Depends(get_listing_service),
) -> Any:
    """Search active listings with filters and pagination."""
    listings, total = await asyncio.to_thread(listing_service.get_all, filters, page, limit)
    return ok(
        [ListingResponse.model_validate(listing) for listing in listings],
        meta=PaginationMeta.build(total=total, page=page, limit=limit),
    )


@router.post(
    "",
    response_model=ApiResponse[ListingResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_listing(
    listing_data: ListingCreate = Body(...),
    current_user: AuthenticatedUser = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service),
    cache_service: CacheService = Depends(get_cache_service_dep),
) -> Any:
    """Create a listing owned by the current user (hosts only)."""
    listing = await asyncio.to_thread(
        listing_service.create_listing, current_user.id, listing_data
    )
    await cache_service.invalidate_listing_collection_cache()
    return created(ListingResponse.model_validate(listing))


@router.get("/{listing_id}", response_model=ApiResponse[ListingResponse])
@cache_middleware(settings.listing_detail_cache_ttl)
async def get_listing(
    listing_id: int = Path(..., ge=1),
    listing_service: ListingService = Depends(get_listing_service),
) -> Any:
    listing = await asyncio.to_thread(listing_service.get_by_id, listing_id)
    return ok(ListingResponse.model_validate(listing))


@router.patch("/{listing_id}", response_model=ApiResponse[ListingResponse])
async def update_listing(
    listing_id: int = Path(..., ge=1),
    update_data: ListingUpdate = Body(...),
    current_user: AuthenticatedUser = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service),
    cache_service: CacheService = Depends(get_cache_service_dep),
) -> Any:
    """Update a listing. Allowed for the host and co-hosts with edit rights."""
    listing = await asyncio.to_thread(
        listing_service.update_listing, listing_id, current_user.id, update_data
    )
    await cache_service.invalidate_listing_cache(listing_id)
    return ok(ListingResponse.model_validate(listing))


@router.delete("/{listing_id}", response_model=ApiResponse[MessageData])
async def delete_listing(
    listing_id: int = Path(..., ge=1),
    current_user: AuthenticatedUser = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service),
    cache_service: CacheService = Depends(get_cache_service_dep),
) -> Any:
    await asyncio.to_thread(listing_service.delete_listing, listing_id, current_user.id)
    await cache_service.invalidate_listing_cache(listing_id)
    return ok(MessageData(message="Listing deleted"))


@router.get(
    "/{listing_id}/bookings",
    response_model=ApiResponse[List[ListingBookingResponse]],
)
async def get_listing_bookings(
    listing_id: int = Path(..., ge=1),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    current_user: AuthenticatedUser = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> Any:
    """Bookings of a listing, visible to its host and co-hosts."""
    bookings, total = await asyncio.to_thread(
        booking_service.get_bookings_for_listing, listing_id, current_user.id, page, limit
    )
    return ok(
        [ListingBookingResponse.model_validate(booking) for booking in bookings],
        meta=PaginationMeta.build(total=total, page=page, limit=limit),
    )


@router.post(
    "/{listing_id}/cohosts",
    response_model=ApiResponse[CoHostResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_co_host(
    listing_id: int = Path(..., ge=1),
    co_host_data: CoHostCreate = Body(...),
    current_user: AuthenticatedUser = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service),
) -> Any:
    co_host = await asyncio.to_thread(
        listing_service.add_co_host, listing_id, current_user.id, co_host_data
    )
    return created(CoHostResponse.model_validate(co_host))
