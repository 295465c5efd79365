# backend/minibnb/routes/v1/bookings.py
"""
Guest booking routes - API v1

Versioned booking endpoints under /api/v1/bookings.
All business logic delegated to BookingService.

Endpoints:
    GET /me - Current user's bookings with pagination
    POST / - Create a booking (overlap-checked)
    DELETE /{booking_id} - Cancel own booking
"""

import asyncio
import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Path, Query, status

from ...api.dependencies import get_booking_service, get_cache_service_dep, get_current_user
from ...auth import AuthenticatedUser
from ...core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ...schemas.base_responses import ApiResponse, MessageData, PaginationMeta, created, ok
from ...schemas.booking import BookingCreate, BookingResponse, GuestBookingResponse
from ...services.booking_service import BookingService
from ...services.cache_service import CacheService

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["bookings-v1"])


@router.get("/me", response_model=ApiResponse[List[GuestBookingResponse]])
async def get_my_bookings(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    current_user: AuthenticatedUser = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> Any:
    """The current user's bookings, newest check-in first."""
    bookings, total = await asyncio.to_thread(
        booking_service.get_bookings_for_guest, current_user.id, page, limit
    )
    return ok(
        [GuestBookingResponse.model_validate(booking) for booking in bookings],
        meta=PaginationMeta.build(total=total, page=page, limit=limit),
    )


@router.post(
    "",
    response_model=ApiResponse[BookingResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    booking_data: BookingCreate = Body(...),
    current_user: AuthenticatedUser = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
    cache_service: CacheService = Depends(get_cache_service_dep),
) -> Any:
    """
    Book a listing for a closed date range.

    Fails with 400 when the dates overlap an existing booking (touching
    dates included) or the guest count exceeds the listing's maximum.
    """
    booking = await asyncio.to_thread(
        booking_service.create_booking, current_user.id, booking_data
    )
    await cache_service.invalidate_booking_cache(booking.listing_id)
    return created(BookingResponse.model_validate(booking))


@router.delete("/{booking_id}", response_model=ApiResponse[MessageData])
async def cancel_booking(
    booking_id: int = Path(..., ge=1),
    current_user: AuthenticatedUser = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
    cache_service: CacheService = Depends(get_cache_service_dep),
) -> Any:
    booking = await asyncio.to_thread(booking_service.cancel_booking, booking_id, current_user.id)
    await cache_service.invalidate_booking_cache(booking.listing_id)
    return ok(MessageData(message="Booking cancelled"))
