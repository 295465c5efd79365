# backend/minibnb/routes/v1/cohosts.py
"""
Co-host routes - API v1

    POST / - Add a co-host to a listing (host only)
    DELETE /{co_host_id} - Remove a co-host (the host, or the co-host themself)
"""

import asyncio
from typing import Any

from fastapi import APIRouter, Body, Depends, Path, status

from ...api.dependencies import get_current_user, get_listing_service
from ...auth import AuthenticatedUser
from ...schemas.base_responses import ApiResponse, MessageData, created, ok
from ...schemas.listing import CoHostResponse, ListingCoHostCreate
from ...services.listing_service import ListingService

router = APIRouter(tags=["cohosts-v1"])


@router.post(
    "",
    response_model=ApiResponse[CoHostResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_co_host(
    co_host_data: ListingCoHostCreate = Body(...),
    current_user: AuthenticatedUser = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service),
) -> Any:
    co_host = await asyncio.to_thread(
        listing_service.add_co_host,
        co_host_data.listing_id,
        current_user.id,
        co_host_data,
    )
    return created(CoHostResponse.model_validate(co_host))


@router.delete("/{co_host_id}", response_model=ApiResponse[MessageData])
async def remove_co_host(
    co_host_id: int = Path(..., ge=1),
    current_user: AuthenticatedUser = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service),
) -> Any:
    await asyncio.to_thread(listing_service.remove_co_host, co_host_id, current_user.id)
    return ok(MessageData(message="Co-host removed"))
