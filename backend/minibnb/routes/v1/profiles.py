# backend/minibnb/routes/v1/profiles.py
"""
Profile routes - API v1

    GET /me - Current user's profile
    PATCH /me - Update current user's profile
    GET /{profile_id} - Public profile
"""

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Path

from ...api.dependencies import get_current_user, get_profile_service
from ...auth import AuthenticatedUser
from ...schemas.base_responses import ApiResponse, ok
from ...schemas.profile import ProfileResponse, ProfileUpdate, PublicProfileResponse
from ...services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["profiles-v1"])


@router.get("/me", response_model=ApiResponse[ProfileResponse])
async def get_my_profile(
    current_user: AuthenticatedUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> Any:
    profile = await asyncio.to_thread(profile_service.get_profile, current_user.id)
    return ok(ProfileResponse.model_validate(profile))


@router.patch("/me", response_model=ApiResponse[ProfileResponse])
async def update_my_profile(
    update_data: ProfileUpdate = Body(...),
    current_user: AuthenticatedUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> Any:
    profile = await asyncio.to_thread(profile_service.update_profile, current_user.id, update_data)
    return ok(ProfileResponse.model_validate(profile))


@router.get("/{profile_id}", response_model=ApiResponse[PublicProfileResponse])
async def get_profile(
    profile_id: str = Path(..., min_length=1, max_length=36),
    profile_service: ProfileService = Depends(get_profile_service),
) -> Any:
    profile = await asyncio.to_thread(profile_service.get_profile, profile_id)
    return ok(PublicProfileResponse.model_validate(profile))
