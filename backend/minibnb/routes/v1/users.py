# backend/minibnb/routes/v1/users.py
"""
User lookup routes - API v1

    GET /search?email= - Find profiles by partial email (at most 5), e.g. to pick a co-host
"""

import asyncio
from typing import Any, List

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_current_user, get_profile_service
from ...auth import AuthenticatedUser
from ...schemas.base_responses import ApiResponse, ok
from ...schemas.profile import UserSearchResult
from ...services.profile_service import ProfileService

router = APIRouter(tags=["users-v1"])

USER_SEARCH_LIMIT = 5


@router.get("/search", response_model=ApiResponse[List[UserSearchResult]])
async def search_users(
    email: str = Query(..., min_length=1, max_length=255),
    current_user: AuthenticatedUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> Any:
    profiles = await asyncio.to_thread(
        profile_service.search_by_email, email, USER_SEARCH_LIMIT
    )
    return ok([UserSearchResult.model_validate(profile) for profile in profiles])
