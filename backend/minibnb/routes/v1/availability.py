# backend/minibnb/routes/v1/availability.py
"""
Listing availability routes - API v1

    GET /listings/{listing_id}/availability - Booked periods in a date range

Responses are cached for five minutes and invalidated whenever a booking of
the listing is created or cancelled.
"""

import asyncio
from datetime import date
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Path, Query

from ...api.dependencies import get_availability_service
from ...core.config import settings
from ...core.exceptions import ValidationException
from ...middleware.response_cache import CachedRoute, cache_middleware
from ...schemas.availability import AvailabilityResponse
from ...schemas.base_responses import ApiResponse, ok
from ...services.availability_service import AvailabilityService
from ...utils.date_ranges import parse_calendar_date

logger = logging.getLogger(__name__)

router = APIRouter(tags=["availability-v1"], route_class=CachedRoute)


def _parse_date_param(name: str, value: Optional[str]) -> Optional[date]:
    try:
        return parse_calendar_date(value)
    except ValueError as exc:
        raise ValidationException(
            f"Invalid {name}: {exc}",
            code="VALIDATION_ERROR",
            details={"field": name},
        )


@router.get("/{listing_id}/availability", response_model=ApiResponse[AvailabilityResponse])
@cache_middleware(settings.availability_cache_ttl)
async def get_listing_availability(
    listing_id: int = Path(..., ge=1),
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to today (UTC)"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to start + 3 months"),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> Any:
    """Booked periods of a listing overlapping the requested range."""
    start = _parse_date_param("start_date", start_date)
    end = _parse_date_param("end_date", end_date)
    if start and end and end < start:
        raise ValidationException(
            "end_date must be on or after start_date",
            code="VALIDATION_ERROR",
            details={"field": "end_date"},
        )

    availability = await asyncio.to_thread(
        availability_service.get_availability, listing_id, start, end
    )
    return ok(AvailabilityResponse.model_validate(availability))
