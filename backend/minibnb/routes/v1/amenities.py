# backend/minibnb/routes/v1/amenities.py
"""
Amenity catalogue - API v1

The catalogue is static, so it is left to browsers and intermediaries to
cache (Cache-Control only, no server-side entry).
"""

from typing import Any, Dict, List

from fastapi import APIRouter
from pydantic import BaseModel

from ...core.config import settings
from ...core.constants import AMENITIES, AMENITY_CATEGORIES
from ...middleware.response_cache import CachedRoute, cache_control_middleware
from ...schemas.base_responses import ApiResponse, ok

router = APIRouter(tags=["amenities-v1"], route_class=CachedRoute)


class AmenityItem(BaseModel):
    slug: str
    label: str


class AmenityCategory(BaseModel):
    label: str
    amenities: List[AmenityItem]


def amenities_by_category() -> Dict[str, AmenityCategory]:
    """Group the catalogue by category, keeping category and amenity order."""
    grouped: Dict[str, AmenityCategory] = {}
    for slug, label, category in AMENITIES:
        if category not in grouped:
            grouped[category] = AmenityCategory(label=AMENITY_CATEGORIES[category], amenities=[])
        grouped[category].amenities.append(AmenityItem(slug=slug, label=label))
    return grouped


@router.get("", response_model=ApiResponse[Dict[str, AmenityCategory]])
@cache_control_middleware(settings.amenities_max_age)
async def list_amenities() -> Any:
    return ok(amenities_by_category())
