"""FastAPI dependencies for database sessions, services and authentication."""

from .auth import get_current_user
from .database import get_db
from .services import (
    get_availability_service,
    get_booking_service,
    get_cache_service_dep,
    get_listing_service,
    get_message_service,
    get_profile_service,
)

__all__ = [
    "get_availability_service",
    "get_booking_service",
    "get_cache_service_dep",
    "get_current_user",
    "get_db",
    "get_listing_service",
    "get_message_service",
    "get_profile_service",
]
