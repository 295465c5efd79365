"""Service layer: business rules between the routes and the repositories."""

from .availability_service import AvailabilityService
from .base import BaseService
from .booking_service import BookingService
from .cache_service import CacheKeyBuilder, CacheService
from .conflict_checker import ConflictChecker
from .listing_service import ListingService
from .message_service import MessageService
from .profile_service import ProfileService

__all__ = [
    "AvailabilityService",
    "BaseService",
    "BookingService",
    "CacheKeyBuilder",
    "CacheService",
    "ConflictChecker",
    "ListingService",
    "MessageService",
    "ProfileService",
]
