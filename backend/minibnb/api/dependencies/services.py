# backend/minibnb/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Database-bound services are created per request with the request's
session; the CacheService is app-scoped and read from app.state.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ...services.availability_service import AvailabilityService
from ...services.booking_service import BookingService
from ...services.cache_service import CacheService, get_cache_service
from ...services.conflict_checker import ConflictChecker
from ...services.listing_service import ListingService
from ...services.message_service import MessageService
from ...services.profile_service import ProfileService
from .database import get_db


def get_cache_service_dep(request: Request) -> CacheService:
    """Get cache service instance for dependency injection."""
    return get_cache_service(request)


def get_conflict_checker(db: Session = Depends(get_db)) -> ConflictChecker:
    return ConflictChecker(db)


def get_booking_service(
    db: Session = Depends(get_db),
    conflict_checker: ConflictChecker = Depends(get_conflict_checker),
) -> BookingService:
    """Get booking service instance for dependency injection."""
    return BookingService(db, conflict_checker=conflict_checker)


def get_listing_service(db: Session = Depends(get_db)) -> ListingService:
    return ListingService(db)


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(db)


def get_message_service(db: Session = Depends(get_db)) -> MessageService:
    return MessageService(db)
