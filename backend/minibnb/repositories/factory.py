# backend/minibnb/repositories/factory.py
"""
Repository Factory for the MiniBnB platform.

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from sqlalchemy.orm import Session

from .booking_repository import BookingRepository
from .listing_repository import ListingRepository
from .message_repository import MessageRepository
from .profile_repository import ProfileRepository


class RepositoryFactory:
    """Factory class for creating repository instances."""

    @staticmethod
    def create_listing_repository(db: Session) -> ListingRepository:
        return ListingRepository(db)

    @staticmethod
    def create_booking_repository(db: Session) -> BookingRepository:
        return BookingRepository(db)

    @staticmethod
    def create_profile_repository(db: Session) -> ProfileRepository:
        return ProfileRepository(db)

    @staticmethod
    def create_message_repository(db: Session) -> MessageRepository:
        return MessageRepository(db)
