"""Repository layer for data access."""

from .base_repository import BaseRepository
from .booking_repository import BookingRepository
from .factory import RepositoryFactory
from .listing_repository import ListingRepository
from .message_repository import MessageRepository
from .profile_repository import ProfileRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "ListingRepository",
    "MessageRepository",
    "ProfileRepository",
    "RepositoryFactory",
]
