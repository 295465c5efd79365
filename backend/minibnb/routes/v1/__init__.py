# backend/minibnb/routes/v1/__init__.py
"""
API v1 Routes

Versioned API endpoints under /api/v1.
"""

from . import (
    amenities,
    availability,
    bookings,
    cohosts,
    health,
    listings,
    messages,
    profiles,
    users,
)

__all__ = [
    "amenities",
    "availability",
    "bookings",
    "cohosts",
    "health",
    "listings",
    "messages",
    "profiles",
    "users",
]
