# backend/minibnb/core/exceptions.py
"""
MiniBnB domain exceptions.

Services raise these; minibnb.errors turns them into the JSON error
envelope using `status_code`, `code`, `message` and `details`.
"""

from typing import Any, Dict, Optional

from fastapi import status


class DomainException(Exception):
    """Base class; unhandled subclasses without a status map to 500."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code: str = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}


class ValidationException(DomainException):
    """Request is well-formed but breaks a business rule (400)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "BAD_REQUEST"


class UnauthorizedException(DomainException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ForbiddenException(DomainException):
    status_code = status.HTTP_403_FORBIDDEN
    default_code = "FORBIDDEN"

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class NotFoundException(DomainException):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class ServiceException(DomainException):
    """A service operation failed for a reason the caller cannot fix."""


class BookingConflictException(ValidationException):
    """Requested stay overlaps an existing booking, touching dates included."""

    def __init__(self, listing_id: int, check_in: str, check_out: str) -> None:
        super().__init__(
            "Listing is not available for these dates",
            code="DATES_NOT_AVAILABLE",
            details={"listing_id": listing_id, "check_in": check_in, "check_out": check_out},
        )


class GuestLimitExceededException(ValidationException):
    def __init__(self, max_guests: int, requested: int) -> None:
        super().__init__(
            f"Maximum {max_guests} guests allowed",
            code="GUEST_LIMIT_EXCEEDED",
            details={"max_guests": max_guests, "requested": requested},
        )


class CacheInvalidationException(ServiceException):
    """The write went through but the affected cache entries could not be removed."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(
            "Cache invalidation failed",
            code="CACHE_INVALIDATION_FAILED",
            details={"pattern": pattern, "reason": reason},
        )


class RepositoryException(Exception):
    """A data-access operation failed (connection, query or constraint)."""
