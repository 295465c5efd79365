"""Booking request/response schemas."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .listing import ListingResponse


class BookingCreate(BaseModel):
    listing_id: int = Field(..., gt=0)
    check_in: date
    check_out: date
    guest_count: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def _check_dates(self) -> "BookingCreate":
        if self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    listing_id: int
    guest_id: str
    check_in: date
    check_out: date
    guest_count: int
    total_price: int
    created_at: Optional[datetime] = None


class GuestSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    first_name: str
    last_name: str
    avatar_url: Optional[str] = None


class GuestBookingResponse(BookingResponse):
    """A booking as seen by its guest, with the booked listing."""

    listing: Optional[ListingResponse] = None


class ListingBookingResponse(BookingResponse):
    """A booking as seen by the listing's hosts, with the guest's public name."""

    guest: Optional[GuestSummary] = None
