"""Listing and co-host request/response schemas."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.constants import DEFAULT_PROPERTY_TYPE


class ListingBase(BaseModel):
    name: str = Field(..., min_length=10, max_length=255)
    description: Optional[str] = None
    picture_url: str = Field(..., pattern=r"^https?://")
    price: int = Field(..., gt=0, description="Nightly price")
    address: str = Field(..., min_length=5)
    city: str = Field(..., min_length=2)
    postal_code: Optional[str] = None
    neighbourhood_group_cleansed: Optional[str] = None
    bedrooms: int = Field(default=1, gt=0)
    beds: int = Field(default=1, gt=0)
    bathrooms: float = Field(default=1.0, gt=0)
    max_guests: int = Field(default=2, gt=0)
    property_type: str = DEFAULT_PROPERTY_TYPE
    rules: Optional[str] = None
    amenities: List[str] = Field(default_factory=list)


class ListingCreate(ListingBase):
    pass


class ListingUpdate(BaseModel):
    """Partial update; only the fields present in the request are applied."""

    name: Optional[str] = Field(default=None, min_length=10, max_length=255)
    description: Optional[str] = None
    picture_url: Optional[str] = Field(default=None, pattern=r"^https?://")
    price: Optional[int] = Field(default=None, gt=0)
    address: Optional[str] = Field(default=None, min_length=5)
    city: Optional[str] = Field(default=None, min_length=2)
    is_active: Optional[bool] = None


class ListingResponse(ListingBase):
    model_config = ConfigDict(from_attributes=True)

    # Stored rows are not re-validated against request constraints
    name: str
    picture_url: str
    address: str
    city: str

    id: int
    host_id: str
    host_name: Optional[str] = None
    review_scores_value: Optional[float] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ListingFilters(BaseModel):
    """Query-string filters for the listing catalogue."""

    city: Optional[str] = None
    min_price: Optional[int] = Field(default=None, ge=0)
    max_price: Optional[int] = Field(default=None, ge=0)
    guests: Optional[int] = Field(default=None, ge=1)
    host_id: Optional[str] = None
    q: Optional[str] = None
    property_type: Optional[str] = None
    property_types: Optional[List[str]] = None
    min_bedrooms: Optional[int] = Field(default=None, ge=0)
    min_beds: Optional[int] = Field(default=None, ge=0)
    min_bathrooms: Optional[float] = Field(default=None, ge=0)
    min_rating: Optional[float] = Field(default=None, ge=0)
    check_in: Optional[date] = None
    check_out: Optional[date] = None

    @model_validator(mode="after")
    def _check_dates(self) -> "ListingFilters":
        if self.check_in and self.check_out and self.check_out < self.check_in:
            raise ValueError("check_out must not be before check_in")
        return self


class CoHostCreate(BaseModel):
    co_host_id: str = Field(..., min_length=1)
    can_edit_listing: bool = False
    can_access_messages: bool = False
    can_respond_messages: bool = False


class CoHostResponse(CoHostCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    listing_id: int
    host_id: str
    created_at: Optional[datetime] = None


class ListingCoHostCreate(CoHostCreate):
    """Co-host grant addressed by listing id in the body."""

    listing_id: int = Field(..., gt=0)
