"""Availability response schemas."""

from typing import List

from pydantic import BaseModel, Field


class BookedPeriod(BaseModel):
    check_in: str = Field(description="YYYY-MM-DD")
    check_out: str = Field(description="YYYY-MM-DD")


class QueryRange(BaseModel):
    start_date: str
    end_date: str


class AvailabilityResponse(BaseModel):
    listing_id: int
    is_active: bool
    booked_periods: List[BookedPeriod]
    query_range: QueryRange
