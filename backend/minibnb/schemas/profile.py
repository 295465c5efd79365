"""Profile request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    is_host: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PublicProfileResponse(BaseModel):
    """Fields of a profile visible to anyone."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    is_host: bool


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50)
    avatar_url: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=2000)
    is_host: Optional[bool] = None


class UserSearchResult(BaseModel):
    """Profile fields returned when looking up a user to add as co-host."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str
    last_name: str
    avatar_url: Optional[str] = None
