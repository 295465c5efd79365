"""Conversation and message request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .booking import GuestSummary

MAX_MESSAGE_LENGTH = 5000


class ConversationCreate(BaseModel):
    """Start (or reopen) the caller's thread on a listing, optionally with a first message."""

    listing_id: int = Field(..., gt=0)
    message: Optional[str] = Field(default=None, min_length=1, max_length=MAX_MESSAGE_LENGTH)


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    conversation_id: int
    sender_id: str
    content: str
    created_at: Optional[datetime] = None
    sender: Optional[GuestSummary] = None


class ConversationListingSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    picture_url: str
    city: str


class ConversationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    listing_id: int
    guest_id: str
    host_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    listing: Optional[ConversationListingSummary] = None
    guest: Optional[GuestSummary] = None
