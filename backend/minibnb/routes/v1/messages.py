# backend/minibnb/routes/v1/messages.py
"""
Messaging routes - API v1

    GET / - Conversations of the current user
    POST / - Open (or reopen) a conversation on a listing
    GET /{conversation_id} - Messages of a conversation with pagination
    POST /{conversation_id}/messages - Reply in a conversation

Message threads are per-user and never cached.
"""

import asyncio
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Path, Query, status

from ...api.dependencies import get_current_user, get_message_service
from ...auth import AuthenticatedUser
from ...core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ...schemas.base_responses import ApiResponse, PaginationMeta, created, ok
from ...schemas.message import (
    ConversationCreate,
    ConversationResponse,
    MessageCreate,
    MessageResponse,
)
from ...services.message_service import MessageService

router = APIRouter(tags=["messages-v1"])


@router.get("", response_model=ApiResponse[List[ConversationResponse]])
async def get_my_conversations(
    current_user: AuthenticatedUser = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service),
) -> Any:
    conversations = await asyncio.to_thread(
        message_service.get_user_conversations, current_user.id
    )
    return ok([ConversationResponse.model_validate(c) for c in conversations])


@router.post(
    "",
    response_model=ApiResponse[ConversationResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_conversation(
    conversation_data: ConversationCreate = Body(...),
    current_user: AuthenticatedUser = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service),
) -> Any:
    conversation = await asyncio.to_thread(
        message_service.create_conversation,
        current_user.id,
        conversation_data.listing_id,
        conversation_data.message,
    )
    return created(ConversationResponse.model_validate(conversation))


@router.get("/{conversation_id}", response_model=ApiResponse[List[MessageResponse]])
async def get_conversation_messages(
    conversation_id: int = Path(..., ge=1),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    current_user: AuthenticatedUser = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service),
) -> Any:
    """Messages oldest first. Co-hosts need message access on the listing."""
    messages, total = await asyncio.to_thread(
        message_service.get_by_conversation, conversation_id, current_user.id, page, limit
    )
    return ok(
        [MessageResponse.model_validate(message) for message in messages],
        meta=PaginationMeta.build(total=total, page=page, limit=limit),
    )


@router.post(
    "/{conversation_id}/messages",
    response_model=ApiResponse[MessageResponse],
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    conversation_id: int = Path(..., ge=1),
    message_data: MessageCreate = Body(...),
    current_user: AuthenticatedUser = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service),
) -> Any:
    """Reply in a conversation. Co-hosts need the respond permission."""
    message = await asyncio.to_thread(
        message_service.send, current_user.id, conversation_id, message_data.content
    )
    return created(MessageResponse.model_validate(message))
