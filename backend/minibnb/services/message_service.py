# backend/minibnb/services/message_service.py
"""
Message Service for the MiniBnB platform.

Guests open one conversation per listing with its hosts. Who may take part:

    guest, listing host      read and write
    co-host                  read with can_access_messages,
                             write with can_respond_messages
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.exceptions import ForbiddenException, NotFoundException, ValidationException
from ..models.message import Conversation, Message
from ..repositories import RepositoryFactory
from ..repositories.listing_repository import ListingRepository
from ..repositories.message_repository import MessageRepository
from .base import BaseService

logger = logging.getLogger(__name__)


class MessageService(BaseService):
    """Service layer for conversations and messages."""

    def __init__(
        self,
        db: Session,
        repository: Optional[MessageRepository] = None,
        listing_repository: Optional[ListingRepository] = None,
    ):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_message_repository(db)
        self.listing_repository = (
            listing_repository or RepositoryFactory.create_listing_repository(db)
        )

    @BaseService.measure_operation("list_conversations")
    def get_user_conversations(self, user_id: str) -> List[Conversation]:
        return self.repository.get_conversations_for_user(user_id)

    @BaseService.measure_operation("create_conversation")
    def create_conversation(
        self, user_id: str, listing_id: int, message: Optional[str] = None
    ) -> Conversation:
        """
        Open the caller's thread on a listing, or return the existing one.

        An optional first message is appended either way.

        Raises:
            NotFoundException: If the listing does not exist
            ValidationException: If the caller hosts the listing
        """
        listing = self.listing_repository.get_by_id(listing_id)
        if not listing:
            raise NotFoundException("Listing not found")
        if listing.host_id == user_id:
            raise ValidationException("You cannot start a conversation on your own listing")

        with self.transaction():
            conversation = self.repository.find_conversation(listing.id, user_id)
            if conversation is None:
                conversation = self.repository.create_conversation(
                    listing_id=listing.id, guest_id=user_id, host_id=listing.host_id
                )
                self.logger.info(f"Conversation {conversation.id} opened on listing {listing.id}")
            if message:
                self.repository.add_message(conversation, user_id, message)

        return conversation

    @BaseService.measure_operation("get_messages")
    def get_by_conversation(
        self, conversation_id: int, user_id: str, page: int = 1, limit: int = 10
    ) -> Tuple[List[Message], int]:
        """
        One page of a conversation's messages, oldest first.

        Raises:
            NotFoundException: If the conversation does not exist
            ForbiddenException: If the caller may not read it
        """
        conversation = self._get_conversation(conversation_id)
        if not self._is_participant(conversation, user_id) and not self._co_host_allows(
            conversation, user_id, "can_access_messages"
        ):
            raise ForbiddenException("You cannot view this conversation")

        return self.repository.get_messages(conversation.id, (page - 1) * limit, limit)

    @BaseService.measure_operation("send_message")
    def send(self, user_id: str, conversation_id: int, content: str) -> Message:
        """
        Post a message in a conversation.

        Raises:
            NotFoundException: If the conversation does not exist
            ForbiddenException: If the caller may not write in it
        """
        conversation = self._get_conversation(conversation_id)
        if not self._is_participant(conversation, user_id) and not self._co_host_allows(
            conversation, user_id, "can_respond_messages"
        ):
            raise ForbiddenException("You cannot send messages in this conversation")

        with self.transaction():
            message = self.repository.add_message(conversation, user_id, content)

        return message

    def _get_conversation(self, conversation_id: int) -> Conversation:
        conversation = self.repository.get_conversation(conversation_id)
        if not conversation:
            raise NotFoundException("Conversation not found")
        return conversation

    @staticmethod
    def _is_participant(conversation: Conversation, user_id: str) -> bool:
        return user_id in (conversation.guest_id, conversation.host_id)

    def _co_host_allows(self, conversation: Conversation, user_id: str, permission: str) -> bool:
        co_host = self.listing_repository.get_co_host(conversation.listing_id, user_id)
        return bool(co_host and getattr(co_host, permission))
