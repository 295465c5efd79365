# backend/minibnb/repositories/message_repository.py
"""
Message Repository for the MiniBnB platform.

Conversations and their messages. Permission checks live in MessageService;
the inbox query only needs to know which listings grant the user message
access as a co-host.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.sql import func

from ..core.exceptions import RepositoryException
from ..models.listing import CoHost
from ..models.message import Conversation, Message
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class MessageRepository(BaseRepository[Message]):
    """Data access for conversations and messages."""

    def __init__(self, db: Session):
        super().__init__(db, Message)

    def get_conversation(self, conversation_id: int) -> Optional[Conversation]:
        try:
            return self.db.get(Conversation, conversation_id)
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading conversation {conversation_id}: {str(e)}")
            raise RepositoryException(f"Failed to load conversation: {str(e)}")

    def find_conversation(self, listing_id: int, guest_id: str) -> Optional[Conversation]:
        """The guest's thread on a listing, if one was started."""
        try:
            return (
                self.db.query(Conversation)
                .filter(Conversation.listing_id == listing_id, Conversation.guest_id == guest_id)
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error looking up conversation on listing {listing_id}: {str(e)}")
            raise RepositoryException(f"Failed to load conversation: {str(e)}")

    def create_conversation(self, **kwargs: object) -> Conversation:
        try:
            conversation = Conversation(**kwargs)
            self.db.add(conversation)
            self.db.flush()
            return conversation
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Error creating conversation: {str(e)}")
            raise RepositoryException(f"Failed to create conversation: {str(e)}")

    def get_conversations_for_user(self, user_id: str) -> List[Conversation]:
        """
        Threads the user takes part in, most recently active first.

        Covers threads where the user is the guest or the host, plus the
        threads of listings where the user is a co-host with message access.
        """
        co_hosted_listings = select(CoHost.listing_id).where(
            CoHost.co_host_id == user_id, CoHost.can_access_messages.is_(True)
        )
        try:
            return (
                self.db.query(Conversation)
                .options(joinedload(Conversation.listing), joinedload(Conversation.guest))
                .filter(
                    or_(
                        Conversation.guest_id == user_id,
                        Conversation.host_id == user_id,
                        Conversation.listing_id.in_(co_hosted_listings),
                    )
                )
                .order_by(Conversation.updated_at.desc(), Conversation.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading conversations for {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to fetch conversations: {str(e)}")

    def get_messages(
        self, conversation_id: int, offset: int, limit: int
    ) -> Tuple[List[Message], int]:
        """A conversation's messages, oldest first, with the sender loaded."""
        try:
            query = self.db.query(Message).filter(Message.conversation_id == conversation_id)
            total = query.count()
            items = (
                query.options(joinedload(Message.sender))
                .order_by(Message.created_at, Message.id)
                .offset(offset)
                .limit(limit)
                .all()
            )
            return items, total
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading messages of conversation {conversation_id}: {str(e)}")
            raise RepositoryException(f"Failed to fetch messages: {str(e)}")

    def add_message(self, conversation: Conversation, sender_id: str, content: str) -> Message:
        """Append a message and bump the conversation's activity time."""
        try:
            message = Message(conversation_id=conversation.id, sender_id=sender_id, content=content)
            self.db.add(message)
            conversation.updated_at = func.now()
            self.db.flush()
            return message
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Error adding message to conversation {conversation.id}: {str(e)}")
            raise RepositoryException(f"Failed to send message: {str(e)}")
