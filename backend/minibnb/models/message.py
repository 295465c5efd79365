# backend/minibnb/models/message.py
"""
Conversation and message models.

A conversation is the single thread between one guest and the hosts of a
listing. The listing's host and co-hosts granted message access read it;
co-hosts need can_respond_messages to write.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class Conversation(Base):
    """Thread between a guest and a listing's hosts."""

    __tablename__ = "conversations"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    listing_id = Column(Integer, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False)
    guest_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    host_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    listing = relationship("Listing", back_populates="conversations")
    guest = relationship("Profile", foreign_keys=[guest_id])
    messages = relationship(
        "Message",
        back_populates="conversation",
        cascade="all, delete-orphan",
        order_by="Message.id",
    )

    __table_args__ = (
        UniqueConstraint("listing_id", "guest_id", name="uq_conversation_listing_guest"),
    )

    def __repr__(self) -> str:
        return f"<Conversation {self.id} listing={self.listing_id} guest={self.guest_id}>"


class Message(Base):
    """One message posted in a conversation."""

    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    conversation_id = Column(
        Integer, ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False
    )
    sender_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    content = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    conversation = relationship("Conversation", back_populates="messages")
    sender = relationship("Profile", foreign_keys=[sender_id])

    __table_args__ = (Index("ix_messages_conversation_created", "conversation_id", "created_at"),)
