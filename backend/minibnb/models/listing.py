# backend/minibnb/models/listing.py
"""
Listing and co-host models.

A listing is owned by exactly one host profile. Co-hosts are granted
per-listing permissions (edit, message access) by the host.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.constants import DEFAULT_PROPERTY_TYPE
from ..database import Base


class Listing(Base):
    """Rentable property. `price` is the nightly price in whole currency units."""

    __tablename__ = "listings"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    host_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    host_name = Column(String(200), nullable=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    picture_url = Column(String, nullable=False)
    price = Column(Integer, nullable=False)

    address = Column(String, nullable=False)
    city = Column(String(100), nullable=False, index=True)
    postal_code = Column(String(20), nullable=True)
    neighbourhood_group_cleansed = Column(String(100), nullable=True)

    bedrooms = Column(Integer, nullable=False, default=1)
    beds = Column(Integer, nullable=False, default=1)
    bathrooms = Column(Float, nullable=False, default=1.0)
    max_guests = Column(Integer, nullable=False, default=2)
    property_type = Column(String(100), nullable=False, default=DEFAULT_PROPERTY_TYPE)
    rules = Column(Text, nullable=True)
    amenities = Column(JSON, nullable=False, default=list)
    review_scores_value = Column(Float, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    host = relationship("Profile", back_populates="listings")
    bookings = relationship("Booking", back_populates="listing", cascade="all, delete-orphan")
    co_hosts = relationship("CoHost", back_populates="listing", cascade="all, delete-orphan")
    conversations = relationship(
        "Conversation", back_populates="listing", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("price > 0", name="check_listing_price_positive"),
        CheckConstraint("max_guests > 0", name="check_listing_max_guests_positive"),
    )

    def __repr__(self) -> str:
        return f"<Listing {self.id} {self.city} active={self.is_active}>"


class CoHost(Base):
    """Delegated access for a profile on a listing."""

    __tablename__ = "co_hosts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    listing_id = Column(Integer, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False)
    host_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    co_host_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    can_edit_listing = Column(Boolean, nullable=False, default=False)
    can_access_messages = Column(Boolean, nullable=False, default=False)
    can_respond_messages = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    listing = relationship("Listing", back_populates="co_hosts")

    __table_args__ = (UniqueConstraint("listing_id", "co_host_id", name="uq_co_host_listing"),)
