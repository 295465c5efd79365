# backend/minibnb/models/booking.py
"""
Booking model.

A booking reserves the closed period [check_in, check_out] on one listing.
Bookings are immutable once created; cancellation deletes the row.
"""

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class Booking(Base):
    """Reservation of a listing by a guest."""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    listing_id = Column(Integer, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False)
    guest_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)

    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False)
    guest_count = Column(Integer, nullable=False, default=1)
    total_price = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    listing = relationship("Listing", back_populates="bookings")
    guest = relationship("Profile", foreign_keys=[guest_id])

    __table_args__ = (
        Index("ix_bookings_listing_dates", "listing_id", "check_in", "check_out"),
        CheckConstraint("check_out > check_in", name="check_booking_dates_ordered"),
        CheckConstraint("guest_count > 0", name="check_booking_guest_count_positive"),
    )

    def __repr__(self) -> str:
        return f"<Booking {self.id} listing={self.listing_id} {self.check_in}..{self.check_out}>"
