# models/reservations.py

import uuid
from enum import Enum

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.sql import func

from rental_market.models.base import Base


class ReservationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Reservation(Base):
    """
    ORM model for guest reservations (booking requests).

    A reservation is created ``pending`` by a guest and moved to ``accepted``
    or ``rejected`` by the listing's owner. Both decisions are terminal. Only
    accepted reservations occupy nights (see OccupiedNight).
    """

    __tablename__ = "reservations"
    __table_args__ = (
        CheckConstraint("end_date > start_date", name="ck_reservations_positive_length"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    listing_id = Column(
        Uuid, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    guest_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_price = Column(Integer, nullable=False)
    status = Column(String(16), nullable=False, server_default=ReservationStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class Decision(str, Enum):
    """A host's answer to a pending reservation."""

    ACCEPT = "accept"
    REJECT = "reject"
