import uuid

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Uuid
from sqlalchemy.sql import func

from rental_market.models.base import Base


class BlockedPeriod(Base):
    """
    ORM model for host-imposed unavailability.

    Created and deleted only by the listing owner, independent of guest
    activity. A blocked period occupies every night of its inclusive range.
    """

    __tablename__ = "blocked_periods"
    __table_args__ = (
        CheckConstraint("end_date > start_date", name="ck_blocked_periods_positive_length"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    listing_id = Column(
        Uuid, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
