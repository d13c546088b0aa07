"""SQLAlchemy model backing the storage-level non-overlap guarantee."""

from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Uuid

from rental_market.models.base import Base


class OccupiedNight(Base):
    """
    One row per calendar day held by an accepted reservation or a blocked period.

    The primary key on (listing_id, night) is what makes two overlapping
    accepted/blocked ranges impossible to commit: whichever writer comes second
    violates it, even if both passed validation concurrently. Exactly one of
    reservation_id / blocked_period_id is set.
    """

    __tablename__ = "occupied_nights"
    __table_args__ = (
        CheckConstraint(
            "(reservation_id IS NULL) <> (blocked_period_id IS NULL)",
            name="ck_occupied_nights_single_owner",
        ),
    )

    listing_id = Column(
        Uuid, ForeignKey("listings.id", ondelete="CASCADE"), primary_key=True
    )
    night = Column(Date, primary_key=True)
    reservation_id = Column(
        Uuid, ForeignKey("reservations.id", ondelete="CASCADE"), nullable=True, index=True
    )
    blocked_period_id = Column(
        Uuid, ForeignKey("blocked_periods.id", ondelete="CASCADE"), nullable=True, index=True
    )
