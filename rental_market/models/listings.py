import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.sql import func

from rental_market.models.base import Base


class Listing(Base):
    """
    ORM model for rentable property listings.

    Each listing is owned by the user who created it. Only the owner may edit
    or delete it, and deleting it cascades to every reservation, blocked
    period, occupied night and favorite that references it.
    """

    __tablename__ = "listings"
    __table_args__ = (
        CheckConstraint("price > 0", name="ck_listings_price_positive"),
        CheckConstraint("room_count > 0", name="ck_listings_room_count_positive"),
        CheckConstraint("bathroom_count > 0", name="ck_listings_bathroom_count_positive"),
        CheckConstraint("guest_count > 0", name="ck_listings_guest_count_positive"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, server_default="")
    image_src = Column(String, nullable=True)  # URL on the external media host
    category = Column(String, nullable=False, index=True)
    room_count = Column(Integer, nullable=False)
    bathroom_count = Column(Integer, nullable=False)
    guest_count = Column(Integer, nullable=False)
    location_value = Column(String, nullable=False, index=True)
    price = Column(Integer, nullable=False)  # nightly price, whole currency units
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
