"""SQLAlchemy model for marketplace users (guests and hosts)."""

import uuid

from sqlalchemy import Column, DateTime, String, Uuid
from sqlalchemy.sql import func

from rental_market.models.base import Base


class User(Base):
    """
    ORM model for marketplace users.

    Authentication lives with the external identity provider; this table only
    holds the profile the marketplace needs to attribute listings and bookings.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=True)
    email = Column(String, nullable=False, unique=True)
    image = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
