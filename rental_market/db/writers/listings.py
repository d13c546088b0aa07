import uuid
from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Connection

from rental_market.models.blocked_periods import BlockedPeriod
from rental_market.models.favorites import Favorite
from rental_market.models.listings import Listing
from rental_market.models.occupied_nights import OccupiedNight
from rental_market.models.reservations import Reservation
from rental_market.utils.dates import utc_now

logger = structlog.get_logger(__name__)


def insert_listing(conn: Connection, owner_id: UUID, data: dict[str, Any]) -> dict[str, Any]:
    """
    Insert a listing owned by ``owner_id``.

    Args:
        conn: Active database connection (within transaction)
        owner_id: Host user ID
        data: Listing fields (title, category, counts, location_value, price, ...)

    Returns:
        dict: The inserted row
    """
    now = utc_now()
    row = {
        **data,
        "id": uuid.uuid4(),
        "owner_id": owner_id,
        "created_at": now,
        "updated_at": now,
    }
    conn.execute(insert(Listing).values(row))
    logger.info("listing_inserted", listing_id=str(row["id"]), owner_id=str(owner_id))
    return row


def update_listing(conn: Connection, listing_id: UUID, update_data: dict[str, Any]) -> None:
    """
    Update listing fields. Owner and ID are never changed here.

    Args:
        conn: Active database connection (within transaction)
        listing_id: Listing ID
        update_data: Columns to set (only non-None values should be passed)
    """
    values = {k: v for k, v in update_data.items() if k not in ("id", "owner_id")}
    values["updated_at"] = utc_now()
    conn.execute(update(Listing).where(Listing.id == listing_id).values(**values))


def delete_listing(conn: Connection, listing_id: UUID) -> None:
    """
    Delete a listing and everything it owns.

    Children are deleted explicitly in foreign-key order so the cascade does
    not depend on the backend enforcing ON DELETE CASCADE.

    Args:
        conn: Active database connection (within transaction)
        listing_id: Listing ID
    """
    conn.execute(delete(OccupiedNight).where(OccupiedNight.listing_id == listing_id))
    conn.execute(delete(Favorite).where(Favorite.listing_id == listing_id))
    conn.execute(delete(Reservation).where(Reservation.listing_id == listing_id))
    conn.execute(delete(BlockedPeriod).where(BlockedPeriod.listing_id == listing_id))
    conn.execute(delete(Listing).where(Listing.id == listing_id))
    logger.info("listing_deleted", listing_id=str(listing_id))
