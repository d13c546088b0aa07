import uuid
from typing import Any
from uuid import UUID

from sqlalchemy import delete, insert
from sqlalchemy.engine import Connection

from rental_market.models.favorites import Favorite
from rental_market.utils.dates import utc_now


def insert_favorite(conn: Connection, user_id: UUID, listing_id: UUID) -> dict[str, Any]:
    """Save a listing for a user. A second save of the same pair raises IntegrityError."""
    row = {
        "id": uuid.uuid4(),
        "user_id": user_id,
        "listing_id": listing_id,
        "created_at": utc_now(),
    }
    conn.execute(insert(Favorite).values(row))
    return row


def delete_favorite(conn: Connection, user_id: UUID, listing_id: UUID) -> int:
    """
    Remove a saved listing.

    Returns:
        int: Number of rows deleted (0 if it was not saved)
    """
    result = conn.execute(
        delete(Favorite).where(Favorite.user_id == user_id, Favorite.listing_id == listing_id)
    )
    return result.rowcount
