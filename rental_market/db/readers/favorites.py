from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.engine import Connection

from rental_market.models.favorites import Favorite
from rental_market.models.listings import Listing

favorites = Favorite.__table__
listings = Listing.__table__


def get_favorite(conn: Connection, user_id: UUID, listing_id: UUID) -> Optional[dict[str, Any]]:
    row = (
        conn.execute(
            select(favorites).where(
                favorites.c.user_id == user_id, favorites.c.listing_id == listing_id
            )
        )
        .mappings()
        .one_or_none()
    )
    return dict(row) if row else None


def list_favorite_listings(conn: Connection, user_id: UUID) -> list[dict[str, Any]]:
    """
    Listings a user has saved, most recently saved first.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        user_id (UUID): User ID.

    Returns:
        list[dict[str, Any]]: Listing rows.
    """
    result = conn.execute(
        select(listings)
        .join(favorites, favorites.c.listing_id == listings.c.id)
        .where(favorites.c.user_id == user_id)
        .order_by(favorites.c.created_at.desc())
    )
    return [dict(row) for row in result.mappings()]
