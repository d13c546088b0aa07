from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.engine import Connection

from rental_market.models.listings import Listing
from rental_market.models.reservations import Reservation

reservations = Reservation.__table__
listings = Listing.__table__


def get_reservation(
    conn: Connection, reservation_id: UUID, for_update: bool = False
) -> Optional[dict[str, Any]]:
    """
    Fetch a reservation by ID.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        reservation_id (UUID): Reservation ID.
        for_update (bool): Lock the row until the transaction ends.

    Returns:
        Optional[dict[str, Any]]: Reservation row as a dict, or None if not found.
    """
    stmt = select(reservations).where(reservations.c.id == reservation_id)
    if for_update:
        stmt = stmt.with_for_update()
    row = conn.execute(stmt).mappings().one_or_none()
    return dict(row) if row else None


def list_reservations_for_listing(conn: Connection, listing_id: UUID) -> list[dict[str, Any]]:
    """Every reservation on a listing regardless of status, ordered by start date."""
    result = conn.execute(
        select(reservations)
        .where(reservations.c.listing_id == listing_id)
        .order_by(reservations.c.start_date, reservations.c.created_at)
    )
    return [dict(row) for row in result.mappings()]


def list_reservations_for_guest(conn: Connection, guest_id: UUID) -> list[dict[str, Any]]:
    """A guest's trips, ordered by start date."""
    result = conn.execute(
        select(reservations)
        .where(reservations.c.guest_id == guest_id)
        .order_by(reservations.c.start_date, reservations.c.created_at)
    )
    return [dict(row) for row in result.mappings()]


def list_reservations_for_host(conn: Connection, owner_id: UUID) -> list[dict[str, Any]]:
    """
    Every reservation across all listings owned by ``owner_id``, ordered by start date.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        owner_id (UUID): Host user ID.

    Returns:
        list[dict[str, Any]]: Reservation rows.
    """
    result = conn.execute(
        select(reservations)
        .join(listings, listings.c.id == reservations.c.listing_id)
        .where(listings.c.owner_id == owner_id)
        .order_by(reservations.c.start_date, reservations.c.created_at)
    )
    return [dict(row) for row in result.mappings()]
