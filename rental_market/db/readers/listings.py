from datetime import date
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import and_, exists, select
from sqlalchemy.engine import Connection

from rental_market.models.blocked_periods import BlockedPeriod
from rental_market.models.listings import Listing
from rental_market.models.reservations import Reservation, ReservationStatus

listings = Listing.__table__
reservations = Reservation.__table__
blocked_periods = BlockedPeriod.__table__


def get_listing(
    conn: Connection, listing_id: UUID, for_update: bool = False
) -> Optional[dict[str, Any]]:
    """
    Fetch a listing by ID.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        listing_id (UUID): Listing ID.
        for_update (bool): Lock the row until the transaction ends (SELECT ... FOR UPDATE).
            Dialects without row locks (SQLite) ignore this.

    Returns:
        Optional[dict[str, Any]]: Listing row as a dict, or None if not found.
    """
    stmt = select(listings).where(listings.c.id == listing_id)
    if for_update:
        stmt = stmt.with_for_update()
    row = conn.execute(stmt).mappings().one_or_none()
    return dict(row) if row else None


def list_listings_by_owner(conn: Connection, owner_id: UUID) -> list[dict[str, Any]]:
    """
    Fetch every listing owned by a user, newest first.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        owner_id (UUID): Host user ID.

    Returns:
        list[dict[str, Any]]: Listing rows.
    """
    result = conn.execute(
        select(listings)
        .where(listings.c.owner_id == owner_id)
        .order_by(listings.c.created_at.desc())
    )
    return [dict(row) for row in result.mappings()]


def search_listings(
    conn: Connection,
    category: Optional[str] = None,
    location_value: Optional[str] = None,
    min_guests: Optional[int] = None,
    max_price: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[dict[str, Any]]:
    """
    Search listings, newest first.

    When both ``start_date`` and ``end_date`` are given, listings with an
    accepted reservation or a blocked period overlapping ``[start_date, end_date]``
    (inclusive) are excluded.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        category (Optional[str]): Exact category match.
        location_value (Optional[str]): Exact location match.
        min_guests (Optional[int]): Listing must sleep at least this many guests.
        max_price (Optional[int]): Nightly price must not exceed this.
        start_date (Optional[date]): First day of the stay window.
        end_date (Optional[date]): Last day of the stay window.

    Returns:
        list[dict[str, Any]]: Matching listing rows.
    """
    stmt = select(listings)

    if category:
        stmt = stmt.where(listings.c.category == category)
    if location_value:
        stmt = stmt.where(listings.c.location_value == location_value)
    if min_guests is not None:
        stmt = stmt.where(listings.c.guest_count >= min_guests)
    if max_price is not None:
        stmt = stmt.where(listings.c.price <= max_price)

    if start_date is not None and end_date is not None:
        accepted_overlap = exists().where(
            and_(
                reservations.c.listing_id == listings.c.id,
                reservations.c.status == ReservationStatus.ACCEPTED.value,
                reservations.c.start_date <= end_date,
                reservations.c.end_date >= start_date,
            )
        )
        blocked_overlap = exists().where(
            and_(
                blocked_periods.c.listing_id == listings.c.id,
                blocked_periods.c.start_date <= end_date,
                blocked_periods.c.end_date >= start_date,
            )
        )
        stmt = stmt.where(~accepted_overlap).where(~blocked_overlap)

    result = conn.execute(stmt.order_by(listings.c.created_at.desc()))
    return [dict(row) for row in result.mappings()]
