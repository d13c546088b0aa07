"""
Readers for the periods that make a listing unavailable.

A listing is unavailable on a day if an accepted reservation or a blocked
period covers it. Pending and rejected reservations never count.
"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.engine import Connection

from rental_market.models.blocked_periods import BlockedPeriod
from rental_market.models.reservations import Reservation, ReservationStatus
from rental_market.schemas.availability import Period

reservations = Reservation.__table__
blocked_periods = BlockedPeriod.__table__


def get_blocked_period(conn: Connection, blocked_period_id: UUID) -> Optional[dict[str, Any]]:
    """
    Fetch a blocked period by ID.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        blocked_period_id (UUID): Blocked period ID.

    Returns:
        Optional[dict[str, Any]]: Blocked period row as a dict, or None if not found.
    """
    row = (
        conn.execute(select(blocked_periods).where(blocked_periods.c.id == blocked_period_id))
        .mappings()
        .one_or_none()
    )
    return dict(row) if row else None


def list_blocked_periods(conn: Connection, listing_id: UUID) -> list[dict[str, Any]]:
    """Blocked periods of a listing, ordered by start date."""
    result = conn.execute(
        select(blocked_periods)
        .where(blocked_periods.c.listing_id == listing_id)
        .order_by(blocked_periods.c.start_date)
    )
    return [dict(row) for row in result.mappings()]


def list_unavailable_periods(
    conn: Connection,
    listing_id: UUID,
    exclude_reservation_id: Optional[UUID] = None,
) -> list[Period]:
    """
    Accepted reservations and blocked periods of a listing, ordered by start date.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        listing_id (UUID): Listing ID.
        exclude_reservation_id (Optional[UUID]): Reservation to leave out, used when
            re-validating that reservation against everything else.

    Returns:
        list[Period]: Periods the listing cannot be booked or blocked over.
    """
    accepted_stmt = select(
        reservations.c.id, reservations.c.start_date, reservations.c.end_date
    ).where(
        reservations.c.listing_id == listing_id,
        reservations.c.status == ReservationStatus.ACCEPTED.value,
    )
    if exclude_reservation_id is not None:
        accepted_stmt = accepted_stmt.where(reservations.c.id != exclude_reservation_id)

    blocked_stmt = select(
        blocked_periods.c.id, blocked_periods.c.start_date, blocked_periods.c.end_date
    ).where(blocked_periods.c.listing_id == listing_id)

    periods = [
        Period(kind="reservation", id=row.id, start_date=row.start_date, end_date=row.end_date)
        for row in conn.execute(accepted_stmt)
    ]
    periods.extend(
        Period(kind="blocked", id=row.id, start_date=row.start_date, end_date=row.end_date)
        for row in conn.execute(blocked_stmt)
    )
    return sorted(periods, key=lambda p: (p.start_date, p.end_date))
