"""
Writers for blocked periods and the occupied-nights ledger.

Every accepted reservation and every blocked period holds one
``occupied_nights`` row per day of its inclusive range. The primary key on
``(listing_id, night)`` rejects the second of two overlapping writers, and
that rejection is reported as a ConflictError like any other overlap.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Optional
from uuid import UUID

import structlog
from sqlalchemy import delete, insert
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError

from rental_market.errors import ConflictError
from rental_market.models.blocked_periods import BlockedPeriod
from rental_market.models.occupied_nights import OccupiedNight
from rental_market.utils.dates import iter_days, utc_now

logger = structlog.get_logger(__name__)


def occupy_nights(
    conn: Connection,
    listing_id: UUID,
    start_date: date,
    end_date: date,
    reservation_id: Optional[UUID] = None,
    blocked_period_id: Optional[UUID] = None,
) -> None:
    """
    Claim every day of ``[start_date, end_date]`` for a reservation or a blocked period.

    Exactly one of ``reservation_id`` and ``blocked_period_id`` must be given.

    Args:
        conn: Active database connection (within transaction)
        listing_id: Listing ID
        start_date: First day claimed
        end_date: Last day claimed
        reservation_id: Accepted reservation holding the nights
        blocked_period_id: Blocked period holding the nights

    Raises:
        ConflictError: If any of the days is already held
        ValueError: If both or neither owner IDs are given
    """
    if (reservation_id is None) == (blocked_period_id is None):
        raise ValueError("Exactly one of reservation_id or blocked_period_id is required")

    rows = [
        {
            "listing_id": listing_id,
            "night": night,
            "reservation_id": reservation_id,
            "blocked_period_id": blocked_period_id,
        }
        for night in iter_days(start_date, end_date)
    ]

    try:
        conn.execute(insert(OccupiedNight), rows)
    except IntegrityError as e:
        logger.warning(
            "occupied_nights_conflict",
            listing_id=str(listing_id),
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
            error=str(e.orig),
        )
        raise ConflictError("Requested dates are already accepted or blocked") from e


def insert_blocked_period(
    conn: Connection, listing_id: UUID, start_date: date, end_date: date
) -> dict[str, Any]:
    """
    Insert a blocked period and claim its nights.

    Args:
        conn: Active database connection (within transaction)
        listing_id: Listing ID
        start_date: First blocked day
        end_date: Last blocked day

    Returns:
        dict: The inserted row

    Raises:
        ConflictError: If a night is already held; the caller's transaction
            must be rolled back
    """
    now = utc_now()
    row = {
        "id": uuid.uuid4(),
        "listing_id": listing_id,
        "start_date": start_date,
        "end_date": end_date,
        "created_at": now,
        "updated_at": now,
    }
    conn.execute(insert(BlockedPeriod).values(row))
    occupy_nights(conn, listing_id, start_date, end_date, blocked_period_id=row["id"])
    return row


def delete_blocked_period(conn: Connection, blocked_period_id: UUID) -> None:
    """Delete a blocked period and release its nights."""
    conn.execute(
        delete(OccupiedNight).where(OccupiedNight.blocked_period_id == blocked_period_id)
    )
    conn.execute(delete(BlockedPeriod).where(BlockedPeriod.id == blocked_period_id))
