import uuid
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import insert, update
from sqlalchemy.engine import Connection

from rental_market.models.reservations import Reservation, ReservationStatus
from rental_market.utils.dates import utc_now


def insert_reservation(
    conn: Connection,
    listing_id: UUID,
    guest_id: UUID,
    start_date: date,
    end_date: date,
    total_price: int,
) -> dict[str, Any]:
    """
    Insert a pending reservation.

    Args:
        conn: Active database connection (within transaction)
        listing_id: Listing being booked
        guest_id: Guest user ID
        start_date: Check-in day
        end_date: Check-out day
        total_price: Price computed by the availability engine

    Returns:
        dict: The inserted row
    """
    now = utc_now()
    row = {
        "id": uuid.uuid4(),
        "listing_id": listing_id,
        "guest_id": guest_id,
        "start_date": start_date,
        "end_date": end_date,
        "total_price": total_price,
        "status": ReservationStatus.PENDING.value,
        "created_at": now,
        "updated_at": now,
    }
    conn.execute(insert(Reservation).values(row))
    return row


def update_reservation_status(
    conn: Connection, reservation_id: UUID, status: ReservationStatus
) -> None:
    """Set a reservation's status and bump updated_at."""
    conn.execute(
        update(Reservation)
        .where(Reservation.id == reservation_id)
        .values(status=status.value, updated_at=utc_now())
    )
