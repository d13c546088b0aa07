"""
Storage interface the availability engine runs against.

The engine never touches a global database client. It is handed an
``AvailabilityStore`` bound to one transaction, so every read it validates
against and every write it makes commit or roll back together.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional, Protocol
from uuid import UUID

from sqlalchemy.engine import Connection

from rental_market.db.readers.availability import get_blocked_period, list_unavailable_periods
from rental_market.db.readers.listings import get_listing
from rental_market.db.readers.reservations import get_reservation
from rental_market.db.writers.availability import (
    delete_blocked_period,
    insert_blocked_period,
    occupy_nights,
)
from rental_market.db.writers.reservations import insert_reservation, update_reservation_status
from rental_market.models.reservations import ReservationStatus
from rental_market.schemas.availability import Period


class AvailabilityStore(Protocol):
    """
    Persistence operations needed by AvailabilityEngine.

    Implementations raise ConflictError when a write would make two
    accepted/blocked periods of one listing overlap, even if the engine's own
    check passed (a concurrent writer got there first).
    """

    def get_listing(self, listing_id: UUID, for_update: bool = False) -> Optional[dict[str, Any]]:
        ...

    def get_reservation(
        self, reservation_id: UUID, for_update: bool = False
    ) -> Optional[dict[str, Any]]:
        ...

    def get_blocked_period(self, blocked_period_id: UUID) -> Optional[dict[str, Any]]:
        ...

    def list_unavailable_periods(
        self, listing_id: UUID, exclude_reservation_id: Optional[UUID] = None
    ) -> list[Period]:
        ...

    def create_reservation(
        self,
        listing_id: UUID,
        guest_id: UUID,
        start_date: date,
        end_date: date,
        total_price: int,
    ) -> dict[str, Any]:
        ...

    def accept_reservation(self, reservation: dict[str, Any]) -> None:
        ...

    def reject_reservation(self, reservation_id: UUID) -> None:
        ...

    def create_blocked_period(
        self, listing_id: UUID, start_date: date, end_date: date
    ) -> dict[str, Any]:
        ...

    def delete_blocked_period(self, blocked_period_id: UUID) -> None:
        ...


class SqlAvailabilityStore:
    """
    AvailabilityStore over a SQLAlchemy Connection inside an open transaction.

    Example:
        >>> with engine.begin() as conn:
        ...     availability = AvailabilityEngine(SqlAvailabilityStore(conn))
        ...     availability.block_dates(listing_id, owner_id, start, end)
    """

    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def get_listing(self, listing_id: UUID, for_update: bool = False) -> Optional[dict[str, Any]]:
        return get_listing(self.conn, listing_id, for_update=for_update)

    def get_reservation(
        self, reservation_id: UUID, for_update: bool = False
    ) -> Optional[dict[str, Any]]:
        return get_reservation(self.conn, reservation_id, for_update=for_update)

    def get_blocked_period(self, blocked_period_id: UUID) -> Optional[dict[str, Any]]:
        return get_blocked_period(self.conn, blocked_period_id)

    def list_unavailable_periods(
        self, listing_id: UUID, exclude_reservation_id: Optional[UUID] = None
    ) -> list[Period]:
        return list_unavailable_periods(
            self.conn, listing_id, exclude_reservation_id=exclude_reservation_id
        )

    def create_reservation(
        self,
        listing_id: UUID,
        guest_id: UUID,
        start_date: date,
        end_date: date,
        total_price: int,
    ) -> dict[str, Any]:
        return insert_reservation(
            self.conn, listing_id, guest_id, start_date, end_date, total_price
        )

    def accept_reservation(self, reservation: dict[str, Any]) -> None:
        # Nights first: a conflict leaves the status untouched
        occupy_nights(
            self.conn,
            reservation["listing_id"],
            reservation["start_date"],
            reservation["end_date"],
            reservation_id=reservation["id"],
        )
        update_reservation_status(self.conn, reservation["id"], ReservationStatus.ACCEPTED)

    def reject_reservation(self, reservation_id: UUID) -> None:
        update_reservation_status(self.conn, reservation_id, ReservationStatus.REJECTED)

    def create_blocked_period(
        self, listing_id: UUID, start_date: date, end_date: date
    ) -> dict[str, Any]:
        return insert_blocked_period(self.conn, listing_id, start_date, end_date)

    def delete_blocked_period(self, blocked_period_id: UUID) -> None:
        delete_blocked_period(self.conn, blocked_period_id)
