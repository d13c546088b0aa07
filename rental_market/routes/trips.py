from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.engine import Engine

from rental_market.db.readers.reservations import list_reservations_for_guest
from rental_market.dependencies import get_acting_user_id, get_db_engine
from rental_market.schemas.reservations import ReservationOut

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/trips")
def list_trips(
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> list[ReservationOut]:
    """
    The acting user's reservations as a guest, ordered by start date.

    Returns:
        list[ReservationOut]: Pending, accepted and rejected trips
    """
    try:
        with engine.connect() as conn:
            rows = list_reservations_for_guest(conn, user_id)
        return [ReservationOut.model_validate(row) for row in rows]

    except Exception as e:
        logger.exception("trips_fetch_failed", user_id=str(user_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")
