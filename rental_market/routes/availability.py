from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.engine import Connection, Engine

from rental_market.db.readers.availability import list_blocked_periods, list_unavailable_periods
from rental_market.db.retry import run_with_retry
from rental_market.db.store import SqlAvailabilityStore
from rental_market.dependencies import get_acting_user_id, get_db_engine
from rental_market.errors import RentalMarketError
from rental_market.routes._errors import to_http_exception
from rental_market.routes._helpers import get_listing_or_404
from rental_market.schemas.availability import BlockedPeriodCreatePayload, BlockedPeriodOut, Period
from rental_market.services.availability import AvailabilityEngine

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/availability")
def list_blocked_periods_endpoint(
    listing_id: UUID = Query(..., description="Listing whose blocks to list"),
    engine: Engine = Depends(get_db_engine),
) -> list[BlockedPeriodOut]:
    """Blocked periods of a listing, ordered by start date."""
    try:
        with engine.connect() as conn:
            get_listing_or_404(conn, listing_id)
            rows = list_blocked_periods(conn, listing_id)
        return [BlockedPeriodOut.model_validate(row) for row in rows]

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("blocked_periods_fetch_failed", listing_id=str(listing_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/availability/{listing_id}/unavailable")
def list_unavailable_periods_endpoint(
    listing_id: UUID,
    engine: Engine = Depends(get_db_engine),
) -> list[Period]:
    """
    Accepted reservations and blocked periods of a listing, for calendar rendering.

    Pending requests are not included; they do not make dates unavailable.
    """
    try:
        with engine.connect() as conn:
            get_listing_or_404(conn, listing_id)
            return list_unavailable_periods(conn, listing_id)

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("unavailable_fetch_failed", listing_id=str(listing_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/availability", status_code=status.HTTP_201_CREATED)
def block_dates(
    payload: BlockedPeriodCreatePayload,
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> BlockedPeriodOut:
    """
    Block a date range on one of the acting user's listings.

    Fails with 409 if the range overlaps an accepted reservation or another block.
    """

    def work(conn: Connection) -> dict:
        return AvailabilityEngine(SqlAvailabilityStore(conn)).block_dates(
            payload.listing_id, user_id, payload.start_date, payload.end_date
        )

    try:
        blocked = run_with_retry(engine, work)
        return BlockedPeriodOut.model_validate(blocked)

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("block_dates_failed", listing_id=str(payload.listing_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/availability/{blocked_period_id}", status_code=status.HTTP_200_OK)
def unblock_dates(
    blocked_period_id: UUID,
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, str]:
    """
    Remove a blocked period from one of the acting user's listings.

    Returns:
        dict: Message confirming removal
    """

    def work(conn: Connection) -> None:
        AvailabilityEngine(SqlAvailabilityStore(conn)).unblock_dates(blocked_period_id, user_id)

    try:
        run_with_retry(engine, work)
        return {"message": f"Blocked period {blocked_period_id} removed"}

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(
            "unblock_dates_failed", blocked_period_id=str(blocked_period_id), error=str(e)
        )
        raise HTTPException(status_code=500, detail="Internal server error")
