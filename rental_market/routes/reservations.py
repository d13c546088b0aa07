from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.engine import Connection, Engine

from rental_market.db.readers.reservations import (
    get_reservation,
    list_reservations_for_host,
    list_reservations_for_listing,
)
from rental_market.db.retry import run_with_retry
from rental_market.db.store import SqlAvailabilityStore
from rental_market.dependencies import get_acting_user_id, get_db_engine
from rental_market.errors import AuthorizationError, NotFoundError, RentalMarketError
from rental_market.routes._errors import to_http_exception
from rental_market.routes._helpers import (
    get_listing_or_404,
    get_owned_listing_or_403,
    validate_user_exists,
)
from rental_market.schemas.reservations import (
    ReservationCreatePayload,
    ReservationDecisionPayload,
    ReservationOut,
)
from rental_market.services.availability import AvailabilityEngine
from rental_market.services.pricing import booking_fees

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/reservations", status_code=status.HTTP_201_CREATED)
def create_reservation(
    payload: ReservationCreatePayload,
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> ReservationOut:
    """
    Request a booking as the acting user.

    The reservation is created pending. Cleaning and service fees are added
    to the nightly total here, not by the engine.

    Args:
        payload: Listing and dates
        user_id: Acting guest

    Returns:
        ReservationOut: The pending reservation
    """

    def work(conn: Connection) -> dict:
        validate_user_exists(conn, user_id)
        return AvailabilityEngine(SqlAvailabilityStore(conn)).propose_booking(
            payload.listing_id,
            user_id,
            payload.start_date,
            payload.end_date,
            fees=booking_fees(),
        )

    try:
        reservation = run_with_retry(engine, work)
        return ReservationOut.model_validate(reservation)

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("reservation_creation_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/reservations/host")
def list_host_reservations(
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> list[ReservationOut]:
    """Every reservation on the acting user's listings (host dashboard)."""
    try:
        with engine.connect() as conn:
            rows = list_reservations_for_host(conn, user_id)
        return [ReservationOut.model_validate(row) for row in rows]

    except Exception as e:
        logger.exception("host_reservations_failed", user_id=str(user_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/reservations/listing/{listing_id}")
def list_listing_reservations(
    listing_id: UUID,
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> list[ReservationOut]:
    """Every reservation on one listing. Only its owner may see them."""
    try:
        with engine.connect() as conn:
            get_owned_listing_or_403(conn, listing_id, user_id)
            rows = list_reservations_for_listing(conn, listing_id)
        return [ReservationOut.model_validate(row) for row in rows]

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(
            "listing_reservations_failed", listing_id=str(listing_id), error=str(e)
        )
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/reservations/{reservation_id}")
def get_reservation_endpoint(
    reservation_id: UUID,
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> ReservationOut:
    """Fetch one reservation. Visible to its guest and to the listing's owner."""
    try:
        with engine.connect() as conn:
            reservation = get_reservation(conn, reservation_id)
            if reservation is None:
                raise NotFoundError(f"Reservation {reservation_id} not found")
            listing = get_listing_or_404(conn, reservation["listing_id"])

        if user_id not in (reservation["guest_id"], listing["owner_id"]):
            raise AuthorizationError("Not allowed to view this reservation")

        return ReservationOut.model_validate(reservation)

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(
            "reservation_fetch_failed", reservation_id=str(reservation_id), error=str(e)
        )
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/reservations/{reservation_id}", status_code=status.HTTP_200_OK)
def decide_reservation(
    reservation_id: UUID,
    payload: ReservationDecisionPayload,
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> ReservationOut:
    """
    Accept or reject a pending reservation as the listing's owner.

    Accepting fails with 409 if the dates now overlap an accepted reservation
    or a blocked period; the reservation then stays pending.

    Args:
        reservation_id: Reservation to decide
        payload: ``{"decision": "accept" | "reject"}``
        user_id: Acting host

    Returns:
        ReservationOut: The reservation after the decision
    """

    def work(conn: Connection) -> dict:
        return AvailabilityEngine(SqlAvailabilityStore(conn)).decide_reservation(
            reservation_id, user_id, payload.decision
        )

    try:
        reservation = run_with_retry(engine, work)
        return ReservationOut.model_validate(reservation)

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(
            "reservation_decision_failed", reservation_id=str(reservation_id), error=str(e)
        )
        raise HTTPException(status_code=500, detail="Internal server error")
