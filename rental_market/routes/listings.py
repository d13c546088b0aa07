from typing import Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.engine import Engine

from rental_market.db.readers.listings import list_listings_by_owner, search_listings
from rental_market.db.writers.listings import delete_listing, insert_listing, update_listing
from rental_market.dependencies import get_acting_user_id, get_db_engine
from rental_market.errors import RentalMarketError, ValidationError
from rental_market.routes._errors import to_http_exception
from rental_market.routes._helpers import (
    get_listing_or_404,
    get_owned_listing_or_403,
    validate_user_exists,
)
from rental_market.schemas.common import UtcDate
from rental_market.schemas.listings import (
    ListingCreatePayload,
    ListingOut,
    ListingUpdatePayload,
    PriceQuote,
)
from rental_market.services.availability import validate_range
from rental_market.services.pricing import quote_stay

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/listings", status_code=status.HTTP_201_CREATED)
def create_listing(
    payload: ListingCreatePayload,
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> ListingOut:
    """
    Create a listing owned by the acting user.

    Args:
        payload: Listing fields
        user_id: Acting user (becomes the owner)

    Returns:
        ListingOut: The new listing
    """
    try:
        with engine.begin() as conn:
            validate_user_exists(conn, user_id)
            listing = insert_listing(conn, owner_id=user_id, data=payload.model_dump())

        logger.info("listing_created", listing_id=str(listing["id"]), owner_id=str(user_id))
        return ListingOut.model_validate(listing)

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("listing_creation_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/listings")
def search_listings_endpoint(
    category: Optional[str] = Query(None, description="Exact category"),
    location_value: Optional[str] = Query(None, description="Exact location"),
    min_guests: Optional[int] = Query(None, gt=0, description="Minimum guest capacity"),
    max_price: Optional[int] = Query(None, gt=0, description="Maximum nightly price"),
    start_date: Optional[UtcDate] = Query(None, description="Stay window start"),
    end_date: Optional[UtcDate] = Query(None, description="Stay window end"),
    engine: Engine = Depends(get_db_engine),
) -> list[ListingOut]:
    """
    Search listings.

    With both ``start_date`` and ``end_date``, listings that have an accepted
    reservation or a blocked period overlapping the window are left out.
    """
    try:
        if (start_date is None) != (end_date is None):
            raise ValidationError("start_date and end_date must be given together")
        if start_date is not None and end_date is not None:
            validate_range(start_date, end_date)

        with engine.connect() as conn:
            rows = search_listings(
                conn,
                category=category,
                location_value=location_value,
                min_guests=min_guests,
                max_price=max_price,
                start_date=start_date,
                end_date=end_date,
            )
        return [ListingOut.model_validate(row) for row in rows]

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("listing_search_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/listings/mine")
def list_my_listings(
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> list[ListingOut]:
    """Listings owned by the acting user (host dashboard)."""
    try:
        with engine.connect() as conn:
            rows = list_listings_by_owner(conn, user_id)
        return [ListingOut.model_validate(row) for row in rows]

    except Exception as e:
        logger.exception("owner_listings_failed", user_id=str(user_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/listings/{listing_id}")
def get_listing_endpoint(listing_id: UUID, engine: Engine = Depends(get_db_engine)) -> ListingOut:
    """Fetch one listing."""
    try:
        with engine.connect() as conn:
            listing = get_listing_or_404(conn, listing_id)
        return ListingOut.model_validate(listing)

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("listing_fetch_failed", listing_id=str(listing_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/listings/{listing_id}/quote")
def quote_listing(
    listing_id: UUID,
    start_date: UtcDate = Query(..., description="Check-in day"),
    end_date: UtcDate = Query(..., description="Check-out day"),
    engine: Engine = Depends(get_db_engine),
) -> PriceQuote:
    """
    Price a stay without creating anything.

    Returns:
        PriceQuote: Nights, base price, cleaning fee, service fee and total
    """
    try:
        start_day, end_day = validate_range(start_date, end_date)
        with engine.connect() as conn:
            listing = get_listing_or_404(conn, listing_id)
        return quote_stay(listing["price"], start_day, end_day)

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("listing_quote_failed", listing_id=str(listing_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/listings/{listing_id}", status_code=status.HTTP_200_OK)
def update_listing_endpoint(
    listing_id: UUID,
    payload: ListingUpdatePayload,
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> ListingOut:
    """
    Update a listing. Only its owner may do this.

    Args:
        listing_id: Listing to update
        payload: Fields to update (None values are ignored)
        user_id: Acting user

    Returns:
        ListingOut: The listing after the update
    """
    try:
        with engine.begin() as conn:
            listing = get_owned_listing_or_403(conn, listing_id, user_id)

            update_data = {k: v for k, v in payload.model_dump().items() if v is not None}
            if update_data:
                update_listing(conn, listing_id, update_data)
                listing = get_listing_or_404(conn, listing_id)

        logger.info("listing_updated", listing_id=str(listing_id), fields=sorted(update_data))
        return ListingOut.model_validate(listing)

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("listing_update_failed", listing_id=str(listing_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/listings/{listing_id}", status_code=status.HTTP_200_OK)
def delete_listing_endpoint(
    listing_id: UUID,
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, str]:
    """
    Delete a listing with its reservations, blocked periods and favorites.

    Returns:
        dict: Message confirming deletion
    """
    try:
        with engine.begin() as conn:
            get_owned_listing_or_403(conn, listing_id, user_id)
            delete_listing(conn, listing_id)

        return {"message": f"Listing {listing_id} deleted"}

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("listing_deletion_failed", listing_id=str(listing_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")
