from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from rental_market.db.readers.favorites import get_favorite, list_favorite_listings
from rental_market.db.writers.favorites import delete_favorite, insert_favorite
from rental_market.dependencies import get_acting_user_id, get_db_engine
from rental_market.errors import NotFoundError, RentalMarketError
from rental_market.routes._errors import to_http_exception
from rental_market.routes._helpers import get_listing_or_404, validate_user_exists
from rental_market.schemas.favorites import FavoriteOut
from rental_market.schemas.listings import ListingOut

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/favorites/{listing_id}", status_code=status.HTTP_201_CREATED)
def add_favorite(
    listing_id: UUID,
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> FavoriteOut:
    """Save a listing for the acting user. Saving it again returns the existing row."""
    try:
        with engine.connect() as conn:
            validate_user_exists(conn, user_id)
            get_listing_or_404(conn, listing_id)
            favorite = get_favorite(conn, user_id, listing_id)

        if favorite is None:
            try:
                with engine.begin() as conn:
                    favorite = insert_favorite(conn, user_id, listing_id)
                logger.info("favorite_added", user_id=str(user_id), listing_id=str(listing_id))
            except IntegrityError:
                # A concurrent save won the unique key, or the listing was just deleted
                with engine.connect() as conn:
                    favorite = get_favorite(conn, user_id, listing_id)
                if favorite is None:
                    raise NotFoundError(f"Listing {listing_id} not found")

        return FavoriteOut.model_validate(favorite)

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("favorite_add_failed", listing_id=str(listing_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/favorites/{listing_id}", status_code=status.HTTP_200_OK)
def remove_favorite(
    listing_id: UUID,
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, str]:
    """Un-save a listing. 404 if it was not saved."""
    try:
        with engine.begin() as conn:
            if not delete_favorite(conn, user_id, listing_id):
                raise NotFoundError(f"Listing {listing_id} is not a favorite")

        return {"message": f"Listing {listing_id} removed from favorites"}

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("favorite_remove_failed", listing_id=str(listing_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/favorites")
def list_favorites(
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> list[ListingOut]:
    """Listings the acting user has saved."""
    try:
        with engine.connect() as conn:
            rows = list_favorite_listings(conn, user_id)
        return [ListingOut.model_validate(row) for row in rows]

    except Exception as e:
        logger.exception("favorites_fetch_failed", user_id=str(user_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")
