from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.engine import Engine

from rental_market.db.readers.users import email_taken, get_user
from rental_market.db.writers.users import insert_user
from rental_market.dependencies import get_acting_user_id, get_db_engine
from rental_market.errors import ConflictError, NotFoundError, RentalMarketError
from rental_market.routes._errors import to_http_exception
from rental_market.schemas.users import UserCreatePayload, UserOut

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/users", status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreatePayload,
    engine: Engine = Depends(get_db_engine),
) -> UserOut:
    """
    Register a marketplace profile.

    Args:
        payload: Name, email and optional avatar URL

    Returns:
        UserOut: The new profile; its id is what the identity provider forwards
    """
    try:
        with engine.begin() as conn:
            if email_taken(conn, payload.email):
                raise ConflictError("Email already registered")
            user = insert_user(conn, email=payload.email, name=payload.name, image=payload.image)

        logger.info("user_created", user_id=str(user["id"]))
        return UserOut.model_validate(user)

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("user_creation_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/users/me")
def get_current_user(
    user_id: UUID = Depends(get_acting_user_id),
    engine: Engine = Depends(get_db_engine),
) -> UserOut:
    """Return the acting user's profile."""
    return _get_user_or_error(engine, user_id)


@router.get("/users/{user_id}")
def get_user_endpoint(user_id: UUID, engine: Engine = Depends(get_db_engine)) -> UserOut:
    """Return a user's public profile."""
    return _get_user_or_error(engine, user_id)


def _get_user_or_error(engine: Engine, user_id: UUID) -> UserOut:
    try:
        with engine.connect() as conn:
            user = get_user(conn, user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return UserOut.model_validate(user)

    except HTTPException:
        raise
    except RentalMarketError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception("user_fetch_failed", user_id=str(user_id), error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")
