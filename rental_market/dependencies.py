"""
FastAPI dependency injection providers.

Dependencies can be overridden in tests using app.dependency_overrides, which
is how the test suite swaps the PostgreSQL engine for an in-memory SQLite one.
"""

from __future__ import annotations

from typing import Generator, Optional
from uuid import UUID

from fastapi import Header, HTTPException, status
from sqlalchemy.engine import Engine

from rental_market.db.engine import engine

USER_ID_HEADER = "X-User-Id"


def get_db_engine() -> Generator[Engine, None, None]:
    """
    Provide database engine for dependency injection.

    Yields:
        Engine: SQLAlchemy database engine

    Testing Example:
        >>> app.dependency_overrides[get_db_engine] = lambda: sqlite_engine
    """
    yield engine


def get_acting_user_id(
    x_user_id: Optional[str] = Header(None, alias=USER_ID_HEADER),
) -> UUID:
    """
    Resolve the authenticated user from the identity provider's header.

    Authentication happens upstream; the gateway forwards the verified user
    id in ``X-User-Id``. Every mutating route takes the result explicitly as
    its actor.

    Args:
        x_user_id: Raw header value

    Returns:
        UUID: Acting user id

    Raises:
        HTTPException: 401 if the header is missing or not a UUID
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    try:
        return UUID(x_user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user id",
        )
