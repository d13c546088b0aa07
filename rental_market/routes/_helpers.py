"""
Internal helper functions for route handlers.

Lookups that either return the row or raise the domain error the boundary
maps to 404/403.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy.engine import Connection

from rental_market.db.readers.listings import get_listing
from rental_market.db.readers.users import user_exists
from rental_market.errors import AuthorizationError, NotFoundError


def validate_user_exists(conn: Connection, user_id: UUID) -> None:
    """
    Validate that the acting user has a marketplace profile.

    Raises:
        NotFoundError: If no profile exists for ``user_id``
    """
    if not user_exists(conn, user_id):
        raise NotFoundError(f"User {user_id} not found")


def get_listing_or_404(conn: Connection, listing_id: UUID) -> dict[str, Any]:
    """
    Fetch a listing, raising NotFoundError if it does not exist.

    Args:
        conn: Database connection
        listing_id: Listing ID

    Returns:
        dict: Listing row
    """
    listing = get_listing(conn, listing_id)
    if listing is None:
        raise NotFoundError(f"Listing {listing_id} not found")
    return listing


def get_owned_listing_or_403(conn: Connection, listing_id: UUID, user_id: UUID) -> dict[str, Any]:
    """
    Fetch a listing the acting user owns.

    Args:
        conn: Database connection
        listing_id: Listing ID
        user_id: Acting user

    Returns:
        dict: Listing row

    Raises:
        NotFoundError: Listing does not exist
        AuthorizationError: Listing belongs to someone else
    """
    listing = get_listing_or_404(conn, listing_id)
    if listing["owner_id"] != user_id:
        raise AuthorizationError("Only the listing owner can do this")
    return listing
