from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.engine import Connection

from rental_market.models.users import User

users = User.__table__


def get_user(conn: Connection, user_id: UUID) -> Optional[dict[str, Any]]:
    """
    Fetch a user profile by ID.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        user_id (UUID): User ID to look up.

    Returns:
        Optional[dict[str, Any]]: User row as a dict, or None if not found.
    """
    row = conn.execute(select(users).where(users.c.id == user_id)).mappings().one_or_none()
    return dict(row) if row else None


def user_exists(conn: Connection, user_id: UUID) -> bool:
    """
    Check if a user profile exists.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        user_id (UUID): User ID to check.

    Returns:
        bool: True if the user exists, False otherwise.
    """
    result = conn.execute(select(users.c.id).where(users.c.id == user_id))
    return result.first() is not None


def email_taken(conn: Connection, email: str) -> bool:
    """Return True if any profile already uses ``email`` (case-insensitive)."""
    result = conn.execute(select(users.c.id).where(users.c.email == email.strip().lower()))
    return result.first() is not None
