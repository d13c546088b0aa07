import uuid
from typing import Any, Optional

import structlog
from sqlalchemy import insert
from sqlalchemy.engine import Connection

from rental_market.models.users import User
from rental_market.utils.dates import utc_now

logger = structlog.get_logger(__name__)


def insert_user(
    conn: Connection, email: str, name: Optional[str] = None, image: Optional[str] = None
) -> dict[str, Any]:
    """
    Insert a user profile. Emails are stored lower-cased.

    Args:
        conn: Active database connection (within transaction)
        email: Email address, unique across profiles
        name: Display name
        image: Avatar URL on the media host

    Returns:
        dict: The inserted row
    """
    now = utc_now()
    row = {
        "id": uuid.uuid4(),
        "name": name,
        "email": email.strip().lower(),
        "image": image,
        "created_at": now,
        "updated_at": now,
    }
    conn.execute(insert(User).values(row))
    logger.info("user_inserted", user_id=str(row["id"]))
    return row
