"""
Retry of transactions that failed because the database connection was lost.

Only connection loss is retried. Domain errors, integrity violations and any
other database error propagate on the first failure.
"""

from __future__ import annotations

import time
from typing import Callable, Optional, TypeVar

import structlog
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import DBAPIError, DisconnectionError

from rental_market.config import DB_RETRY_ATTEMPTS, DB_RETRY_DELAY
from rental_market.metrics import db_retries

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def is_transient(err: Exception) -> bool:
    """
    Determine whether a database error is a lost connection worth retrying.

    Args:
        err: Exception raised while running a transaction

    Returns:
        bool: True for disconnects and errors that invalidated the connection
    """
    if isinstance(err, DisconnectionError):
        return True
    if isinstance(err, DBAPIError) and err.connection_invalidated:
        return True
    return False


def run_with_retry(
    engine: Engine,
    work: Callable[[Connection], T],
    attempts: Optional[int] = None,
    delay: Optional[float] = None,
) -> T:
    """
    Run ``work`` inside a fresh ``engine.begin()`` transaction, retrying on connection loss.

    Each attempt gets its own transaction, so a retried attempt never sees
    partial writes from the failed one.

    Args:
        engine: SQLAlchemy Engine
        work: Callable receiving the transaction's Connection
        attempts: Maximum number of attempts (default: DB_RETRY_ATTEMPTS)
        delay: Base sleep between attempts in seconds, multiplied by the attempt number

    Returns:
        Whatever ``work`` returns

    Raises:
        Exception: The last error if it is not transient or attempts are exhausted
    """
    max_attempts = max(1, attempts if attempts is not None else DB_RETRY_ATTEMPTS)
    base_delay = delay if delay is not None else DB_RETRY_DELAY

    attempt = 0
    while True:
        attempt += 1
        try:
            with engine.begin() as conn:
                return work(conn)
        except (DBAPIError, DisconnectionError) as err:
            if attempt >= max_attempts or not is_transient(err):
                raise
            logger.warning(
                "db_transaction_retry",
                attempt=attempt,
                max_attempts=max_attempts,
                error=str(err),
            )
            db_retries.inc()
            time.sleep(base_delay * attempt)
