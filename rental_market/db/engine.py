"""
SQLAlchemy engine singleton with production-ready connection pooling.

PostgreSQL is the production target. SQLite URLs are accepted for local
development and tests: foreign keys are switched on for every connection and
in-memory databases share a single connection so every request sees the same
schema.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from rental_market.config import DATABASE_URL

if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set.")


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str) -> Engine:
    """
    Build an engine for the given database URL.

    Args:
        url: SQLAlchemy database URL (postgresql://... or sqlite://...)

    Returns:
        Engine: Configured SQLAlchemy engine

    Example:
        >>> test_engine = create_db_engine("sqlite+pysqlite:///:memory:")
        >>> Base.metadata.create_all(test_engine)
    """
    parsed = make_url(url)

    if parsed.get_backend_name() == "sqlite":
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if parsed.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        sqlite_engine = create_engine(url, future=True, echo=False, **kwargs)
        event.listen(sqlite_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine

    return create_engine(
        url,
        future=True,
        # Connection pool settings
        pool_size=10,  # Number of connections to maintain in the pool
        max_overflow=20,  # Additional connections when pool is exhausted
        pool_pre_ping=True,  # Verify connections before using (detect stale connections)
        pool_recycle=3600,  # Recycle connections after 1 hour
        echo=False,
    )


engine: Engine = create_db_engine(DATABASE_URL)


def check_engine_health(db_engine: Optional[Engine] = None) -> bool:
    """
    Check if database engine is healthy and connections are working.

    This function is used by the /ready endpoint to verify database
    connectivity before allowing traffic to the service.

    Args:
        db_engine: Engine to check (defaults to the application engine)

    Returns:
        bool: True if database is reachable and healthy, False otherwise
    """
    try:
        with (db_engine or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
