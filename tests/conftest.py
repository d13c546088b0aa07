"""
Shared fixtures: an in-memory SQLite database per test and a FastAPI client bound to it.
"""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from typing import Any, Callable, Generator  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402

from rental_market.db.engine import create_db_engine  # noqa: E402
from rental_market.db.writers.listings import insert_listing  # noqa: E402
from rental_market.db.writers.users import insert_user  # noqa: E402
from rental_market.models import (  # noqa: E402, F401
    blocked_periods,
    favorites,
    listings,
    occupied_nights,
    reservations,
    users,
)
from rental_market.models.base import Base  # noqa: E402


@pytest.fixture
def db_engine() -> Generator[Engine, None, None]:
    """Fresh in-memory SQLite database with the full schema."""
    engine = create_db_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def client(db_engine: Engine) -> Generator[TestClient, None, None]:
    """FastAPI test client whose routes use the test database."""
    from rental_market.dependencies import get_db_engine
    from rental_market.main import app

    app.dependency_overrides[get_db_engine] = lambda: db_engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_engine: Engine) -> Callable[[str], UUID]:
    """Factory inserting a user profile and returning its id."""

    def _make(email: str, name: str = "Test User") -> UUID:
        with db_engine.begin() as conn:
            return insert_user(conn, email=email, name=name)["id"]

    return _make


@pytest.fixture
def make_listing(db_engine: Engine) -> Callable[..., UUID]:
    """Factory inserting a listing owned by ``owner_id`` and returning its id."""

    def _make(owner_id: UUID, price: int = 100, **overrides: Any) -> UUID:
        data = {
            "title": "Beach House",
            "description": "Steps from the sand",
            "image_src": None,
            "category": "Beach",
            "room_count": 2,
            "bathroom_count": 1,
            "guest_count": 4,
            "location_value": "PT",
            "price": price,
        }
        data.update(overrides)
        with db_engine.begin() as conn:
            return insert_listing(conn, owner_id=owner_id, data=data)["id"]

    return _make


@pytest.fixture
def host_id(make_user: Callable[[str], UUID]) -> UUID:
    return make_user("host@example.com")


@pytest.fixture
def guest_id(make_user: Callable[[str], UUID]) -> UUID:
    return make_user("guest@example.com")


@pytest.fixture
def other_guest_id(make_user: Callable[[str], UUID]) -> UUID:
    return make_user("other-guest@example.com")


@pytest.fixture
def listing_id(make_listing: Callable[..., UUID], host_id: UUID) -> UUID:
    """A $100/night listing owned by ``host_id``."""
    return make_listing(host_id, price=100)
