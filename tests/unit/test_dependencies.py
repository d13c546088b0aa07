"""
Unit tests for FastAPI dependency injection.
"""

from __future__ import annotations

from unittest.mock import Mock
from uuid import UUID, uuid4

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from rental_market.dependencies import get_acting_user_id, get_db_engine


@pytest.fixture
def actor_client() -> TestClient:
    """App echoing the acting user id."""
    app = FastAPI()

    @app.get("/whoami")
    def whoami(user_id: UUID = Depends(get_acting_user_id)) -> dict[str, str]:
        return {"user_id": str(user_id)}

    return TestClient(app)


@pytest.mark.unit
def test_get_db_engine_dependency() -> None:
    """Test that get_db_engine returns the engine instance."""
    engine = next(get_db_engine())

    assert isinstance(engine, Engine)


@pytest.mark.unit
def test_dependency_injection_provides_same_engine() -> None:
    """Test that multiple calls get the same engine instance."""
    assert next(get_db_engine()) is next(get_db_engine())


@pytest.mark.unit
def test_dependency_injection_can_be_overridden() -> None:
    """Test that dependency can be overridden for testing."""
    app = FastAPI()

    @app.get("/test")
    def test_endpoint(engine: Engine = Depends(get_db_engine)) -> dict[str, str]:
        return {"engine_name": engine.name}

    mock_engine = Mock(spec=Engine)
    mock_engine.name = "mock_engine"
    app.dependency_overrides[get_db_engine] = lambda: mock_engine

    response = TestClient(app).get("/test")

    assert response.status_code == 200
    assert response.json() == {"engine_name": "mock_engine"}


@pytest.mark.unit
def test_acting_user_id_read_from_header(actor_client: TestClient) -> None:
    user_id = uuid4()

    response = actor_client.get("/whoami", headers={"X-User-Id": str(user_id)})

    assert response.status_code == 200
    assert response.json() == {"user_id": str(user_id)}


@pytest.mark.unit
def test_missing_user_header_is_401(actor_client: TestClient) -> None:
    response = actor_client.get("/whoami")

    assert response.status_code == 401


@pytest.mark.unit
def test_malformed_user_header_is_401(actor_client: TestClient) -> None:
    response = actor_client.get("/whoami", headers={"X-User-Id": "not-a-uuid"})

    assert response.status_code == 401
