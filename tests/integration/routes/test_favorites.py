"""
Integration tests for /favorites endpoints.
"""

from __future__ import annotations

from unittest.mock import patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def guest(client: TestClient) -> dict[str, str]:
    user_id = client.post("/users", json={"email": "guest@example.com"}).json()["id"]
    return {"X-User-Id": user_id}


@pytest.fixture
def listing(client: TestClient) -> dict:
    host_id = client.post("/users", json={"email": "host@example.com"}).json()["id"]
    response = client.post(
        "/listings",
        json={
            "title": "Lake house",
            "category": "Lake",
            "room_count": 2,
            "bathroom_count": 1,
            "guest_count": 4,
            "location_value": "CH",
            "price": 220,
        },
        headers={"X-User-Id": host_id},
    )
    return response.json()


@pytest.mark.integration
def test_add_favorite_is_idempotent(
    client: TestClient, listing: dict, guest: dict[str, str]
) -> None:
    first = client.post(f"/favorites/{listing['id']}", headers=guest)
    second = client.post(f"/favorites/{listing['id']}", headers=guest)

    assert first.status_code == 201
    assert second.json()["id"] == first.json()["id"]
    assert [item["id"] for item in client.get("/favorites", headers=guest).json()] == [
        listing["id"]
    ]


@pytest.mark.integration
def test_remove_favorite(client: TestClient, listing: dict, guest: dict[str, str]) -> None:
    client.post(f"/favorites/{listing['id']}", headers=guest)

    response = client.delete(f"/favorites/{listing['id']}", headers=guest)

    assert response.status_code == 200
    assert client.get("/favorites", headers=guest).json() == []


@pytest.mark.integration
def test_remove_missing_favorite_is_404(
    client: TestClient, listing: dict, guest: dict[str, str]
) -> None:
    response = client.delete(f"/favorites/{listing['id']}", headers=guest)

    assert response.status_code == 404


@pytest.mark.integration
def test_favorite_unknown_listing_is_404(client: TestClient, guest: dict[str, str]) -> None:
    response = client.post(f"/favorites/{uuid4()}", headers=guest)

    assert response.status_code == 404


@pytest.mark.integration
def test_favorites_require_identity(client: TestClient) -> None:
    assert client.get("/favorites").status_code == 401



@pytest.mark.integration
def test_add_favorite_saved_concurrently_returns_existing_row(
    client: TestClient, listing: dict, guest: dict[str, str]
) -> None:
    """The existence check misses a row saved just before the insert."""
    existing = client.post(f"/favorites/{listing['id']}", headers=guest).json()

    with patch(
        "rental_market.routes.favorites.get_favorite", side_effect=[None, existing]
    ) as mock_get:
        response = client.post(f"/favorites/{listing['id']}", headers=guest)

    assert response.status_code == 201
    assert response.json()["id"] == existing["id"]
    assert mock_get.call_count == 2
