"""
Integration tests for /listings endpoints.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from rental_market.config import CLEANING_FEE, SERVICE_FEE
from rental_market.utils.dates import utc_today

START = utc_today() + timedelta(days=30)


def day(offset: int) -> str:
    return (START + timedelta(days=offset)).isoformat()


def listing_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "title": "Cabin in the woods",
        "description": "Quiet",
        "category": "Cabin",
        "room_count": 2,
        "bathroom_count": 1,
        "guest_count": 4,
        "location_value": "NO",
        "price": 100,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def host(client: TestClient) -> dict[str, str]:
    user_id = client.post("/users", json={"email": "host@example.com"}).json()["id"]
    return {"X-User-Id": user_id}


@pytest.fixture
def guest(client: TestClient) -> dict[str, str]:
    user_id = client.post("/users", json={"email": "guest@example.com"}).json()["id"]
    return {"X-User-Id": user_id}


@pytest.mark.integration
def test_create_listing_sets_owner(client: TestClient, host: dict[str, str]) -> None:
    response = client.post("/listings", json=listing_payload(), headers=host)

    assert response.status_code == 201
    data = response.json()
    assert data["owner_id"] == host["X-User-Id"]
    assert data["price"] == 100


@pytest.mark.integration
def test_create_listing_requires_identity(client: TestClient) -> None:
    response = client.post("/listings", json=listing_payload())

    assert response.status_code == 401


@pytest.mark.integration
def test_create_listing_for_unknown_user_is_404(client: TestClient) -> None:
    response = client.post(
        "/listings", json=listing_payload(), headers={"X-User-Id": str(uuid4())}
    )

    assert response.status_code == 404


@pytest.mark.integration
def test_create_listing_rejects_non_positive_price(
    client: TestClient, host: dict[str, str]
) -> None:
    response = client.post("/listings", json=listing_payload(price=0), headers=host)

    assert response.status_code == 422


@pytest.mark.integration
def test_search_filters_by_category_and_capacity(client: TestClient, host: dict[str, str]) -> None:
    client.post("/listings", json=listing_payload(category="Cabin", guest_count=2), headers=host)
    client.post("/listings", json=listing_payload(category="Cabin", guest_count=6), headers=host)
    client.post("/listings", json=listing_payload(category="Beach", guest_count=6), headers=host)

    response = client.get("/listings", params={"category": "Cabin", "min_guests": 4})

    assert response.status_code == 200
    results = response.json()
    assert len(results) == 1
    assert results[0]["guest_count"] == 6


@pytest.mark.integration
def test_search_excludes_listings_unavailable_in_window(
    client: TestClient, host: dict[str, str]
) -> None:
    blocked = client.post("/listings", json=listing_payload(title="Blocked"), headers=host).json()
    free = client.post("/listings", json=listing_payload(title="Free"), headers=host).json()
    client.post(
        "/availability",
        json={"listing_id": blocked["id"], "start_date": day(0), "end_date": day(5)},
        headers=host,
    )

    response = client.get("/listings", params={"start_date": day(5), "end_date": day(7)})

    assert [listing["id"] for listing in response.json()] == [free["id"]]


@pytest.mark.integration
def test_search_window_accepts_utc_datetimes(client: TestClient, host: dict[str, str]) -> None:
    blocked = client.post("/listings", json=listing_payload(title="Blocked"), headers=host).json()
    free = client.post("/listings", json=listing_payload(title="Free"), headers=host).json()
    client.post(
        "/availability",
        json={"listing_id": blocked["id"], "start_date": day(0), "end_date": day(5)},
        headers=host,
    )

    response = client.get(
        "/listings",
        params={"start_date": f"{day(5)}T10:00:00Z", "end_date": f"{day(7)}T10:00:00Z"},
    )

    assert response.status_code == 200
    assert [listing["id"] for listing in response.json()] == [free["id"]]


@pytest.mark.integration
def test_search_requires_both_window_dates(client: TestClient) -> None:
    response = client.get("/listings", params={"start_date": day(0)})

    assert response.status_code == 400


@pytest.mark.integration
def test_list_my_listings(client: TestClient, host: dict[str, str], guest: dict[str, str]) -> None:
    client.post("/listings", json=listing_payload(), headers=host)

    assert len(client.get("/listings/mine", headers=host).json()) == 1
    assert client.get("/listings/mine", headers=guest).json() == []


@pytest.mark.integration
def test_get_unknown_listing_is_404(client: TestClient) -> None:
    response = client.get(f"/listings/{uuid4()}")

    assert response.status_code == 404


@pytest.mark.integration
def test_quote_includes_fees(client: TestClient, host: dict[str, str]) -> None:
    listing = client.post("/listings", json=listing_payload(price=100), headers=host).json()

    response = client.get(
        f"/listings/{listing['id']}/quote", params={"start_date": day(0), "end_date": day(3)}
    )

    assert response.status_code == 200
    quote = response.json()
    assert quote["nights"] == 3
    assert quote["base_price"] == 300
    assert quote["total_price"] == 300 + CLEANING_FEE + SERVICE_FEE


@pytest.mark.integration
def test_quote_normalises_datetimes_to_utc_days(client: TestClient, host: dict[str, str]) -> None:
    listing = client.post("/listings", json=listing_payload(price=100), headers=host).json()

    response = client.get(
        f"/listings/{listing['id']}/quote",
        params={"start_date": f"{day(0)}T10:00:00Z", "end_date": f"{day(3)}T09:00:00Z"},
    )

    assert response.status_code == 200
    assert response.json()["nights"] == 3


@pytest.mark.integration
def test_quote_rejects_over_long_stay(client: TestClient, host: dict[str, str]) -> None:
    listing = client.post("/listings", json=listing_payload(), headers=host).json()

    response = client.get(
        f"/listings/{listing['id']}/quote",
        params={"start_date": day(0), "end_date": "9999-12-31"},
    )

    assert response.status_code == 400


@pytest.mark.integration
def test_quote_rejects_zero_length_stay(client: TestClient, host: dict[str, str]) -> None:
    listing = client.post("/listings", json=listing_payload(), headers=host).json()

    response = client.get(
        f"/listings/{listing['id']}/quote", params={"start_date": day(0), "end_date": day(0)}
    )

    assert response.status_code == 400


@pytest.mark.integration
def test_owner_can_update_listing(client: TestClient, host: dict[str, str]) -> None:
    listing = client.post("/listings", json=listing_payload(), headers=host).json()

    response = client.patch(f"/listings/{listing['id']}", json={"price": 150}, headers=host)

    assert response.status_code == 200
    assert response.json()["price"] == 150
    assert response.json()["title"] == "Cabin in the woods"


@pytest.mark.integration
def test_non_owner_cannot_update_listing(
    client: TestClient, host: dict[str, str], guest: dict[str, str]
) -> None:
    listing = client.post("/listings", json=listing_payload(), headers=host).json()

    response = client.patch(f"/listings/{listing['id']}", json={"price": 1}, headers=guest)

    assert response.status_code == 403


@pytest.mark.integration
def test_delete_listing_cascades_to_reservations_and_blocks(
    client: TestClient, host: dict[str, str], guest: dict[str, str]
) -> None:
    listing = client.post("/listings", json=listing_payload(), headers=host).json()
    reservation = client.post(
        "/reservations",
        json={"listing_id": listing["id"], "start_date": day(0), "end_date": day(2)},
        headers=guest,
    ).json()
    client.patch(f"/reservations/{reservation['id']}", json={"decision": "accept"}, headers=host)
    client.post(
        "/availability",
        json={"listing_id": listing["id"], "start_date": day(10), "end_date": day(12)},
        headers=host,
    )
    client.post(f"/favorites/{listing['id']}", headers=guest)

    response = client.delete(f"/listings/{listing['id']}", headers=host)

    assert response.status_code == 200
    assert client.get(f"/listings/{listing['id']}").status_code == 404
    assert client.get(f"/reservations/{reservation['id']}", headers=guest).status_code == 404
    assert client.get("/trips", headers=guest).json() == []
    assert client.get("/favorites", headers=guest).json() == []


@pytest.mark.integration
def test_non_owner_cannot_delete_listing(
    client: TestClient, host: dict[str, str], guest: dict[str, str]
) -> None:
    listing = client.post("/listings", json=listing_payload(), headers=host).json()

    response = client.delete(f"/listings/{listing['id']}", headers=guest)

    assert response.status_code == 403
    assert client.get(f"/listings/{listing['id']}").status_code == 200
