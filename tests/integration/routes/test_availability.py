"""
Integration tests for /availability endpoints (host calendar blocks).
"""

from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from rental_market.utils.dates import utc_today

START = utc_today() + timedelta(days=30)


def day(offset: int) -> str:
    return (START + timedelta(days=offset)).isoformat()


def _user(client: TestClient, email: str) -> dict[str, str]:
    user_id = client.post("/users", json={"email": email}).json()["id"]
    return {"X-User-Id": user_id}


@pytest.fixture
def host(client: TestClient) -> dict[str, str]:
    return _user(client, "host@example.com")


@pytest.fixture
def guest(client: TestClient) -> dict[str, str]:
    return _user(client, "guest@example.com")


@pytest.fixture
def listing(client: TestClient, host: dict[str, str]) -> dict:
    response = client.post(
        "/listings",
        json={
            "title": "Farmhouse",
            "category": "Countryside",
            "room_count": 3,
            "bathroom_count": 2,
            "guest_count": 6,
            "location_value": "FR",
            "price": 180,
        },
        headers=host,
    )
    return response.json()


def block(client: TestClient, listing_id: str, headers: dict[str, str], start: str, end: str):
    return client.post(
        "/availability",
        json={"listing_id": listing_id, "start_date": start, "end_date": end},
        headers=headers,
    )


@pytest.mark.integration
def test_block_and_list(client: TestClient, listing: dict, host: dict[str, str]) -> None:
    block(client, listing["id"], host, day(10), day(12))
    created = block(client, listing["id"], host, day(0), day(2))

    assert created.status_code == 201
    assert created.json()["start_date"] == day(0)

    response = client.get("/availability", params={"listing_id": listing["id"]})
    assert [b["start_date"] for b in response.json()] == [day(0), day(10)]


@pytest.mark.integration
def test_block_overlapping_block_is_409(
    client: TestClient, listing: dict, host: dict[str, str]
) -> None:
    block(client, listing["id"], host, day(0), day(5))

    response = block(client, listing["id"], host, day(5), day(8))

    assert response.status_code == 409


@pytest.mark.integration
def test_block_over_accepted_reservation_is_409(
    client: TestClient, listing: dict, host: dict[str, str], guest: dict[str, str]
) -> None:
    reservation = client.post(
        "/reservations",
        json={"listing_id": listing["id"], "start_date": day(3), "end_date": day(6)},
        headers=guest,
    ).json()
    client.patch(f"/reservations/{reservation['id']}", json={"decision": "accept"}, headers=host)

    response = block(client, listing["id"], host, day(0), day(3))

    assert response.status_code == 409


@pytest.mark.integration
def test_booking_over_block_is_409(
    client: TestClient, listing: dict, host: dict[str, str], guest: dict[str, str]
) -> None:
    block(client, listing["id"], host, day(0), day(5))

    response = client.post(
        "/reservations",
        json={"listing_id": listing["id"], "start_date": day(4), "end_date": day(7)},
        headers=guest,
    )

    assert response.status_code == 409


@pytest.mark.integration
def test_block_by_non_owner_is_403(
    client: TestClient, listing: dict, guest: dict[str, str]
) -> None:
    response = block(client, listing["id"], guest, day(0), day(2))

    assert response.status_code == 403


@pytest.mark.integration
def test_block_zero_length_is_400(client: TestClient, listing: dict, host: dict[str, str]) -> None:
    response = block(client, listing["id"], host, day(1), day(1))

    assert response.status_code == 400


@pytest.mark.integration
def test_block_longer_than_max_range_is_400(
    client: TestClient, listing: dict, host: dict[str, str]
) -> None:
    response = block(client, listing["id"], host, day(0), "9999-12-31")

    assert response.status_code == 400


@pytest.mark.integration
def test_block_ending_on_last_representable_day(
    client: TestClient, listing: dict, host: dict[str, str]
) -> None:
    response = block(client, listing["id"], host, "9999-12-30", "9999-12-31")

    assert response.status_code == 201
    assert response.json()["end_date"] == "9999-12-31"


@pytest.mark.integration
def test_unblock_frees_dates(
    client: TestClient, listing: dict, host: dict[str, str], guest: dict[str, str]
) -> None:
    blocked = block(client, listing["id"], host, day(0), day(5)).json()

    response = client.delete(f"/availability/{blocked['id']}", headers=host)

    assert response.status_code == 200
    booking = client.post(
        "/reservations",
        json={"listing_id": listing["id"], "start_date": day(0), "end_date": day(5)},
        headers=guest,
    )
    assert booking.status_code == 201


@pytest.mark.integration
def test_unblock_by_non_owner_is_403(
    client: TestClient, listing: dict, host: dict[str, str], guest: dict[str, str]
) -> None:
    blocked = block(client, listing["id"], host, day(0), day(5)).json()

    response = client.delete(f"/availability/{blocked['id']}", headers=guest)

    assert response.status_code == 403


@pytest.mark.integration
def test_unblock_unknown_period_is_404(client: TestClient, host: dict[str, str]) -> None:
    response = client.delete(f"/availability/{uuid4()}", headers=host)

    assert response.status_code == 404


@pytest.mark.integration
def test_unavailable_lists_accepted_and_blocked_only(
    client: TestClient,
    listing: dict,
    host: dict[str, str],
    guest: dict[str, str],
) -> None:
    block(client, listing["id"], host, day(10), day(12))
    accepted = client.post(
        "/reservations",
        json={"listing_id": listing["id"], "start_date": day(0), "end_date": day(3)},
        headers=guest,
    ).json()
    client.patch(f"/reservations/{accepted['id']}", json={"decision": "accept"}, headers=host)
    client.post(
        "/reservations",
        json={"listing_id": listing["id"], "start_date": day(20), "end_date": day(22)},
        headers=guest,
    )

    response = client.get(f"/availability/{listing['id']}/unavailable")

    assert response.status_code == 200
    periods = response.json()
    assert [(p["kind"], p["start_date"]) for p in periods] == [
        ("reservation", day(0)),
        ("blocked", day(10)),
    ]


@pytest.mark.integration
def test_unavailable_for_unknown_listing_is_404(client: TestClient) -> None:
    response = client.get(f"/availability/{uuid4()}/unavailable")

    assert response.status_code == 404
