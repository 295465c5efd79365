"""Writes whose cache invalidation fails must surface a 500 after the commit."""

from typing import Generator

from fastapi.testclient import TestClient
import pytest

from minibnb.core.config import settings
from minibnb.models import Booking, Listing

API = settings.api_v1_prefix


@pytest.fixture
def broken_keys(monkeypatch, key_store):
    async def keys(pattern):
        raise ConnectionError("store unavailable")

    monkeypatch.setattr(key_store, "keys", keys)


@pytest.fixture
def lenient_client(app, broken_keys) -> Generator[TestClient, None, None]:
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def _assert_invalidation_failure(response):
    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "CACHE_INVALIDATION_FAILED"


def test_listing_update_reports_invalidation_failure(lenient_client, db, listing, host_headers):
    response = lenient_client.patch(
        f"{API}/listings/{listing.id}", json={"price": 175}, headers=host_headers
    )

    _assert_invalidation_failure(response)
    db.expire_all()
    assert db.get(Listing, listing.id).price == 175


def test_booking_create_reports_invalidation_failure(lenient_client, db, listing, guest_headers):
    response = lenient_client.post(
        f"{API}/bookings",
        json={
            "listing_id": listing.id,
            "check_in": "2024-09-01",
            "check_out": "2024-09-03",
            "guest_count": 1,
        },
        headers=guest_headers,
    )

    _assert_invalidation_failure(response)
    assert db.query(Booking).filter(Booking.listing_id == listing.id).count() == 1


def test_reads_still_succeed_while_invalidation_is_broken(lenient_client, listing):
    response = lenient_client.get(f"{API}/listings/{listing.id}")

    assert response.status_code == 200
    assert response.json()["data"]["id"] == listing.id
