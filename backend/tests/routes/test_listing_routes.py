from datetime import date

import anyio

from minibnb.core.config import settings

API = settings.api_v1_prefix


def _create_payload(**overrides):
    payload = {
        "name": "Garden house with a view",
        "picture_url": "https://example.com/garden.jpg",
        "price": 90,
        "address": "3 Orchard Road",
        "city": "Nantes",
        "max_guests": 3,
    }
    payload.update(overrides)
    return payload


def test_listing_detail_is_served_through_the_cache(client, listing, key_store):
    first = client.get(f"{API}/listings/{listing.id}")
    assert first.status_code == 200
    assert first.json()["data"]["id"] == listing.id
    assert first.headers["cache-control"] == f"private, max-age={settings.listing_detail_cache_ttl}"
    etag = first.headers["etag"]
    assert etag.startswith('W/"')
    assert len(key_store) == 1

    second = client.get(f"{API}/listings/{listing.id}")
    assert second.status_code == 200
    assert second.content == first.content
    assert second.headers["etag"] == etag

    not_modified = client.get(f"{API}/listings/{listing.id}", headers={"If-None-Match": etag})
    assert not_modified.status_code == 304
    assert not_modified.content == b""
    assert not_modified.headers["etag"] == etag


def test_cached_detail_outlives_direct_database_changes(client, db, listing):
    client.get(f"{API}/listings/{listing.id}")

    listing.price = 999
    db.commit()

    assert client.get(f"{API}/listings/{listing.id}").json()["data"]["price"] == 100


def test_patch_invalidates_detail_and_collection(client, listing, host_headers, key_store):
    detail = client.get(f"{API}/listings/{listing.id}")
    client.get(f"{API}/listings?city=Paris")
    assert len(key_store) == 2

    response = client.patch(
        f"{API}/listings/{listing.id}", json={"price": 150}, headers=host_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["price"] == 150
    assert len(key_store) == 0

    refreshed = client.get(
        f"{API}/listings/{listing.id}", headers={"If-None-Match": detail.headers["etag"]}
    )
    assert refreshed.status_code == 200
    assert refreshed.json()["data"]["price"] == 150
    assert refreshed.headers["etag"] != detail.headers["etag"]


def test_search_returns_envelope_with_pagination(client, make_listing):
    for index in range(3):
        make_listing(name=f"Paris apartment number {index}")
    make_listing(city="Lyon")

    response = client.get(f"{API}/listings", params={"city": "Paris", "limit": 2})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["status"] == "success"
    assert len(body["data"]) == 2
    assert body["meta"] == {"total": 3, "page": 1, "limit": 2, "totalPages": 2}


def test_search_with_unordered_dates_is_rejected(client):
    response = client.get(
        f"{API}/listings", params={"check_in": "2024-05-10", "check_out": "2024-05-01"}
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_create_listing_requires_host_and_clears_collection_cache(
    client, listing, host_headers, guest_headers, key_store
):
    client.get(f"{API}/listings")
    assert len(key_store) == 1

    forbidden = client.post(f"{API}/listings", json=_create_payload(), headers=guest_headers)
    assert forbidden.status_code == 403
    assert forbidden.json() == {
        "success": False,
        "message": "Only hosts can create listings",
        "code": "FORBIDDEN",
    }

    response = client.post(f"{API}/listings", json=_create_payload(), headers=host_headers)
    assert response.status_code == 201
    assert response.json()["code"] == 201
    assert len(key_store) == 0

    listed = client.get(f"{API}/listings").json()
    assert listed["meta"]["total"] == 2


def test_create_listing_validation_errors(client, host_headers):
    response = client.post(
        f"{API}/listings", json=_create_payload(name="short", price=0), headers=host_headers
    )

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert {error["field"] for error in body["errors"]} == {"name", "price"}


def test_write_routes_require_authentication(client, listing):
    response = client.patch(f"{API}/listings/{listing.id}", json={"price": 120})

    assert response.status_code == 401
    assert response.json()["message"] == "Missing bearer token"

    response = client.delete(
        f"{API}/listings/{listing.id}", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


def test_missing_listing_is_404_and_not_cached(client, key_store):
    response = client.get(f"{API}/listings/4242")

    assert response.status_code == 404
    assert response.json()["message"] == "Listing not found"
    assert "etag" not in response.headers
    assert len(key_store) == 0


def test_delete_listing_by_host(client, listing, host_headers, other_headers, key_store):
    client.get(f"{API}/listings/{listing.id}")

    assert client.delete(f"{API}/listings/{listing.id}", headers=other_headers).status_code == 403
    assert len(key_store) == 1

    response = client.delete(f"{API}/listings/{listing.id}", headers=host_headers)
    assert response.status_code == 200
    assert response.json()["data"] == {"message": "Listing deleted"}
    assert anyio.run(key_store.keys, "cache:*") == []
    assert client.get(f"{API}/listings/{listing.id}").status_code == 404


def test_listing_bookings_for_host(
    client, listing, make_booking, guest, host_headers, guest_headers
):
    make_booking(listing, date(2024, 6, 1), date(2024, 6, 3))

    response = client.get(f"{API}/listings/{listing.id}/bookings", headers=host_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["meta"]["total"] == 1
    assert body["data"][0]["guest"]["first_name"] == guest.first_name

    denied = client.get(f"{API}/listings/{listing.id}/bookings", headers=guest_headers)
    assert denied.status_code == 403


def test_add_co_host_via_listing(client, listing, other_user, host_headers):
    response = client.post(
        f"{API}/listings/{listing.id}/cohosts",
        json={"co_host_id": other_user.id, "can_edit_listing": True},
        headers=host_headers,
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["listing_id"] == listing.id
    assert data["can_edit_listing"] is True
