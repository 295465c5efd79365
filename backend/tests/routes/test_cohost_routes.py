from minibnb.core.config import settings

API = settings.api_v1_prefix


def test_co_host_lifecycle(client, listing, other_user, host_headers, other_headers):
    response = client.post(
        f"{API}/cohosts",
        json={"listing_id": listing.id, "co_host_id": other_user.id, "can_edit_listing": True},
        headers=host_headers,
    )
    assert response.status_code == 201
    co_host_id = response.json()["data"]["id"]

    edited = client.patch(
        f"{API}/listings/{listing.id}", json={"city": "Bordeaux"}, headers=other_headers
    )
    assert edited.status_code == 200
    assert edited.json()["data"]["city"] == "Bordeaux"

    removed = client.delete(f"{API}/cohosts/{co_host_id}", headers=other_headers)
    assert removed.status_code == 200
    assert removed.json()["data"] == {"message": "Co-host removed"}

    assert client.delete(f"{API}/cohosts/{co_host_id}", headers=host_headers).status_code == 404


def test_only_host_grants_co_hosts(client, listing, guest, other_headers):
    response = client.post(
        f"{API}/cohosts",
        json={"listing_id": listing.id, "co_host_id": guest.id},
        headers=other_headers,
    )

    assert response.status_code == 403
    assert response.json()["message"] == "Only host can add co-hosts"
