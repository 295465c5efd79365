from minibnb.core.config import settings
from minibnb.models import Message

API = settings.api_v1_prefix


def _open_conversation(client, listing, headers, message="Is parking available?"):
    response = client.post(
        f"{API}/messages", json={"listing_id": listing.id, "message": message}, headers=headers
    )
    assert response.status_code == 201
    return response.json()["data"]


def test_guest_opens_conversation_and_host_replies(
    client, listing, guest, host, guest_headers, host_headers
):
    conversation = _open_conversation(client, listing, guest_headers)
    assert conversation["guest_id"] == guest.id
    assert conversation["host_id"] == host.id
    assert conversation["listing"]["id"] == listing.id

    reply = client.post(
        f"{API}/messages/{conversation['id']}/messages",
        json={"content": "Yes, in the courtyard."},
        headers=host_headers,
    )
    assert reply.status_code == 201
    assert reply.json()["data"]["sender_id"] == host.id

    thread = client.get(f"{API}/messages/{conversation['id']}", headers=guest_headers).json()
    assert thread["meta"]["total"] == 2
    assert [m["content"] for m in thread["data"]] == [
        "Is parking available?",
        "Yes, in the courtyard.",
    ]
    assert thread["data"][1]["sender"]["first_name"] == host.first_name

    inbox = client.get(f"{API}/messages", headers=host_headers).json()
    assert [c["id"] for c in inbox["data"]] == [conversation["id"]]


def test_co_host_permissions_on_threads(
    client, db, listing, other_user, guest_headers, other_headers, make_co_host
):
    conversation = _open_conversation(client, listing, guest_headers)
    thread_url = f"{API}/messages/{conversation['id']}"

    forbidden = client.get(thread_url, headers=other_headers)
    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == "FORBIDDEN"

    make_co_host(listing, other_user, can_access_messages=True)
    assert client.get(thread_url, headers=other_headers).status_code == 200

    reply = client.post(
        f"{thread_url}/messages", json={"content": "Co-host here"}, headers=other_headers
    )
    assert reply.status_code == 403
    assert reply.json()["message"] == "You cannot send messages in this conversation"
    assert db.query(Message).count() == 1


def test_message_validation_and_missing_conversation(client, listing, guest_headers):
    conversation = _open_conversation(client, listing, guest_headers)

    empty = client.post(
        f"{API}/messages/{conversation['id']}/messages", json={}, headers=guest_headers
    )
    assert empty.status_code == 400
    assert empty.json()["code"] == "VALIDATION_ERROR"

    missing = client.get(f"{API}/messages/9999", headers=guest_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Conversation not found"


def test_host_cannot_message_own_listing(client, listing, host_headers):
    response = client.post(
        f"{API}/messages", json={"listing_id": listing.id}, headers=host_headers
    )

    assert response.status_code == 400
    assert response.json()["code"] == "BAD_REQUEST"


def test_messages_require_authentication(client):
    assert client.get(f"{API}/messages").status_code == 401


def test_message_routes_are_not_cached(client, key_store, listing, guest_headers):
    conversation = _open_conversation(client, listing, guest_headers)

    client.get(f"{API}/messages", headers=guest_headers)
    client.get(f"{API}/messages/{conversation['id']}", headers=guest_headers)

    assert len(key_store) == 0
