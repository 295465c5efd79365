import uuid

import pytest

from minibnb.core.exceptions import ForbiddenException, NotFoundException, ValidationException
from minibnb.models import Conversation, Message, Profile
from minibnb.services.message_service import MessageService


@pytest.fixture
def message_service(db):
    return MessageService(db)


@pytest.fixture
def stranger(db):
    profile = Profile(
        id=str(uuid.uuid4()),
        email="stranger@example.com",
        first_name="Sam",
        last_name="Stranger",
        is_host=False,
    )
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture
def conversation(message_service, listing, guest):
    return message_service.create_conversation(guest.id, listing.id, "Is the loft quiet?")


def test_create_conversation_links_guest_and_host(conversation, listing, guest, host):
    assert conversation.guest_id == guest.id
    assert conversation.host_id == host.id
    assert conversation.listing_id == listing.id
    assert [m.content for m in conversation.messages] == ["Is the loft quiet?"]


def test_create_conversation_reuses_existing_thread(db, message_service, conversation, guest):
    again = message_service.create_conversation(guest.id, conversation.listing_id, "Hello?")

    assert again.id == conversation.id
    assert db.query(Conversation).count() == 1
    assert db.query(Message).filter(Message.conversation_id == conversation.id).count() == 2


def test_create_conversation_rejects_own_listing_and_unknown_listing(
    message_service, listing, host, guest
):
    with pytest.raises(ValidationException, match="your own listing"):
        message_service.create_conversation(host.id, listing.id)

    with pytest.raises(NotFoundException, match="Listing not found"):
        message_service.create_conversation(guest.id, 98765)


def test_guest_and_host_read_and_reply(message_service, conversation, guest, host):
    message_service.send(host.id, conversation.id, "Very quiet, yes.")
    message_service.send(guest.id, conversation.id, "Great, thanks!")

    messages, total = message_service.get_by_conversation(conversation.id, guest.id)

    assert total == 3
    assert [m.sender_id for m in messages] == [guest.id, host.id, guest.id]
    assert messages[1].content == "Very quiet, yes."


def test_messages_are_paginated_oldest_first(message_service, conversation, host):
    for n in range(4):
        message_service.send(host.id, conversation.id, f"reply {n}")

    page_two, total = message_service.get_by_conversation(
        conversation.id, host.id, page=2, limit=2
    )

    assert total == 5
    assert [m.content for m in page_two] == ["reply 1", "reply 2"]


def test_co_host_needs_access_flag_to_read(
    db, message_service, conversation, listing, other_user, make_co_host
):
    co_host = make_co_host(listing, other_user)

    with pytest.raises(ForbiddenException, match="cannot view this conversation"):
        message_service.get_by_conversation(conversation.id, other_user.id)

    co_host.can_access_messages = True
    db.commit()
    _, total = message_service.get_by_conversation(conversation.id, other_user.id)
    assert total == 1


def test_co_host_needs_respond_flag_to_reply(
    db, message_service, conversation, listing, other_user, make_co_host
):
    co_host = make_co_host(listing, other_user, can_access_messages=True)

    with pytest.raises(ForbiddenException, match="cannot send messages"):
        message_service.send(other_user.id, conversation.id, "Hi from the co-host")

    co_host.can_respond_messages = True
    db.commit()
    message = message_service.send(other_user.id, conversation.id, "Hi from the co-host")
    assert message.sender_id == other_user.id


def test_unrelated_user_is_forbidden(message_service, conversation, stranger):
    with pytest.raises(ForbiddenException):
        message_service.get_by_conversation(conversation.id, stranger.id)

    with pytest.raises(ForbiddenException):
        message_service.send(stranger.id, conversation.id, "Let me in")


def test_unknown_conversation_is_not_found(message_service, guest):
    with pytest.raises(NotFoundException, match="Conversation not found"):
        message_service.send(guest.id, 4242, "Hello")

    with pytest.raises(NotFoundException, match="Conversation not found"):
        message_service.get_by_conversation(4242, guest.id)


def test_conversation_list_respects_roles(
    message_service, conversation, listing, guest, host, other_user, stranger, make_co_host
):
    assert [c.id for c in message_service.get_user_conversations(guest.id)] == [conversation.id]
    assert [c.id for c in message_service.get_user_conversations(host.id)] == [conversation.id]
    assert message_service.get_user_conversations(stranger.id) == []

    make_co_host(listing, other_user, can_access_messages=False)
    assert message_service.get_user_conversations(other_user.id) == []


def test_conversation_list_includes_co_host_with_access(
    message_service, conversation, listing, other_user, make_co_host
):
    make_co_host(listing, other_user, can_access_messages=True)

    conversations = message_service.get_user_conversations(other_user.id)

    assert [c.id for c in conversations] == [conversation.id]


def test_deleting_listing_removes_its_threads(db, conversation, listing, host):
    from minibnb.services.listing_service import ListingService

    ListingService(db).delete_listing(listing.id, host.id)

    assert db.query(Conversation).count() == 0
    assert db.query(Message).count() == 0
