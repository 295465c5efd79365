from datetime import date

import pytest

from minibnb.core.exceptions import ForbiddenException, NotFoundException
from minibnb.models import CoHost, Listing
from minibnb.schemas.listing import CoHostCreate, ListingCreate, ListingFilters, ListingUpdate
from minibnb.services.listing_service import ListingService


@pytest.fixture
def listing_service(db):
    return ListingService(db)


def _listing_payload(**overrides):
    data = {
        "name": "Sunny studio by the park",
        "picture_url": "https://example.com/studio.jpg",
        "price": 80,
        "address": "5 Park Lane",
        "city": "Lyon",
    }
    data.update(overrides)
    return ListingCreate(**data)


def test_only_hosts_create_listings(listing_service, host, guest):
    listing = listing_service.create_listing(host.id, _listing_payload())

    assert listing.id is not None
    assert listing.host_id == host.id
    assert listing.property_type == "Rental unit"
    assert listing.max_guests == 2

    with pytest.raises(ForbiddenException, match="Only hosts can create listings"):
        listing_service.create_listing(guest.id, _listing_payload())


def test_get_by_id_not_found(listing_service):
    with pytest.raises(NotFoundException, match="Listing not found"):
        listing_service.get_by_id(12345)


def test_search_filters(listing_service, make_listing):
    make_listing(city="Paris", price=120, max_guests=4)
    make_listing(city="Lyon", price=60, max_guests=2)
    make_listing(city="Paris", price=200, max_guests=6, is_active=False)

    items, total = listing_service.get_all(ListingFilters(city="paris"))
    assert total == 1
    assert items[0].city == "Paris"

    items, total = listing_service.get_all(ListingFilters(max_price=100))
    assert [item.city for item in items] == ["Lyon"]

    _, total = listing_service.get_all(ListingFilters(guests=3))
    assert total == 1


def test_search_excludes_listings_booked_over_range(
    listing_service, make_listing, make_booking
):
    booked = make_listing(name="Booked canal loft flat")
    free = make_listing(name="Free canal loft flat")
    make_booking(booked, date(2024, 1, 10), date(2024, 1, 15))

    items, total = listing_service.get_all(
        ListingFilters(check_in=date(2024, 1, 15), check_out=date(2024, 1, 18))
    )

    assert total == 1
    assert items[0].id == free.id


def test_search_pagination(listing_service, make_listing):
    for index in range(5):
        make_listing(name=f"Listing number {index:02d} in town")

    items, total = listing_service.get_all(ListingFilters(), page=2, limit=2)

    assert total == 5
    assert len(items) == 2


def test_update_by_host_and_editing_co_host(
    listing_service, listing, host, other_user, make_co_host
):
    updated = listing_service.update_listing(listing.id, host.id, ListingUpdate(price=150))
    assert updated.price == 150

    with pytest.raises(ForbiddenException):
        listing_service.update_listing(listing.id, other_user.id, ListingUpdate(price=10))

    make_co_host(listing, other_user, can_edit_listing=True)
    updated = listing_service.update_listing(
        listing.id, other_user.id, ListingUpdate(city="Marseille")
    )
    assert updated.city == "Marseille"
    assert updated.price == 150


def test_read_only_co_host_cannot_edit(listing_service, listing, other_user, make_co_host):
    make_co_host(listing, other_user, can_edit_listing=False)

    with pytest.raises(ForbiddenException):
        listing_service.update_listing(listing.id, other_user.id, ListingUpdate(price=10))


def test_delete_by_host_only(listing_service, db, listing, host, other_user, make_co_host):
    make_co_host(listing, other_user, can_edit_listing=True)

    with pytest.raises(ForbiddenException):
        listing_service.delete_listing(listing.id, other_user.id)

    listing_service.delete_listing(listing.id, host.id)
    assert db.query(Listing).count() == 0


def test_co_host_grants(listing_service, db, listing, host, other_user, guest):
    co_host = listing_service.add_co_host(
        listing.id, host.id, CoHostCreate(co_host_id=other_user.id, can_edit_listing=True)
    )
    assert co_host.can_edit_listing is True
    assert co_host.host_id == host.id

    with pytest.raises(ForbiddenException, match="Only host can add co-hosts"):
        listing_service.add_co_host(listing.id, guest.id, CoHostCreate(co_host_id=guest.id))

    with pytest.raises(NotFoundException):
        listing_service.add_co_host(9999, host.id, CoHostCreate(co_host_id=guest.id))

    with pytest.raises(ForbiddenException):
        listing_service.remove_co_host(co_host.id, guest.id)

    listing_service.remove_co_host(co_host.id, other_user.id)
    assert db.query(CoHost).count() == 0
