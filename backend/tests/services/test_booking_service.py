from datetime import date

import pytest

from minibnb.core.exceptions import (
    BookingConflictException,
    ForbiddenException,
    GuestLimitExceededException,
    NotFoundException,
    ValidationException,
)
from minibnb.models import Booking
from minibnb.schemas.booking import BookingCreate
from minibnb.services.booking_service import BookingService


@pytest.fixture
def booking_service(db):
    return BookingService(db)


def _request(listing, check_in, check_out, guest_count=1):
    return BookingCreate(
        listing_id=listing.id, check_in=check_in, check_out=check_out, guest_count=guest_count
    )


def test_create_booking_prices_by_nights(booking_service, db, listing, guest):
    booking = booking_service.create_booking(
        guest.id, _request(listing, date(2024, 1, 10), date(2024, 1, 15), guest_count=2)
    )

    assert booking.id is not None
    assert booking.total_price == 5 * listing.price
    assert booking.guest_id == guest.id
    assert db.query(Booking).count() == 1


def test_touching_dates_are_rejected_and_nothing_persisted(
    booking_service, db, listing, guest, make_booking
):
    make_booking(listing, date(2024, 1, 10), date(2024, 1, 15))

    with pytest.raises(BookingConflictException) as exc_info:
        booking_service.create_booking(
            guest.id, _request(listing, date(2024, 1, 15), date(2024, 1, 20))
        )

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Listing is not available for these dates"
    assert db.query(Booking).count() == 1


def test_day_after_checkout_is_accepted(booking_service, listing, guest, make_booking):
    make_booking(listing, date(2024, 1, 10), date(2024, 1, 15))

    booking = booking_service.create_booking(
        guest.id, _request(listing, date(2024, 1, 16), date(2024, 1, 18))
    )

    assert booking.total_price == 2 * listing.price


def test_guest_limit_is_enforced(booking_service, listing, guest):
    with pytest.raises(GuestLimitExceededException) as exc_info:
        booking_service.create_booking(
            guest.id,
            _request(
                listing, date(2024, 1, 10), date(2024, 1, 12), guest_count=listing.max_guests + 1
            ),
        )
    assert exc_info.value.status_code == 400


def test_missing_or_inactive_listing_is_not_found(booking_service, make_listing, guest):
    inactive = make_listing(is_active=False)

    with pytest.raises(NotFoundException):
        booking_service.create_booking(
            guest.id, _request(inactive, date(2024, 1, 10), date(2024, 1, 12))
        )

    with pytest.raises(NotFoundException):
        booking_service.create_booking(
            guest.id,
            BookingCreate(listing_id=9999, check_in=date(2024, 1, 10), check_out=date(2024, 1, 12)),
        )


def test_unordered_dates_are_rejected_by_service(booking_service, listing, guest):
    request = BookingCreate.model_construct(
        listing_id=listing.id,
        check_in=date(2024, 1, 12),
        check_out=date(2024, 1, 12),
        guest_count=1,
    )
    with pytest.raises(ValidationException):
        booking_service.create_booking(guest.id, request)


def test_bookings_for_guest_are_paginated_newest_first(
    booking_service, listing, guest, make_booking
):
    make_booking(listing, date(2024, 1, 1), date(2024, 1, 2))
    make_booking(listing, date(2024, 3, 1), date(2024, 3, 2))
    make_booking(listing, date(2024, 2, 1), date(2024, 2, 2))

    items, total = booking_service.get_bookings_for_guest(guest.id, page=1, limit=2)

    assert total == 3
    assert [b.check_in for b in items] == [date(2024, 3, 1), date(2024, 2, 1)]


def test_listing_bookings_visible_to_host_and_co_host_only(
    booking_service, listing, host, other_user, guest, make_booking, make_co_host
):
    make_booking(listing, date(2024, 1, 1), date(2024, 1, 2))

    _, total = booking_service.get_bookings_for_listing(listing.id, host.id)
    assert total == 1

    with pytest.raises(ForbiddenException):
        booking_service.get_bookings_for_listing(listing.id, other_user.id)

    make_co_host(listing, other_user)
    _, total = booking_service.get_bookings_for_listing(listing.id, other_user.id)
    assert total == 1


def test_cancel_booking_by_guest_only(
    booking_service, db, listing, guest, other_user, make_booking
):
    booking = make_booking(listing, date(2024, 1, 1), date(2024, 1, 2))

    with pytest.raises(ForbiddenException):
        booking_service.cancel_booking(booking.id, other_user.id)

    cancelled = booking_service.cancel_booking(booking.id, guest.id)

    assert cancelled.listing_id == listing.id
    assert db.query(Booking).count() == 0

    with pytest.raises(NotFoundException):
        booking_service.cancel_booking(booking.id, guest.id)
