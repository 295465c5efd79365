# backend/tests/conftest.py
"""
Pytest configuration.

Every test runs against a fresh in-memory SQLite database and an
in-memory KeyStore; nothing reaches Redis or a real database.
"""

import os

# Set testing mode BEFORE any minibnb imports
os.environ["is_testing"] = "true"
os.environ["database_url"] = "sqlite://"

from datetime import date
from typing import Callable, Dict, Generator
import uuid

from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest
from sqlalchemy.orm import Session, sessionmaker

from minibnb.api.dependencies.database import get_db
from minibnb.auth import create_access_token
from minibnb.core.config import settings
from minibnb.core.key_store import InMemoryKeyStore
from minibnb.database import Base, build_engine
from minibnb.main import create_app
from minibnb.models import Booking, CoHost, Listing, Profile

settings.is_testing = True

API = settings.api_v1_prefix


@pytest.fixture
def db() -> Generator[Session, None, None]:
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def key_store() -> InMemoryKeyStore:
    return InMemoryKeyStore()


@pytest.fixture
def app(db: Session, key_store: InMemoryKeyStore) -> FastAPI:
    application = create_app(key_store=key_store)

    def override_get_db() -> Generator[Session, None, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


def _make_profile(db: Session, *, first_name: str, is_host: bool) -> Profile:
    profile = Profile(
        id=str(uuid.uuid4()),
        email=f"{first_name.lower()}-{uuid.uuid4().hex[:8]}@example.com",
        first_name=first_name,
        last_name="Tester",
        is_host=is_host,
    )
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture
def host(db: Session) -> Profile:
    return _make_profile(db, first_name="Hannah", is_host=True)


@pytest.fixture
def guest(db: Session) -> Profile:
    return _make_profile(db, first_name="Gabriel", is_host=False)


@pytest.fixture
def other_user(db: Session) -> Profile:
    return _make_profile(db, first_name="Olivia", is_host=False)


@pytest.fixture
def make_listing(db: Session, host: Profile) -> Callable[..., Listing]:
    def _make(**overrides) -> Listing:
        data = {
            "host_id": host.id,
            "host_name": f"{host.first_name} {host.last_name}",
            "name": "Bright loft near the canal",
            "description": "Quiet two-room flat",
            "picture_url": "https://example.com/loft.jpg",
            "price": 100,
            "address": "12 Canal Street",
            "city": "Paris",
            "bedrooms": 2,
            "beds": 2,
            "bathrooms": 1.0,
            "max_guests": 4,
            "amenities": ["wifi"],
            "is_active": True,
        }
        data.update(overrides)
        listing = Listing(**data)
        db.add(listing)
        db.commit()
        return listing

    return _make


@pytest.fixture
def listing(make_listing: Callable[..., Listing]) -> Listing:
    return make_listing()


@pytest.fixture
def make_booking(db: Session, guest: Profile) -> Callable[..., Booking]:
    def _make(listing: Listing, check_in: date, check_out: date, **overrides) -> Booking:
        booking = Booking(
            listing_id=listing.id,
            guest_id=overrides.pop("guest_id", guest.id),
            check_in=check_in,
            check_out=check_out,
            guest_count=overrides.pop("guest_count", 1),
            total_price=overrides.pop("total_price", 100),
        )
        db.add(booking)
        db.commit()
        return booking

    return _make


@pytest.fixture
def make_co_host(db: Session) -> Callable[..., CoHost]:
    def _make(
        listing: Listing, profile: Profile, can_edit_listing: bool = False, **permissions: bool
    ) -> CoHost:
        co_host = CoHost(
            listing_id=listing.id,
            host_id=listing.host_id,
            co_host_id=profile.id,
            can_edit_listing=can_edit_listing,
            **permissions,
        )
        db.add(co_host)
        db.commit()
        return co_host

    return _make


def auth_headers_for(profile: Profile) -> Dict[str, str]:
    token = create_access_token(profile.id, email=profile.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def host_headers(host: Profile) -> Dict[str, str]:
    return auth_headers_for(host)


@pytest.fixture
def guest_headers(guest: Profile) -> Dict[str, str]:
    return auth_headers_for(guest)


@pytest.fixture
def other_headers(other_user: Profile) -> Dict[str, str]:
    return auth_headers_for(other_user)
