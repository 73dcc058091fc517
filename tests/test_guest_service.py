"""
Tests for guest list rules
"""

import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from eventra.core.db import Base
from eventra.core.errors import DuplicateError, NotFoundError
from eventra.models import Event
from eventra.schemas.guest import GuestCreate, GuestUpdate
from eventra.services.guest_service import DUPLICATE_EMAIL_MESSAGE, GuestService
from eventra.utils.security import AuthUser

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_guests.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def two_events(db_session):
    events = [
        Event(owner_id="owner-1", name="Product Webinar", type="webinar", date=datetime(2030, 3, 1)),
        Event(owner_id="owner-1", name="Team Birthday", type="birthday", date=datetime(2030, 4, 1)),
    ]
    db_session.add_all(events)
    db_session.commit()
    return events

def test_duplicate_email_rejected_for_same_event(db_session, two_events):
    event = two_events[0]
    GuestService.create_guest(db_session, event.id, GuestCreate(name="Ana", email="ana@example.com"))

    with pytest.raises(DuplicateError) as exc:
        GuestService.create_guest(db_session, event.id, GuestCreate(name="Ana B", email="ANA@example.com"))

    assert exc.value.message == DUPLICATE_EMAIL_MESSAGE
    assert exc.value.http_status == 400

def test_same_email_allowed_on_different_event(db_session, two_events):
    first, second = two_events
    GuestService.create_guest(db_session, first.id, GuestCreate(name="Ana", email="ana@example.com"))
    guest = GuestService.create_guest(db_session, second.id, GuestCreate(name="Ana", email="ana@example.com"))

    assert guest.event_id == second.id

def test_email_is_stored_lowercase(db_session, two_events):
    guest = GuestService.create_guest(
        db_session, two_events[0].id, GuestCreate(name="  Ben  ", email="Ben.Stone@Example.com")
    )

    assert guest.email == "ben.stone@example.com"
    assert guest.name == "Ben"
    assert guest.status == "invited"

def test_update_to_existing_email_rejected(db_session, two_events):
    event = two_events[0]
    GuestService.create_guest(db_session, event.id, GuestCreate(name="Ana", email="ana@example.com"))
    ben = GuestService.create_guest(db_session, event.id, GuestCreate(name="Ben", email="ben@example.com"))

    with pytest.raises(DuplicateError):
        GuestService.update_guest(db_session, ben, GuestUpdate(email="ana@example.com"))

def test_update_keeping_own_email(db_session, two_events):
    event = two_events[0]
    ben = GuestService.create_guest(db_session, event.id, GuestCreate(name="Ben", email="ben@example.com"))

    updated = GuestService.update_guest(db_session, ben, GuestUpdate(email="ben@example.com", status="confirmed"))

    assert updated.status == "confirmed"

def test_guest_stats(db_session, two_events):
    event = two_events[0]
    for name, status in [("a", "confirmed"), ("b", "declined"), ("c", "invited"), ("d", "invited")]:
        GuestService.create_guest(db_session, event.id, GuestCreate(name=name, email=f"{name}@example.com", status=status))

    stats = GuestService.get_guest_stats(db_session, event.id)

    assert stats == {"total": 4, "invited": 2, "confirmed": 1, "declined": 1, "response_rate": 50}

def test_guest_stats_rounding_and_empty(db_session, two_events):
    first, second = two_events
    for name, status in [("a", "confirmed"), ("b", "invited"), ("c", "invited")]:
        GuestService.create_guest(db_session, first.id, GuestCreate(name=name, email=f"{name}@example.com", status=status))

    assert GuestService.get_guest_stats(db_session, first.id)["response_rate"] == 33
    assert GuestService.get_guest_stats(db_session, second.id)["response_rate"] == 0

def test_search_and_filter(db_session, two_events):
    event = two_events[0]
    GuestService.create_guest(db_session, event.id, GuestCreate(name="Carla Diaz", email="carla@example.com", status="confirmed"))
    GuestService.create_guest(db_session, event.id, GuestCreate(name="Dan", email="dan@corp.io"))

    assert [g.name for g in GuestService.list_guests(db_session, event.id, search="DIAZ")] == ["Carla Diaz"]
    assert [g.name for g in GuestService.list_guests(db_session, event.id, search="corp")] == ["Dan"]
    assert [g.name for g in GuestService.list_guests(db_session, event.id, status="confirmed")] == ["Carla Diaz"]

def test_guest_of_foreign_event_is_not_found(db_session, two_events):
    guest = GuestService.create_guest(db_session, two_events[0].id, GuestCreate(name="Ana", email="ana@example.com"))

    with pytest.raises(NotFoundError):
        GuestService.get_guest_for_user(db_session, guest.id, AuthUser(id="stranger"))

    found, event = GuestService.get_guest_for_user(db_session, guest.id, AuthUser(id="owner-1"))
    assert found.id == guest.id
    assert event.id == two_events[0].id
