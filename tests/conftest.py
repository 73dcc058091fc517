"""
Shared fixtures for API tests
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from eventra.core.db import Base, get_db
from eventra.utils import security
from eventra.utils.security import create_access_token
from main import app

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_api.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Rate limit buckets are process-global"""
    security.rate_limiter.clear()
    yield
    security.rate_limiter.clear()

@pytest.fixture
def client():
    """Test client bound to a fresh database"""
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def api_db(client):
    """Session on the same database the test client uses"""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def auth_headers():
    """Build bearer headers for a user id"""
    def _headers(user_id="user-1", tier="free", is_admin=False):
        token = create_access_token(
            user_id,
            email=f"{user_id}@example.com",
            app_metadata={"subscription_tier": tier, "is_admin": is_admin}
        )
        return {"Authorization": f"Bearer {token}"}
    return _headers

@pytest.fixture
def create_event(client, auth_headers):
    """Create an event through the API and return its data"""
    def _create(user_id="user-1", **overrides):
        payload = {
            "name": "Launch Summit",
            "type": "conference",
            "format": "virtual",
            "date": "2030-06-30T10:00:00Z",
            "estimated_guests": 100,
            "budget": 5000,
        }
        payload.update(overrides)
        response = client.post("/api/events", json=payload, headers=auth_headers(user_id))
        assert response.status_code == 201, response.text
        return response.json()["data"]
    return _create
