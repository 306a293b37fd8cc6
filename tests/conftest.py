"""
Pytest configuration for moodjournal tests

Every test gets a fresh in-memory SQLite database and a scripted fake AI
gateway wired into the app through dependency overrides.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ.pop("AI_GATEWAY_API_KEY", None)

import uuid  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from main import app  # noqa: E402
from moodjournal.auth.models import User  # noqa: E402
from moodjournal.core.database import Base, get_db, get_session_factory  # noqa: E402
from moodjournal.core.dependency import get_chat_gateway  # noqa: E402
from tests.fakes import FakeGateway  # noqa: E402


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    row = User(id=uuid.uuid4(), email="sam@example.com", password="not-a-hash", name="Sam")
    db.add(row)
    db.commit()
    return row


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(session_factory, gateway):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_chat_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Signs up a user through the API and returns its bearer header."""
    response = client.post(
        "/auth/signup",
        json={"email": "alex@example.com", "password": "hunter22", "name": "Alex"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
