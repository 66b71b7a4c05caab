"""Pytest configuration and fixtures."""

import os

# Settings are read at import time; these must be set before importing the app
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from authapi.api.dependencies import get_identity_provider  # noqa: E402
from authapi.database import Base, get_db  # noqa: E402
from authapi.errors import IdentityProviderError  # noqa: E402
from authapi.main import app  # noqa: E402
from authapi.services.google_oauth import GoogleIdentity  # noqa: E402


class AuthHeaders(dict):
    """Dict subclass that also stores user info."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


class FakeIdentityProvider:
    """Stands in for Google: maps authorization codes to identities."""

    def __init__(self):
        self.identities: dict[str, GoogleIdentity] = {}

    def build_authorization_url(self, scopes=()):
        return "https://accounts.example.com/consent?client_id=test"

    def exchange_code(self, code: str) -> GoogleIdentity:
        if code not in self.identities:
            raise IdentityProviderError(f"unknown code {code}")
        return self.identities[code]


SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    from authapi import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture(scope="function")
def client(db, identity_provider):
    """Create a test client with database and identity provider overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Register and log in a user, returning auth headers with user info."""
    email = "test@example.com"
    response = client.post(
        "/register",
        json={"name": "Test User", "email": email, "password": "testpass123"},
    )
    assert response.status_code == 200
    user_id = response.json()["user"]["id"]

    response = client.post("/login", json={"email": email, "password": "testpass123"})
    assert response.status_code == 200
    token = response.json()["data"]["token"]

    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user_id, email=email)
