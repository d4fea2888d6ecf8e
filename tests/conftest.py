"""Pytest fixtures for the EchoMatch seeder tests.

Uses a SQLite test database and FastAPI TestClient. Overrides the `get_db`
dependency so tests are isolated from any real DB file, and pins the seed
clock so documents written in different requests are comparable.
"""

import os

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test_echomatch.db")
# Point the app engine (used by the lifespan `init_db`) at the test database too
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import echomatch.database as database
from echomatch.dependencies import get_clock
from echomatch.identity import IdentityProvider
from echomatch.main import app
from echomatch.models import Base
from echomatch.store import DocumentStore


FIXED_NOW = datetime(2025, 3, 14, 18, 30, 0, tzinfo=timezone.utc)

# Create test engine and session factory
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop them after to ensure isolation."""
    Base.metadata.create_all(bind=engine)
    try:
        yield
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    """Provide a SQLAlchemy session for direct DB access in tests."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db_session):
    return DocumentStore(db_session)


@pytest.fixture()
def identity(db_session):
    return IdentityProvider(db_session)


# Override get_db dependency in the app
def _override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[database.get_db] = _override_get_db
app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)

# Disable the global rate limiter so many requests across tests don't hit 429
app.state.limiter.enabled = False


@pytest.fixture()
def client():
    """FastAPI test client using the app with overridden dependencies."""
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def create_account(identity):
    def _create_account(email: str = "operator@example.com", password: str = "secret123", uid: str | None = None):
        return identity.create_account(email, password=password, uid=uid)

    return _create_account


@pytest.fixture()
def auth_headers(create_account, identity):
    """Return a helper producing bearer headers for a freshly created account."""
    def _auth_headers(email: str = "operator@example.com", uid: str | None = None):
        account = create_account(email=email, uid=uid)
        token = identity.issue_id_token(account)
        return {"Authorization": f"Bearer {token}"}, account

    return _auth_headers
