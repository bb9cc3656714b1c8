import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-the-check-in-suite")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.database import Base, get_db
from api.attendees.attendees_service import AttendeeService
from helpers.token_helper import create_user_token

STAFF_EMAIL = "staff@stresscongress.org"
ATTENDEE_EMAIL = "john.doe@example.com"


class FakeClock:
    """Returns t0, t0+1s, t0+2s, ... unless frozen with ``hold``."""

    def __init__(self, start=datetime(2026, 3, 3, 8, 0, tzinfo=timezone.utc)):
        self.now = start
        self.step = timedelta(seconds=1)

    def hold(self):
        self.step = timedelta(0)
        return self

    def __call__(self):
        self.now = self.now + self.step
        return self.now


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def registry(db):
    return AttendeeService(db)


@pytest.fixture
def seeded(registry):
    registry.seed_sample_registry()
    return registry


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client(session_factory):
    from main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def bearer(user):
    return {"Authorization": f"Bearer {create_user_token(user)}"}


@pytest.fixture
def staff_headers(seeded):
    return bearer(seeded.find_by_email(STAFF_EMAIL))


@pytest.fixture
def attendee_headers(seeded):
    return bearer(seeded.find_by_email(ATTENDEE_EMAIL))
