"""
Test configuration and fixtures for Eventboard.
"""

import os
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app
os.environ.pop("ZERO_TOKEN", None)
os.environ["DATABASE_URL"] = "sqlite:///./test_eventboard.db"
os.environ["CACHE_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"

from eventboard.main import app
from eventboard.api.dependencies import get_database_session
from eventboard.models.event import Base, Event, EventPhoto, Category, EventCategory

# Test database URL
SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]

# Create test engine
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the dependency
app.dependency_overrides[get_database_session] = override_get_db


@pytest.fixture(autouse=True)
def restore_dependency_overrides():
    """Drop per-test overrides, keeping the database override."""
    yield
    app.dependency_overrides.clear()
    app.dependency_overrides[get_database_session] = override_get_db


@pytest.fixture(scope="function")
def client():
    """Create test client."""
    Base.metadata.create_all(bind=engine)

    with TestClient(app) as test_client:
        yield test_client

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Create a database session for testing."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_event(db_session):
    """Factory inserting an event row."""
    def _make_event(**overrides):
        data = {
            "event_title": "Robotics Fair",
            "description": "Explore the latest robots",
            "location": "Hall B",
            "start_time": datetime(2025, 4, 1, 8, 0, tzinfo=timezone.utc),
            "end_time": datetime(2025, 4, 1, 11, 0, tzinfo=timezone.utc),
            "interested_count": 0,
        }
        data.update(overrides)
        event = Event(**data)
        db_session.add(event)
        db_session.commit()
        return event

    return _make_event


@pytest.fixture
def sample_catalog(db_session, make_event):
    """Two categories and three events, one with photos."""
    music = Category(category_id=1, category_name="Music")
    tech = Category(category_id=2, category_name="Tech")
    db_session.add_all([music, tech])
    db_session.commit()

    concert = make_event(
        event_title="Campus Concert",
        start_time=datetime(2025, 5, 2, 18, 0, tzinfo=timezone.utc),
        end_time=datetime(2025, 5, 2, 21, 0, tzinfo=timezone.utc),
    )
    hackathon = make_event(
        event_title="Hackathon",
        start_time=datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc),
        end_time=datetime(2025, 3, 2, 9, 0, tzinfo=timezone.utc),
        interested_count=3,
    )
    lecture = make_event(
        event_title="Guest Lecture",
        start_time=datetime(2025, 4, 10, 14, 0, tzinfo=timezone.utc),
        end_time=datetime(2025, 4, 10, 15, 0, tzinfo=timezone.utc),
    )

    db_session.add_all([
        EventCategory(event_id=concert.event_id, category_id=1),
        EventCategory(event_id=hackathon.event_id, category_id=2),
        EventCategory(event_id=lecture.event_id, category_id=1),
        EventCategory(event_id=lecture.event_id, category_id=2),
        EventPhoto(event_id=concert.event_id, photo_url="https://cdn.test/stage.jpg"),
        EventPhoto(event_id=concert.event_id, photo_url="https://cdn.test/crowd.jpg"),
    ])
    db_session.commit()

    return {"concert": concert, "hackathon": hackathon, "lecture": lecture}
