"""
conftest.py for backend/tests/

Every test gets a fresh in-memory SQLite database. StaticPool keeps a single
connection alive so the schema survives across the sessions the API opens
per request. The app's get_db dependency is overridden to use it.

Run from the project root:
    pytest
"""

import os
import sys

# Add backend/ to sys.path so `api`, `core`, `db` ... import as top-level packages.
_backend_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _backend_dir not in sys.path:
    sys.path.insert(0, _backend_dir)

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.dependencies import get_db, get_description_generator
from api.main import app
from db.database import Base
from db.models import EventStatus
from db.repository import EventRepository
from schemas.event import EventCreate
from services.descriptions import DescriptionGenerator


class FirstChoice:
    """Deterministic stand-in for random.Random: always picks the first item."""

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def first_choice():
    return FirstChoice()


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repo(db_session):
    return EventRepository(db_session)


@pytest.fixture
def make_event(repo):
    """Factory: make_event(title=..., date_time=..., ...) -> persisted Event."""

    def _make(
        title="Conf",
        date_time=datetime(2025, 7, 15, 14, 0, 0),
        location="Hall",
        description="",
        status=EventStatus.UPCOMING,
    ):
        return repo.create(EventCreate(
            title=title,
            date_time=date_time,
            location=location,
            description=description,
            status=status,
        ))

    return _make


# ---------------------------------------------------------------------------
# API fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def client(session_factory, first_choice):
    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_description_generator] = lambda: DescriptionGenerator(rng=first_choice)

    # No `with` block: the lifespan (logging setup, init_db on the real engine)
    # is not needed against the in-memory database.
    yield TestClient(app, raise_server_exceptions=False)

    app.dependency_overrides.clear()
