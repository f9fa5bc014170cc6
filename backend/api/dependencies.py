"""
dependencies.py — FastAPI dependency injection

Provides the per-request collaborators for route handlers:
    get_db()                     SQLAlchemy session, closed after the request
    get_event_repository()       EventRepository bound to that session
    get_description_generator()  shared DescriptionGenerator

Tests swap any of these with app.dependency_overrides.

Usage in a route handler:
    from fastapi import Depends
    from api.dependencies import get_event_repository

    @router.get("/example")
    def example(repo: EventRepository = Depends(get_event_repository)):
        ...
"""

from typing import Generator

from fastapi import Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from db.database import SessionLocal
from db.repository import EventRepository
from services.descriptions import DescriptionGenerator

_description_generator = DescriptionGenerator()


def get_db() -> Generator[Session, None, None]:
    """Yield a database session, guaranteed to close after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_event_repository(db: Session = Depends(get_db)) -> EventRepository:
    return EventRepository(db)


def get_description_generator() -> DescriptionGenerator:
    return _description_generator


def check_db_connectivity(db: Session) -> bool:
    """Execute SELECT 1 to verify the database is reachable.

    Returns:
        True if the database responds.

    Raises:
        RuntimeError: with a descriptive message if the connection fails.
    """
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception as exc:
        raise RuntimeError(f"Database connectivity check failed: {exc}") from exc
