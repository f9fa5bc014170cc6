"""Database package for the Event Platform."""

from .database import Base, engine, SessionLocal, get_db, init_db
from .models import Event, EventStatus

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "get_db",
    "init_db",
    "Event",
    "EventStatus",
]
