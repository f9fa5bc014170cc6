"""db/repository.py — EventRepository, the entity store for Event rows.

One repository wraps one SQLAlchemy Session (one request). Every write is a
single transaction: commit on success, rollback and re-raise on failure, so
a concurrent reader never observes a half-applied update.

Usage:
    repo = EventRepository(db)
    event = repo.create(EventCreate(...))
    previous, new = repo.set_status(event.id, EventStatus.ATTENDING)
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from core.exceptions import ConcurrencyConflictError, EventNotFoundError
from db.models import Event, EventStatus, utcnow
from db.queries import build_event_query
from schemas.event import EventCreate, EventFilters, EventUpdate

logger = logging.getLogger(__name__)


class StatusChange(NamedTuple):
    previous: EventStatus
    new: EventStatus


class EventRepository:
    def __init__(self, db: Session):
        self.db = db

    # ── Reads ──────────────────────────────────────────────────────────────────

    def get(self, event_id: int) -> Optional[Event]:
        """Return the event with ``event_id``, or None."""
        return self.db.get(Event, event_id)

    def require(self, event_id: int) -> Event:
        """Like get(), but raises EventNotFoundError instead of returning None."""
        event = self.get(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def list(self, filters: EventFilters | None = None) -> list[Event]:
        return list(self.db.scalars(build_event_query(filters)).all())

    # ── Writes ─────────────────────────────────────────────────────────────────

    def create(self, data: EventCreate) -> Event:
        event = Event(
            title=data.title,
            date_time=data.date_time,
            location=data.location,
            description=data.description,
            status=data.status,
            created_at=utcnow(),
        )
        self.db.add(event)
        self._commit()
        self.db.refresh(event)

        logger.info("event created", extra={"event_id": event.id, "title": event.title})
        return event

    def replace(self, event_id: int, data: EventUpdate) -> Event:
        """Overwrite every mutable field of an existing event."""
        event = self.require(event_id)

        event.title = data.title
        event.date_time = data.date_time
        event.location = data.location
        event.description = data.description
        event.status = data.status
        event.updated_at = self._touch(event)

        self._commit(event_id)
        self.db.refresh(event)

        logger.info("event replaced", extra={"event_id": event_id})
        return event

    def set_status(self, event_id: int, status: EventStatus) -> StatusChange:
        event = self.require(event_id)

        previous = event.status
        event.status = status
        event.updated_at = self._touch(event)

        self._commit(event_id)

        logger.info(
            "event status changed",
            extra={"event_id": event_id, "previous_status": previous.value, "new_status": status.value},
        )
        return StatusChange(previous=previous, new=status)

    def delete(self, event_id: int) -> int:
        """Hard-delete an event. Returns the deleted id."""
        event = self.require(event_id)

        self.db.delete(event)
        self._commit(event_id)

        logger.info("event deleted", extra={"event_id": event_id})
        return event_id

    # ── Helpers ────────────────────────────────────────────────────────────────

    @staticmethod
    def _touch(event: Event):
        # Keeps created_at <= updated_at even if the clock steps backwards.
        now = utcnow()
        if event.created_at is not None and now < event.created_at:
            return event.created_at
        return now

    def _commit(self, event_id: int | None = None) -> None:
        try:
            self.db.commit()
        except StaleDataError as exc:
            self.db.rollback()
            logger.warning("concurrent modification", extra={"event_id": event_id, "error": str(exc)})
            raise ConcurrencyConflictError(event_id) from exc
        except SQLAlchemyError:
            self.db.rollback()
            raise
