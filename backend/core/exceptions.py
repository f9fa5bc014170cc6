"""core/exceptions.py — Domain exceptions raised by the event store and services.

Each exception carries the HTTP status it maps to. The handlers registered in
api/main.py turn them into the standard error envelope, so route handlers and
the repository simply raise.

    EventPlatformError          400  base class
    ├── EventValidationError    400  bad field, id mismatch, empty topic
    ├── EventNotFoundError      404  unknown event id
    └── ConcurrencyConflictError 500 write collided with a concurrent change
"""

from __future__ import annotations


class EventPlatformError(Exception):
    """Base class for errors that map onto an error envelope."""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EventValidationError(EventPlatformError):
    status_code = 400


class EventNotFoundError(EventPlatformError):
    status_code = 404

    def __init__(self, event_id: int):
        super().__init__(f"Event with ID {event_id} not found")
        self.event_id = event_id


class ConcurrencyConflictError(EventPlatformError):
    status_code = 500

    def __init__(self, event_id: int):
        super().__init__(f"Concurrency error while updating event {event_id}")
        self.event_id = event_id
