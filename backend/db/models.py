"""SQLAlchemy models for the Event Platform."""

import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, Integer, String

from .database import Base


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the storage convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class EventStatus(str, enum.Enum):
    """Attendance status of an event.

    Each member has a stable integer code (``Upcoming=0`` … ``Declined=3``)
    used by clients that send numbers; the database and JSON responses use
    the name.
    """

    UPCOMING = "Upcoming"
    ATTENDING = "Attending"
    MAYBE = "Maybe"
    DECLINED = "Declined"

    @property
    def code(self) -> int:
        return _STATUS_CODES[self]

    @classmethod
    def from_code(cls, code: int) -> "EventStatus":
        for status, status_code in _STATUS_CODES.items():
            if status_code == code:
                return status
        raise ValueError(f"{code!r} is not a valid status code (expected 0-3)")

    @classmethod
    def parse(cls, value) -> "EventStatus":
        """Accept a member, an integer code, a numeric string or a name
        (case-insensitive). Raises ValueError for anything else."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"{value!r} is not a valid status")
        if isinstance(value, int):
            return cls.from_code(value)
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls.from_code(int(text))
            for status in cls:
                if status.value.lower() == text.lower():
                    return status
            names = ", ".join(s.value for s in cls)
            raise ValueError(f"{value!r} is not a valid status (expected one of {names})")
        raise ValueError(f"{value!r} is not a valid status")


_STATUS_CODES = {
    EventStatus.UPCOMING: 0,
    EventStatus.ATTENDING: 1,
    EventStatus.MAYBE: 2,
    EventStatus.DECLINED: 3,
}


class Event(Base):
    """An event on the platform."""

    __tablename__ = "events"
    # Without AUTOINCREMENT SQLite hands a deleted max id out again.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    date_time = Column(DateTime, nullable=False, index=True)
    location = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=False, default="")
    status = Column(
        Enum(
            EventStatus,
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
            validate_strings=True,
        ),
        nullable=False,
        default=EventStatus.UPCOMING,
    )

    # created_at is set once; updated_at stays NULL until the first mutation
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<Event(id={self.id}, title='{self.title}', date_time={self.date_time})>"
