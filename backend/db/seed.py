"""Sample events inserted into an empty database at startup.

Dates are relative to "now" so the sample data always shows upcoming events.
"""

import logging
from datetime import timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .models import Event, EventStatus, utcnow

logger = logging.getLogger(__name__)

SAMPLE_EVENTS = [
    {
        "title": "Technology Conference 2024",
        "days_ahead": 7,
        "location": "Convention Center",
        "description": "A conference on the latest trends in technology",
        "status": EventStatus.UPCOMING,
    },
    {
        "title": "Developers Meetup",
        "days_ahead": 14,
        "location": "Central Café",
        "description": "Networking and talks about software development",
        "status": EventStatus.ATTENDING,
    },
    {
        "title": "Angular Workshop",
        "days_ahead": 21,
        "location": "Local University",
        "description": "Hands-on workshop on Angular 17+",
        "status": EventStatus.MAYBE,
    },
]


def seed_sample_events(db: Session) -> int:
    """Insert SAMPLE_EVENTS if the events table is empty.

    Returns:
        Number of rows inserted (0 when the table already had data).
    """
    existing = db.execute(select(func.count()).select_from(Event)).scalar_one()
    if existing:
        logger.debug("seed skipped, events table not empty", extra={"existing": existing})
        return 0

    now = utcnow()
    for sample in SAMPLE_EVENTS:
        db.add(Event(
            title=sample["title"],
            date_time=now + timedelta(days=sample["days_ahead"]),
            location=sample["location"],
            description=sample["description"],
            status=sample["status"],
            created_at=now,
        ))
    db.commit()

    logger.info("sample events inserted", extra={"count": len(SAMPLE_EVENTS)})
    return len(SAMPLE_EVENTS)
