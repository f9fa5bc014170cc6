"""db/queries.py — Query composition for the event list.

build_event_query() turns an EventFilters object into a SELECT over events:
every present predicate becomes one WHERE condition, conditions are ANDed,
and rows come back in ascending date_time order (id breaks ties).
"""

from __future__ import annotations

from sqlalchemy import Select, and_, select

from db.models import Event
from schemas.event import EventFilters


def event_conditions(filters: EventFilters) -> list:
    """WHERE conditions for the predicates that are set, in a fixed order."""
    conditions = []

    if filters.title:
        conditions.append(Event.title.contains(filters.title, autoescape=True))
    if filters.location:
        conditions.append(Event.location.contains(filters.location, autoescape=True))
    if filters.date_from is not None:
        conditions.append(Event.date_time >= filters.date_from)
    if filters.date_to is not None:
        conditions.append(Event.date_time <= filters.date_to)

    return conditions


def build_event_query(filters: EventFilters | None = None) -> Select:
    stmt = select(Event)
    conditions = event_conditions(filters or EventFilters())
    if conditions:
        stmt = stmt.where(and_(*conditions))
    return stmt.order_by(Event.date_time.asc(), Event.id.asc())
