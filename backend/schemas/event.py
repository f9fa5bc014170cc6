"""schemas/event.py — Event request/response schemas and list filters.

DB source: events — id, title, date_time, location, description, status,
created_at, updated_at
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Annotated, Optional

from pydantic import BeforeValidator, ConfigDict, Field, field_validator

from db.models import EventStatus
from schemas.shared import ApiModel

# Accepts 0-3, "1", "Attending", "attending"; always emits the name.
StatusValue = Annotated[EventStatus, BeforeValidator(EventStatus.parse)]


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values pass through."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _date_only_to_midnight(value):
    if isinstance(value, str) and len(value.strip()) == 10:
        return datetime.combine(date.fromisoformat(value.strip()), time.min)
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    return value


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class EventBase(ApiModel):
    title: str = Field(..., max_length=100, examples=["Technology Conference 2024"])
    date_time: datetime = Field(..., examples=["2025-07-15T14:00:00"])
    location: str = Field(..., max_length=200, examples=["Convention Center"])
    description: str = Field("", max_length=1000)
    status: StatusValue = EventStatus.UPCOMING

    @field_validator("title", "location")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, v):
        return "" if v is None else v

    @field_validator("date_time")
    @classmethod
    def _normalise_date_time(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class EventCreate(EventBase):
    """Body of POST /events."""


class EventUpdate(EventBase):
    """Body of PUT /events/{id}; ``id`` must match the path."""
    id: int


class StatusUpdateRequest(ApiModel):
    status: StatusValue


class GenerateDescriptionRequest(ApiModel):
    # Optional so a missing topic reports "Topic is required" like an empty one.
    topic: Optional[str] = Field(None, examples=["Web Development"])


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class EventResponse(ApiModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    date_time: datetime
    location: str
    description: str = ""
    status: EventStatus
    created_at: datetime
    updated_at: Optional[datetime] = None


class GenerateDescriptionResponse(ApiModel):
    description: str


# ---------------------------------------------------------------------------
# List filters (query string)
# ---------------------------------------------------------------------------

class EventFilters(ApiModel):
    """Optional predicates for GET /events; all present ones are ANDed.

    A date-only bound (YYYY-MM-DD) means midnight of that day.
    """

    title: Optional[str] = Field(None, description="Partial title match")
    location: Optional[str] = Field(None, description="Partial location match")
    date_from: Optional[datetime] = Field(None, description="Events on or after this instant")
    date_to: Optional[datetime] = Field(None, description="Events on or before this instant")

    @field_validator("title", "location", mode="before")
    @classmethod
    def _empty_is_absent(cls, v):
        if isinstance(v, str) and v == "":
            return None
        return v

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _parse_date_only(cls, v):
        if v == "":
            return None
        return _date_only_to_midnight(v)

    @field_validator("date_from", "date_to")
    @classmethod
    def _normalise_bound(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v) if v is not None else None
