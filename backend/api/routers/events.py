"""api/routers/events.py — Event endpoints.

Routes (mounted under settings.api_prefix, default /api):
    GET    /events                         Filtered list; title, location, dateFrom, dateTo
    GET    /events/{id}                    Single event
    POST   /events                         Create            -> 201 ApiResponse[Event]
    PUT    /events/{id}                    Full replace      -> MessageResponse
    PATCH  /events/{id}/status             Status only       -> StatusUpdateResponse
    DELETE /events/{id}                    Hard delete       -> DeleteResponse
    POST   /events/generate-description    Template text     -> ApiResponse[{description}]

Failures are raised as core.exceptions errors and rendered as envelopes by
the handlers in api/main.py.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from api.dependencies import get_description_generator, get_event_repository
from core.exceptions import EventNotFoundError, EventValidationError
from db.repository import EventRepository
from schemas.event import (
    EventCreate,
    EventFilters,
    EventResponse,
    EventUpdate,
    GenerateDescriptionRequest,
    GenerateDescriptionResponse,
    StatusUpdateRequest,
)
from schemas.shared import ApiResponse, DeleteResponse, MessageResponse, StatusUpdateResponse
from services.descriptions import DescriptionGenerator

logger = logging.getLogger(__name__)

router = APIRouter()

# Event.id is a 32-bit INTEGER on PostgreSQL; ids outside that range are a 400.
EVENT_ID_MIN = -(2**31)
EVENT_ID_MAX = 2**31 - 1

EventId = Annotated[int, Path(description="Event ID", ge=EVENT_ID_MIN, le=EVENT_ID_MAX)]


@router.get("", response_model=list[EventResponse], summary="List events")
def list_events(
    filters: Annotated[EventFilters, Query()],
    repo: EventRepository = Depends(get_event_repository),
):
    """All events matching every given filter, oldest date first."""
    return repo.list(filters)


@router.post(
    "/generate-description",
    response_model=ApiResponse[GenerateDescriptionResponse],
    summary="Generate a description from a topic",
)
def generate_description(
    body: GenerateDescriptionRequest,
    generator: DescriptionGenerator = Depends(get_description_generator),
):
    description = generator.generate(body.topic)
    return ApiResponse[GenerateDescriptionResponse].ok(
        GenerateDescriptionResponse(description=description),
        message="Description generated successfully",
    )


@router.get("/{event_id}", response_model=EventResponse, summary="Get event")
def get_event(event_id: EventId, repo: EventRepository = Depends(get_event_repository)):
    event = repo.get(event_id)
    if event is None:
        raise EventNotFoundError(event_id)
    return event


@router.post(
    "",
    response_model=ApiResponse[EventResponse],
    status_code=201,
    summary="Create event",
)
def create_event(body: EventCreate, repo: EventRepository = Depends(get_event_repository)):
    event = repo.create(body)
    return ApiResponse[EventResponse].ok(
        EventResponse.model_validate(event),
        message="Event created successfully",
        status_code=201,
    )


@router.put("/{event_id}", response_model=MessageResponse, summary="Replace event")
def replace_event(
    event_id: EventId,
    body: EventUpdate,
    repo: EventRepository = Depends(get_event_repository),
):
    if body.id != event_id:
        raise EventValidationError("The ID in the URL does not match the ID in the request body")

    repo.replace(event_id, body)
    return MessageResponse.ok("Event updated successfully")


@router.patch(
    "/{event_id}/status",
    response_model=StatusUpdateResponse,
    summary="Change event status",
)
def update_event_status(
    event_id: EventId,
    body: StatusUpdateRequest,
    repo: EventRepository = Depends(get_event_repository),
):
    change = repo.set_status(event_id, body.status)
    return StatusUpdateResponse.ok(
        "Event status updated successfully",
        event_id=event_id,
        previous_status=change.previous,
        new_status=change.new,
    )


@router.delete("/{event_id}", response_model=DeleteResponse, summary="Delete event")
def delete_event(event_id: EventId, repo: EventRepository = Depends(get_event_repository)):
    deleted_id = repo.delete(event_id)
    return DeleteResponse.ok("Event deleted successfully", deleted_id=deleted_id)
