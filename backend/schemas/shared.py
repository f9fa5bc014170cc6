"""schemas/shared.py — Response envelopes shared by every write endpoint.

Two shapes:
    ApiResponse[T]    {success, message, data, statusCode, timestamp}
    MessageResponse   {success, message, statusCode, timestamp}
                      + DeleteResponse       (deletedId)
                      + StatusUpdateResponse (eventId, previousStatus, newStatus)

Success envelopes default to 200; error envelopes default to 400 and always
use the data-bearing shape with ``data: null``. ``timestamp`` is taken when
the envelope object is built.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Generic, Optional, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.exceptions import EventPlatformError
from db.models import EventStatus

T = TypeVar("T")

DEFAULT_SUCCESS_MESSAGE = "Operation completed successfully"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ApiModel(BaseModel):
    """Base for every API schema: camelCase on the wire, snake_case accepted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(ApiModel, Generic[T]):
    success: bool
    message: str
    data: Optional[T] = None
    status_code: int
    timestamp: datetime = Field(default_factory=_now)

    @classmethod
    def ok(cls, data: T, message: str = DEFAULT_SUCCESS_MESSAGE, status_code: int = 200):
        return cls(success=True, message=message, data=data, status_code=status_code)

    @classmethod
    def fail(cls, message: str, status_code: int = 400):
        return cls(success=False, message=message, data=None, status_code=status_code)


class MessageResponse(ApiModel):
    """Envelope for operations that return no payload."""

    success: bool
    message: str
    status_code: int
    timestamp: datetime = Field(default_factory=_now)

    @classmethod
    def ok(cls, message: str = DEFAULT_SUCCESS_MESSAGE, status_code: int = 200, **fields):
        return cls(success=True, message=message, status_code=status_code, **fields)


class DeleteResponse(MessageResponse):
    deleted_id: int


class StatusUpdateResponse(MessageResponse):
    event_id: int
    previous_status: EventStatus
    new_status: EventStatus


def status_code_for(exc: Exception) -> int:
    """HTTP status for an exception: the domain mapping, else 500."""
    if isinstance(exc, EventPlatformError):
        return exc.status_code
    return 500


def error_envelope(message: str, status_code: int = 400) -> ApiResponse[None]:
    return ApiResponse[None].fail(message, status_code=status_code)


def error_response(message: str, status_code: int = 400, headers: Optional[dict] = None) -> JSONResponse:
    """``error_envelope`` rendered as a JSONResponse with a matching HTTP status."""
    envelope = error_envelope(message, status_code=status_code)
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(mode="json", by_alias=True),
        headers=headers,
    )
