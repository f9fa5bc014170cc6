from schemas.shared import (
    ApiModel, ApiResponse, MessageResponse, DeleteResponse, StatusUpdateResponse,
    error_envelope, error_response, status_code_for, UNEXPECTED_ERROR_MESSAGE,
)
from schemas.event import (
    EventBase, EventCreate, EventUpdate, StatusUpdateRequest, EventResponse,
    GenerateDescriptionRequest, GenerateDescriptionResponse, EventFilters,
)

__all__ = [
    "ApiModel", "ApiResponse", "MessageResponse", "DeleteResponse", "StatusUpdateResponse",
    "error_envelope", "error_response", "status_code_for", "UNEXPECTED_ERROR_MESSAGE",
    "EventBase", "EventCreate", "EventUpdate", "StatusUpdateRequest", "EventResponse",
    "GenerateDescriptionRequest", "GenerateDescriptionResponse", "EventFilters",
]
