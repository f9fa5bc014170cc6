"""core/middleware.py — Request correlation and timing for the Event Platform API.

Provides:
  - RequestIDMiddleware  : stamps every request with an ID (X-Request-ID header)
                           and turns an unhandled exception into a 500 envelope
  - TimingMiddleware     : logs method, path, status, and duration per request

Starlette only hands ``Exception`` handlers to its outermost
ServerErrorMiddleware, which sits outside these classes. An unexpected fault
is therefore answered here, so the 500 response still carries the request ID
and still gets a timing line.
"""

from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from schemas.shared import UNEXPECTED_ERROR_MESSAGE, error_response, status_code_for

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to every request and response.

    An inbound X-Request-ID is reused so a caller (or a proxy in front of us)
    can correlate its own logs; otherwise a fresh UUID4 is generated.

    Sets:
      - request.state.request_id  — available to route handlers and exception handlers
      - X-Request-ID response header, on error responses too
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "unhandled exception",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "error": str(exc),
                },
                exc_info=True,
            )
            response = error_response(UNEXPECTED_ERROR_MESSAGE, status_code_for(exc))
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status code, and wall-clock duration for every request.

    Sits inside RequestIDMiddleware, so request.state.request_id is already
    set. A request whose handler raised is logged with status 500.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            logger.info(
                "request completed",
                extra={
                    "request_id": getattr(request.state, "request_id", "-"),
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                },
            )
