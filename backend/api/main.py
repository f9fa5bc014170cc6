"""
main.py — Event Platform API entry point

The FastAPI application instance lives here. All middleware, routers,
exception handlers, and startup/shutdown events are registered in this file.

Usage
-----
Development (auto-reloads on file save):
    cd backend
    uvicorn api.main:app --reload --port 8000

Production (multiple worker processes):
    cd backend
    gunicorn api.main:app -c gunicorn.conf.py

Docs (once running):
    http://localhost:8000/docs    — Swagger UI (interactive)
    http://localhost:8000/redoc   — ReDoc (read-only)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routers.events import router as events_router
from api.routers.health import VERSION, router as health_router
from core.config import settings
from core.exceptions import EventPlatformError
from core.logging import configure_logging
from core.middleware import RequestIDMiddleware, TimingMiddleware
from db.database import init_db
from schemas.shared import UNEXPECTED_ERROR_MESSAGE, error_response, status_code_for

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan — startup and shutdown hooks
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── Startup ────────────────────────────────────────────────────────────────
    configure_logging(settings.log_level, settings.log_dir)
    logger.info(
        "Event Platform API starting",
        extra={
            "environment": settings.environment,
            "version": VERSION,
            "log_level": settings.log_level,
            "allowed_origins": settings.allowed_origins,
        },
    )
    if settings.init_db_on_startup:
        init_db()
    yield
    # ── Shutdown ───────────────────────────────────────────────────────────────
    logger.info("Event Platform API shutting down")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Event Platform API",
    description=(
        "Event management API. Create, read, update and delete events, "
        "change their attendance status, and generate descriptions from a topic."
    ),
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# Middleware  (add_middleware order matters: last added = outermost = first to
# handle incoming requests)
#
#   Execution order for a request:
#     CORS → RequestID → Timing → route handler
#   Execution order for a response:
#     route handler → Timing → RequestID → CORS
# ---------------------------------------------------------------------------

app.add_middleware(TimingMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Exception handlers (every failure leaves as an ApiResponse envelope)
# ---------------------------------------------------------------------------

def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        # Drop the "body"/"query"/"path" source prefix from the location.
        loc = [str(p) for p in error.get("loc", ())[1:]] or [str(p) for p in error.get("loc", ())]
        field = ".".join(loc)
        parts.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    return "Validation failed: " + "; ".join(parts)


@app.exception_handler(EventPlatformError)
async def event_platform_exception_handler(request: Request, exc: EventPlatformError) -> JSONResponse:
    """Domain errors carry their own status code (400 / 404 / 500)."""
    status_code = status_code_for(exc)
    log = logger.error if status_code >= 500 else logger.info
    log(
        "request failed",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "path": request.url.path,
            "status_code": status_code,
            "error": exc.message,
        },
    )
    return error_response(exc.message, status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body, query, and path validation failures become 400 envelopes."""
    return error_response(_format_validation_errors(exc), 400)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (unknown path, wrong method) in the same envelope."""
    return error_response(str(exc.detail), exc.status_code, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for faults raised outside RequestIDMiddleware (which answers the rest)."""
    logger.error(
        "unhandled exception",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "method": request.method,
            "path": request.url.path,
            "error": str(exc),
        },
        exc_info=True,
    )
    return error_response(UNEXPECTED_ERROR_MESSAGE, status_code_for(exc))


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(health_router)            # /health, /health/db  (unprefixed)
app.include_router(events_router, prefix=f"{settings.api_prefix}/events", tags=["events"])


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------

@app.get("/", tags=["root"], summary="API root")
def root():
    """Confirms the API is running. Returns service name, version, and docs URL."""
    return {
        "service": "Event Platform API",
        "version": VERSION,
        "docs":    "/docs",
    }
