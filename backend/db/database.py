"""Database connection and session management."""

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from core.config import settings

logger = logging.getLogger(__name__)


def _connect_args(database_url: str) -> dict:
    # SQLite connections are shared across the threadpool FastAPI runs sync
    # routes on; network drivers get a bounded connect timeout instead.
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {"connect_timeout": settings.db_connect_timeout}


def make_engine(database_url: str):
    """Create an engine for ``database_url`` with the app's connection options."""
    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using them
        connect_args=_connect_args(database_url),
    )


engine = make_engine(settings.database_url)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create base class for models
Base = declarative_base()


def get_db():
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None, seed: bool | None = None) -> None:
    """Create missing tables and optionally insert the sample events.

    Args:
        bind: Engine to initialise. Defaults to the module engine.
        seed: Insert sample data into an empty table. Defaults to
              settings.seed_sample_data.
    """
    # Imported here so the models register on Base before create_all.
    from db import models  # noqa: F401
    from db.seed import seed_sample_events

    bind = bind if bind is not None else engine
    Base.metadata.create_all(bind=bind)
    logger.info("database schema ready", extra={"url": bind.url.render_as_string(hide_password=True)})

    if seed if seed is not None else settings.seed_sample_data:
        session = sessionmaker(bind=bind)()
        try:
            seed_sample_events(session)
        finally:
            session.close()
