"""
Tests for the application shell: configuration, logging setup, database
bootstrap and seeding, health/root routes, and middleware.

    pytest tests/test_app.py -v
"""

import json
import logging
import os
import runpy
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.logging import configure_logging
from db.database import init_db
from db.models import Event, EventStatus
from db.seed import SAMPLE_EVENTS, seed_sample_events

GUNICORN_CONF = Path(__file__).resolve().parent.parent / "gunicorn.conf.py"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class TestSettings:

    def test_defaults(self, monkeypatch):
        for var in ("DATABASE_URL", "ENVIRONMENT", "API_PREFIX", "ALLOWED_ORIGINS"):
            monkeypatch.delenv(var, raising=False)
        s = Settings(_env_file=None)
        assert s.database_url.startswith("sqlite")
        assert s.api_prefix == "/api"
        assert "http://localhost:4200" in s.allowed_origins
        assert s.is_production is False

    def test_log_level_uppercased(self):
        assert Settings(_env_file=None, log_level="info").log_level == "INFO"

    def test_postgres_scheme_normalised(self):
        s = Settings(_env_file=None, database_url="postgres://u:p@db:5432/events")
        assert s.database_url == "postgresql://u:p@db:5432/events"

    def test_environment_from_env(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "Production")
        assert Settings(_env_file=None).is_production

    def test_init_db_on_startup_from_env(self, monkeypatch):
        assert Settings(_env_file=None).init_db_on_startup is True
        monkeypatch.setenv("INIT_DB_ON_STARTUP", "false")
        assert Settings(_env_file=None).init_db_on_startup is False


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

class TestLogging:

    @pytest.fixture(autouse=True)
    def _restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_writes_json_lines_to_file(self, tmp_path):
        configure_logging("info", str(tmp_path))
        logging.getLogger("events.test").info("hello", extra={"event_id": 3})
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = (tmp_path / "app.log").read_text(encoding="utf-8").strip().splitlines()
        record = json.loads(lines[-1])
        assert record["message"] == "hello"
        assert record["event_id"] == 3
        assert record["levelname"] == "INFO"

    def test_empty_log_dir_means_console_only(self):
        configure_logging("warning", "")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING


# ---------------------------------------------------------------------------
# Bootstrap & seed data
# ---------------------------------------------------------------------------

class TestSeed:

    def test_seeds_empty_table(self, db_session):
        assert seed_sample_events(db_session) == len(SAMPLE_EVENTS)

        events = db_session.query(Event).order_by(Event.date_time).all()
        assert [e.title for e in events] == [s["title"] for s in SAMPLE_EVENTS]
        assert [e.status for e in events] == [
            EventStatus.UPCOMING, EventStatus.ATTENDING, EventStatus.MAYBE,
        ]
        assert all(e.updated_at is None for e in events)

    def test_skips_non_empty_table(self, db_session, make_event):
        make_event()
        assert seed_sample_events(db_session) == 0
        assert db_session.query(Event).count() == 1

    def test_init_db_creates_schema_and_seeds(self, tmp_path):
        from sqlalchemy import create_engine, inspect
        from sqlalchemy.orm import sessionmaker

        eng = create_engine(f"sqlite:///{tmp_path / 'events.db'}")
        try:
            init_db(eng, seed=True)
            assert "events" in inspect(eng).get_table_names()

            session = sessionmaker(bind=eng)()
            try:
                assert session.query(Event).count() == len(SAMPLE_EVENTS)
            finally:
                session.close()

            # Second run leaves existing data alone.
            init_db(eng, seed=True)
            session = sessionmaker(bind=eng)()
            try:
                assert session.query(Event).count() == len(SAMPLE_EVENTS)
            finally:
                session.close()
        finally:
            eng.dispose()

    def test_lifespan_skips_bootstrap_when_disabled(self, monkeypatch):
        import api.main as main_module

        calls = []
        monkeypatch.setattr(main_module, "configure_logging", lambda *args: None)
        monkeypatch.setattr(main_module, "init_db", lambda: calls.append("init_db"))

        monkeypatch.setattr(main_module.settings, "init_db_on_startup", False)
        with TestClient(main_module.app):
            pass
        assert calls == []

        monkeypatch.setattr(main_module.settings, "init_db_on_startup", True)
        with TestClient(main_module.app):
            pass
        assert calls == ["init_db"]

    def test_gunicorn_master_bootstraps_once_for_all_workers(self, monkeypatch):
        import db.database
        from core.config import settings

        calls = []
        monkeypatch.setattr(db.database, "init_db", lambda: calls.append("init_db"))
        monkeypatch.setattr(settings, "init_db_on_startup", True)
        monkeypatch.setenv("INIT_DB_ON_STARTUP", "true")

        conf = runpy.run_path(str(GUNICORN_CONF))
        conf["on_starting"](server=None)

        assert calls == ["init_db"]
        assert os.environ["INIT_DB_ON_STARTUP"] == "false"
        assert settings.init_db_on_startup is False
        assert Settings(_env_file=None).init_db_on_startup is False

    def test_init_db_without_seed(self, tmp_path):
        from sqlalchemy import create_engine
        from sqlalchemy.orm import sessionmaker

        eng = create_engine(f"sqlite:///{tmp_path / 'empty.db'}")
        try:
            init_db(eng, seed=False)
            session = sessionmaker(bind=eng)()
            try:
                assert session.query(Event).count() == 0
            finally:
                session.close()
        finally:
            eng.dispose()


# ---------------------------------------------------------------------------
# Root, health, middleware
# ---------------------------------------------------------------------------

class TestServiceRoutes:

    def test_root(self, client):
        body = client.get("/").json()
        assert body["service"] == "Event Platform API"
        assert body["docs"] == "/docs"

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "ok"
        assert body["timestamp"]

    def test_health_db(self, client):
        resp = client.get("/health/db")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "db": "connected"}

    def test_request_id_generated(self, client):
        resp = client.get("/health")
        assert resp.headers["X-Request-ID"]

    def test_request_id_propagated(self, client):
        resp = client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert resp.headers["X-Request-ID"] == "abc-123"

    def test_cors_allows_frontend_origin(self, client):
        resp = client.options(
            "/api/events",
            headers={
                "Origin": "http://localhost:4200",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "http://localhost:4200"
