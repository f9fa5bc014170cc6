# gunicorn.conf.py — Production server configuration for the Event Platform API.
#
# Run from backend/ with:
#   gunicorn api.main:app -c gunicorn.conf.py
#
# Schema creation and sample seeding run once, in the master, before any
# worker is forked. Workers inherit INIT_DB_ON_STARTUP=false and skip it in
# their lifespan, so they never race on create_all or the empty-table check.

import os

workers = int(os.getenv("WEB_CONCURRENCY", "4"))
worker_class = "uvicorn.workers.UvicornWorker"
bind = os.getenv("BIND", "0.0.0.0:8000")

# JSON application logs come from core/logging.py; gunicorn's own go to stdout/stderr
accesslog = "-"
errorlog  = "-"
loglevel  = "info"

timeout          = 60
keepalive        = 5
graceful_timeout = 30


def on_starting(server):
    """Bootstrap the database in the master process."""
    os.environ["INIT_DB_ON_STARTUP"] = "false"

    from core.config import settings
    from db.database import init_db

    settings.init_db_on_startup = False
    init_db()
