"""core/config.py — Application configuration via Pydantic BaseSettings.

Loads environment variables from .env (and the OS environment).
Import `settings` from this module wherever configuration is needed.

Usage:
    from core.config import settings

    db_url = settings.database_url
    if settings.is_production:
        ...
"""

from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env lives in the project root (one level above backend/)
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./events.db"
    db_connect_timeout: int = 10
    seed_sample_data: bool = True
    # gunicorn bootstraps once in the master and turns this off for its workers
    init_db_on_startup: bool = True

    # Application
    environment: str = "development"
    log_level: str = "DEBUG"
    log_dir: str = "logs"
    api_prefix: str = "/api"

    # CORS — list of allowed origins for the Angular frontend
    allowed_origins: list[str] = [
        "http://localhost:4200",
        "https://localhost:4200",
    ]

    @field_validator("log_level", mode="before")
    @classmethod
    def _uppercase_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("database_url", mode="after")
    @classmethod
    def _normalise_postgres_scheme(cls, v: str) -> str:
        # SQLAlchemy requires "postgresql://" not "postgres://"
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


# Singleton — import this everywhere
settings = Settings()
