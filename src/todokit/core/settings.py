"""Environment driven service settings."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.engine import URL

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./todo.db"


class Settings(BaseModel):
    """Runtime settings for the task service."""

    model_config = ConfigDict(frozen=True)

    database_url: str = DEFAULT_DATABASE_URL
    static_dir: Path | None = None
    shutdown_timeout: float = Field(default=30.0, gt=0)
    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        ``TODOKIT_DATABASE_URL`` wins over the ``DB_*`` PostgreSQL variables;
        with neither present a local SQLite file is used.
        """
        env = os.environ if environ is None else environ

        database_url = env.get("TODOKIT_DATABASE_URL") or _postgres_url_from_env(env) or DEFAULT_DATABASE_URL
        static_dir = env.get("TODOKIT_STATIC_DIR")

        return cls(
            database_url=database_url,
            static_dir=Path(static_dir) if static_dir else None,
            shutdown_timeout=float(env.get("TODOKIT_SHUTDOWN_TIMEOUT", "30")),
            log_level=env.get("LOG_LEVEL", "INFO"),
            log_format=env.get("LOG_FORMAT", "json"),
        )


def _postgres_url_from_env(env: Mapping[str, str]) -> str | None:
    """Assemble an asyncpg URL from DB_HOST, DB_PORT, DB_USER, DB_PASSWORD and DB_NAME."""
    host = env.get("DB_HOST")
    if not host:
        return None

    port = env.get("DB_PORT")
    url = URL.create(
        "postgresql+asyncpg",
        username=env.get("DB_USER") or None,
        password=env.get("DB_PASSWORD") or None,
        host=host,
        port=int(port) if port else 5432,
        database=env.get("DB_NAME") or None,
    )
    return url.render_as_string(hide_password=False)
