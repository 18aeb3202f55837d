"""Async SQLAlchemy database connection manager."""

from __future__ import annotations

import sqlite3
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import ConnectionPoolEntry

from .logging import get_logger

logger = get_logger(__name__)


def _install_sqlite_connect_pragmas(engine: AsyncEngine) -> None:
    """Install SQLite connection pragmas for performance and reliability."""

    def on_connect(dbapi_conn: sqlite3.Connection, _conn_record: ConnectionPoolEntry) -> None:
        """Configure SQLite pragmas on connection."""
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA synchronous=NORMAL;")
        cur.execute("PRAGMA busy_timeout=30000;")  # 30s
        cur.close()

    event.listen(engine.sync_engine, "connect", on_connect)


class Database:
    """Async SQLAlchemy database connection manager."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        """Initialize database with connection URL."""
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, future=True)
        if self.is_sqlite:
            _install_sqlite_connect_pragmas(self.engine)
        self._session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @property
    def is_sqlite(self) -> bool:
        """Return True when the URL points at a SQLite database."""
        return make_url(self.url).get_backend_name() == "sqlite"

    async def init(self) -> None:
        """Create missing tables; raises if the store cannot be reached."""
        # Import Base here so every model module is registered on the metadata
        from todokit.core.models import Base
        from todokit.modules.task import models as _task_models  # noqa: F401

        if self.is_sqlite and ":memory:" not in self.url:
            async with self.engine.begin() as conn:
                await conn.exec_driver_sql("PRAGMA journal_mode=WAL;")

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("database.initialized", backend=make_url(self.url).get_backend_name())

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Create a database session context manager."""
        async with self._session_factory() as s:
            yield s

    async def dispose(self) -> None:
        """Dispose of database engine and connection pool."""
        await self.engine.dispose()
