"""Shared fixtures: in-memory database, sessions and an HTTP client."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from todokit import Database
from todokit.api import ServiceBuilder, ServiceInfo

IN_MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Create and initialize in-memory database for testing."""
    db = Database(IN_MEMORY_URL)
    await db.init()
    try:
        yield db
    finally:
        await db.dispose()


@pytest.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Open a session on the test database."""
    async with database.session() as s:
        yield s


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """TestClient for a task service on a fresh in-memory database, with lifespan."""
    app = (
        ServiceBuilder(info=ServiceInfo(display_name="Todo Test Service"), database_url=IN_MEMORY_URL)
        .with_health()
        .with_tasks()
        .build()
    )
    with TestClient(app) as test_client:
        yield test_client
