import os
from contextlib import asynccontextmanager
from datetime import UTC, datetime

# Tests run against SQLite unless a database is configured explicitly
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./guests.db")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from src.config.database import async_session_maker, engine  # noqa: E402
from src.guests.repository import orm_models  # noqa: E402,F401
from src.main import app  # noqa: E402
from src.models.base import BaseModel  # noqa: E402
from src.models.event import Event  # noqa: E402


@pytest.fixture
def client_factory():
    """Build a test client with the given dependency overrides."""

    @asynccontextmanager
    async def _client(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        app.state.guest_view_cache.clear()
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            app.dependency_overrides.clear()

    return _client


@pytest.fixture
async def client(client_factory):
    async with client_factory() as ac:
        yield ac


@pytest.fixture
async def db_schema():
    """Create all tables for the test, drop them afterwards."""
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)
    # pooled connections are tied to this test's event loop
    await engine.dispose()


@pytest.fixture
async def db_session(db_schema):
    """A session whose changes are rolled back when the test ends."""
    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def event(db_session):
    wedding = Event(name="Jane & John", date=datetime(2026, 8, 15, tzinfo=UTC))
    db_session.add(wedding)
    await db_session.flush()
    return wedding
