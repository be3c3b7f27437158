"""Shared test configuration and fixtures.

Each test gets a fresh database: an in-memory SQLite engine by default, or
whatever ``TEST_DATABASE_URL`` points at. Tables are created per test and the
API shares the test's session, so nothing leaks between tests.
"""

import os
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

import stayquote.models  # noqa: F401  (registers every table on Base.metadata)
from stayquote.database import Base, get_db, make_engine
from stayquote.main import app

_test_db_url = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")


# ---------------------------------------------------------------------------
# Per-test: engine, tables and session
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an engine with all tables, dropping them afterwards."""
    engine = make_engine(_test_db_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session that is rolled back after the test."""
    async with AsyncSession(bind=test_engine, expire_on_commit=False) as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: tenant
# ---------------------------------------------------------------------------


@pytest.fixture
def tenant_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def tenant_headers(tenant_id: uuid.UUID) -> dict[str, str]:
    """Headers that scope management requests to the test tenant."""
    return {"X-Tenant-ID": str(tenant_id)}


@pytest.fixture
def other_tenant_headers() -> dict[str, str]:
    return {"X-Tenant-ID": str(uuid.uuid4())}


# ---------------------------------------------------------------------------
# Convenience fixtures: room, rate and add-on helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def create_room(client: AsyncClient, tenant_headers: dict) -> Callable[..., Awaitable[dict]]:
    """Return a helper that creates a room via the API and returns its JSON."""

    async def _create(**overrides) -> dict:
        payload = {
            "name": "Test Room",
            "max_guests": 4,
            "base_price_per_night": 100.00,
            "pricing_mode": "per_unit",
        }
        payload.update(overrides)
        response = await client.post("/api/v1/rooms", json=payload, headers=tenant_headers)
        assert response.status_code == 201, f"Failed to create test room: {response.text}"
        return response.json()

    return _create


@pytest.fixture
def create_rate(client: AsyncClient, tenant_headers: dict) -> Callable[..., Awaitable[dict]]:
    """Return a helper that adds a seasonal rate to a room via the API."""

    async def _create(room_id: str, **fields) -> dict:
        payload = {"name": "Peak", "priority": 0}
        payload.update(fields)
        response = await client.post(f"/api/v1/rooms/{room_id}/rates", json=payload, headers=tenant_headers)
        assert response.status_code == 201, f"Failed to create test rate: {response.text}"
        return response.json()

    return _create


@pytest.fixture
def create_addon(client: AsyncClient, tenant_headers: dict) -> Callable[..., Awaitable[dict]]:
    """Return a helper that creates an add-on via the API."""

    async def _create(**overrides) -> dict:
        payload = {
            "name": "Breakfast",
            "price": 50.00,
            "pricing_type": "per_booking",
        }
        payload.update(overrides)
        response = await client.post("/api/v1/addons", json=payload, headers=tenant_headers)
        assert response.status_code == 201, f"Failed to create test add-on: {response.text}"
        return response.json()

    return _create


@pytest_asyncio.fixture
async def test_room(create_room) -> dict:
    """A per-unit room at 100.00 a night."""
    return await create_room()
