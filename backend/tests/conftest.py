"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Tests never reach real upstream functions: every upstream URL points at
      an UpstreamStub served through httpx.MockTransport
    - Every test gets a fresh in-memory SQLite preference store
    - app.state is restored after each test that wires it

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (row locks are a no-op there; the locking path is exercised on PostgreSQL)
    - ASGITransport does not run the lifespan, so fixtures set app.state directly
    - raise_app_exceptions=False so the catch-all 500 handler can be asserted
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from racing_dashboard.db.base import Base
from racing_dashboard.infrastructure.database import DatabaseSessionManager
from racing_dashboard.infrastructure.upstreams import build_upstream_clients
from racing_dashboard.main import app
from racing_dashboard.services.preference_store import PreferenceStore
from tests.upstream_stub import (
    F1_RACES, F1_URL, LONDON_METRIC, MOTOGP_RACES, MOTOGP_URL, USER_ID,
    WEATHER_URL, UpstreamStub, upstream_config,
)


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.connect()
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.disconnect()


@pytest.fixture
def store(db_manager):
    return PreferenceStore(db_manager)


@pytest.fixture
def upstream_stub():
    stub = UpstreamStub()
    stub.reply(WEATHER_URL, httpx.Response(200, json=LONDON_METRIC))
    stub.reply(MOTOGP_URL, httpx.Response(200, json=MOTOGP_RACES))
    stub.reply(F1_URL, httpx.Response(200, json=F1_RACES))
    return stub


@pytest.fixture
async def upstream_http(upstream_stub):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(upstream_stub.handler),
    ) as http:
        yield http


@pytest.fixture
def upstreams(upstream_http):
    return build_upstream_clients(upstream_config(), upstream_http)


@pytest.fixture
def wired_app(db_manager, store, upstreams):
    """app with store and upstream handles set as the lifespan would."""
    saved = {
        key: getattr(app.state, key, None)
        for key in ("db", "preference_store", "upstreams")
    }
    app.state.db = db_manager
    app.state.preference_store = store
    app.state.upstreams = upstreams
    yield app
    for key, value in saved.items():
        setattr(app.state, key, value)
    app.dependency_overrides.clear()


def _asgi_client(headers: dict[str, str] | None = None) -> AsyncClient:
    return AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
        headers=headers,
    )


@pytest.fixture
async def client(wired_app):
    """Test client acting as USER_ID (identity header set)."""
    async with _asgi_client({"x-user-id": USER_ID}) as c:
        yield c


@pytest.fixture
async def anon_client(wired_app):
    """Test client with no identity header."""
    async with _asgi_client() as c:
        yield c
