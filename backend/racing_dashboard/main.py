"""Racing Dashboard API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DashboardError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Every request produces one access log line (method, path, status, duration)
    - Preference store connected before serving traffic; startup fails if it
      is unreachable
    - Store handle and upstream HTTP client live on app.state and are torn
      down on shutdown

Design Decisions:
    - Lifespan over @app.on_event: one place for setup and cleanup
    - /health is unprefixed; every other route sits under settings.api_prefix
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from racing_dashboard.api.error_handlers import register_error_handlers
from racing_dashboard.api.routes import files, health, preferences, races, weather
from racing_dashboard.config import get_settings
from racing_dashboard.infrastructure.database import DatabaseSessionManager
from racing_dashboard.infrastructure.observability import (
    register_access_logging, setup_logging,
)
from racing_dashboard.infrastructure.upstreams import build_upstream_clients
from racing_dashboard.services.preference_store import PreferenceStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    db = DatabaseSessionManager.from_settings(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await db.connect()
    http = httpx.AsyncClient()

    app.state.db = db
    app.state.preference_store = PreferenceStore(db)
    app.state.upstreams = build_upstream_clients(settings.upstream_config(), http)
    logger.info("Racing Dashboard API started")
    try:
        yield
    finally:
        logger.info("Racing Dashboard API shutting down")
        await http.aclose()
        await db.disconnect()


app = FastAPI(
    title="Racing Dashboard API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(preferences.router, prefix=settings.api_prefix)
app.include_router(weather.router, prefix=settings.api_prefix)
app.include_router(races.router, prefix=settings.api_prefix)
app.include_router(files.router, prefix=settings.api_prefix)

register_error_handlers(app)
register_access_logging(app)
