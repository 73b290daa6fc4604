"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: shared outbound HTTP client
(identity service and email provider), local schema creation, and SQL
engine disposal.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from villagetech.core.config import get_settings
from villagetech.infrastructure.persistence import database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    SQLite databases get their tables created on startup; other backends
    are expected to be migrated with Alembic beforehand.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.http_client = httpx.AsyncClient(
        timeout=max(settings.identity_timeout_seconds, settings.email_timeout_seconds)
    )
    if settings.database_url.startswith("sqlite"):
        await database.init_models()
        logger.info("SQLite schema ensured at %s", settings.database_url)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("Outbound HTTP client closed")

    await database.dispose_engine()
