"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (logging, telemetry, Redis
cache, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.cache.redis_cache import CacheService
from app.infrastructure.persistence.database import dispose_engine, get_engine
from app.shared.telemetry.logging import setup_logging
from app.shared.telemetry.telemetry import TelemetryConfig

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, telemetry (if enabled), Redis cache (if
    enabled). Shutdown order: cache disconnect, telemetry shutdown, SQL
    engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    telemetry = TelemetryConfig.from_settings(settings)
    if settings.telemetry_enabled:
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument_fastapi(app)
        telemetry.instrument_logging()
        engine = get_engine()
        if engine is not None:
            telemetry.instrument_sqlalchemy(engine)
        if settings.redis_enabled:
            telemetry.instrument_redis()
        logger.info("Telemetry initialized")
    app.state.telemetry = telemetry

    if settings.redis_enabled:
        cache = CacheService()
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None

    yield

    # ---- Shutdown ----
    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    telemetry.shutdown()
    await dispose_engine()
