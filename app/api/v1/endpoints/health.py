"""Health check endpoints: liveness, and readiness against the database and cache."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.infrastructure.persistence.database import get_engine
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


async def _database_status() -> str:
    engine = get_engine()
    if engine is None:
        return "not_configured"
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Readiness: database unavailable: %s", e)
        return "unavailable"
    return "ok"


async def _cache_status(request: Request) -> str:
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        return "disabled"
    return "ok" if await cache.ping() else "unavailable"


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unavailable", "model": ReadinessErrorResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 if the database answers (or none is configured); 503 otherwise.

    An unavailable cache does not fail readiness; the runtime path falls
    back to the database.
    """
    database = await _database_status()
    cache = await _cache_status(request)
    if database == "unavailable":
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(
                status="not_ready", message="database unavailable"
            ).model_dump(),
        )
    return ReadinessResponse(database=database, cache=cache)
