"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import health, message_imports, message_keys, runtime

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(
    message_keys.router,
    prefix="/message-stores/{store_id}/message-keys",
    tags=["message-keys"],
)
api_router.include_router(
    message_imports.router,
    prefix="/message-stores/{store_id}",
    tags=["import-export"],
)
api_router.include_router(runtime.router, prefix="/runtime", tags=["runtime"])
