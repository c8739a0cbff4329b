"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain, storage and
framework exceptions to HTTP responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import MessageStoreException
from app.infrastructure.exceptions import StorageException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "VALIDATION_ERROR": 400,
    "MESSAGE_KEY_EXISTS": 409,
    "VERSION_CONFLICT": 409,
    "STORAGE_ERROR": 503,
    "SERVICE_UNAVAILABLE": 503,
}


def status_for(exc: MessageStoreException) -> int:
    """Return the HTTP status for a domain exception (400 when unmapped)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _message_store_exception_handler(
    request: Request, exc: MessageStoreException
) -> JSONResponse:
    """Return JSON from MessageStoreException.to_dict() with appropriate status code."""
    return JSONResponse(status_code=status_for(exc), content=exc.to_dict())


def _storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 503 for connection-level database failures; the caller may retry."""
    logger.error("Database unavailable: %s", exc)
    storage = StorageException(
        operation=f"{request.method} {request.url.path}",
        reason=type(exc).__name__,
    )
    return JSONResponse(status_code=503, content=storage.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Return pydantic errors without non-serializable ctx values."""
    errors = []
    for error in exc.errors():
        item = {k: v for k, v in error.items() if k != "ctx"}
        if "ctx" in error:
            item["ctx"] = {k: str(v) for k, v in error["ctx"].items()}
        errors.append(item)
    return errors


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: MessageStoreException (and
    subclasses), SQLAlchemy connection errors, RequestValidationError,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(MessageStoreException, _message_store_exception_handler)
    app.add_exception_handler(OperationalError, _storage_error_handler)
    app.add_exception_handler(InterfaceError, _storage_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
