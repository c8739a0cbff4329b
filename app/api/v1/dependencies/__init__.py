"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() targets for DB sessions and application use
cases. Tests override these via app.dependency_overrides.
"""

from app.api.v1.dependencies.db import ReadSession, WriteSession
from app.api.v1.dependencies.message_key import (
    get_audit_history_use_case,
    get_export_use_case,
    get_import_preview_service,
    get_import_service,
    get_message_key_service,
    get_message_key_service_for_write,
    get_version_service,
)
from app.api.v1.dependencies.runtime import (
    get_runtime_cache,
    get_runtime_message_service,
)

__all__ = [
    "ReadSession",
    "WriteSession",
    "get_audit_history_use_case",
    "get_export_use_case",
    "get_import_preview_service",
    "get_import_service",
    "get_message_key_service",
    "get_message_key_service_for_write",
    "get_runtime_cache",
    "get_runtime_message_service",
    "get_version_service",
]
