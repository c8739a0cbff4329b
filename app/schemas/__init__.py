"""Pydantic request/response schemas for the API."""

from app.schemas.audit import AuditEntryResponse, AuditPageResponse
from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.import_export import (
    ExportResponse,
    ImportCommitResponse,
    ImportPreviewResponse,
    ImportRequest,
)
from app.schemas.message_key import (
    MessageKeyCreateRequest,
    MessageKeyResponse,
    MessageKeyUpdateRequest,
    MessageKeyVersionResponse,
    PublishRequest,
    RollbackRequest,
    VersionCreateRequest,
    VersionResponse,
    VersionSummaryResponse,
)
from app.schemas.runtime import PublishedMessageResponse

__all__ = [
    "AuditEntryResponse",
    "AuditPageResponse",
    "ExportResponse",
    "HealthResponse",
    "ImportCommitResponse",
    "ImportPreviewResponse",
    "ImportRequest",
    "MessageKeyCreateRequest",
    "MessageKeyResponse",
    "MessageKeyUpdateRequest",
    "MessageKeyVersionResponse",
    "PublishRequest",
    "PublishedMessageResponse",
    "ReadinessResponse",
    "RollbackRequest",
    "VersionCreateRequest",
    "VersionResponse",
    "VersionSummaryResponse",
]
