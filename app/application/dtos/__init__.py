"""Application DTOs (no ORM dependency)."""

from app.application.dtos.audit import (
    AuditEntryCreate,
    AuditEntryResult,
    AuditFilters,
    AuditPage,
)
from app.application.dtos.import_export import (
    ExportDocument,
    ImportCommitResult,
    ImportItem,
    ImportPreviewResult,
)
from app.application.dtos.message_key import (
    CreateMessageKeyCommand,
    CreateVersionCommand,
    MessageKeyCreate,
    MessageKeyResult,
    MessageKeyWithVersion,
    UpdateMessageKeyCommand,
    VersionResult,
    VersionSummary,
    VersionToPersist,
)
from app.application.dtos.runtime import PublishedMessage

__all__ = [
    "AuditEntryCreate",
    "AuditEntryResult",
    "AuditFilters",
    "AuditPage",
    "CreateMessageKeyCommand",
    "CreateVersionCommand",
    "ExportDocument",
    "ImportCommitResult",
    "ImportItem",
    "ImportPreviewResult",
    "MessageKeyCreate",
    "MessageKeyResult",
    "MessageKeyWithVersion",
    "PublishedMessage",
    "UpdateMessageKeyCommand",
    "VersionResult",
    "VersionSummary",
    "VersionToPersist",
]
