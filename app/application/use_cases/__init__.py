"""Application use cases: one entry point per workflow."""

from app.application.use_cases.import_export import (
    ExportMessagesUseCase,
    ImportMessagesService,
)
from app.application.use_cases.message_keys import (
    GetAuditHistoryUseCase,
    MessageKeyService,
    VersionService,
)
from app.application.use_cases.runtime import RuntimeMessageService

__all__ = [
    "ExportMessagesUseCase",
    "GetAuditHistoryUseCase",
    "ImportMessagesService",
    "MessageKeyService",
    "RuntimeMessageService",
    "VersionService",
]
