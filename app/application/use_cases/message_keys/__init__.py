"""Message key use cases: aggregate, version creation, publish, audit history."""

from app.application.use_cases.message_keys.audit_history import GetAuditHistoryUseCase
from app.application.use_cases.message_keys.message_key_service import MessageKeyService
from app.application.use_cases.message_keys.version_service import VersionService

__all__ = [
    "GetAuditHistoryUseCase",
    "MessageKeyService",
    "VersionService",
]
