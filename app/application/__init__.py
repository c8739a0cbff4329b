"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, cache).
"""

from app.application.interfaces import (
    ICacheService,
    IMessageKeyAuditRepository,
    IMessageKeyRepository,
    IRuntimeMessageCache,
)
from app.application.services.message_key_audit import MessageKeyAuditService
from app.application.use_cases import (
    ExportMessagesUseCase,
    GetAuditHistoryUseCase,
    ImportMessagesService,
    MessageKeyService,
    RuntimeMessageService,
    VersionService,
)

__all__ = [
    "ExportMessagesUseCase",
    "GetAuditHistoryUseCase",
    "ICacheService",
    "IMessageKeyAuditRepository",
    "IMessageKeyRepository",
    "IRuntimeMessageCache",
    "ImportMessagesService",
    "MessageKeyAuditService",
    "MessageKeyService",
    "RuntimeMessageService",
    "VersionService",
]
