"""Message key, version, audit and import/export dependencies (composition root).

All use cases are built from infrastructure implementations here; routes
depend only on these dependencies, not on infrastructure directly.
"""

from __future__ import annotations

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.services import IRuntimeMessageCache
from app.application.services.message_key_audit import MessageKeyAuditService
from app.application.use_cases.import_export import (
    ExportMessagesUseCase,
    ImportMessagesService,
)
from app.application.use_cases.message_keys import (
    GetAuditHistoryUseCase,
    MessageKeyService,
    VersionService,
)
from app.core.config import get_settings
from app.infrastructure.persistence.database import SessionPostCommitHooks
from app.infrastructure.persistence.repositories import (
    MessageKeyAuditRepository,
    MessageKeyRepository,
)

from .db import ReadSession, WriteSession
from .runtime import get_runtime_cache


def _message_key_service(db: AsyncSession) -> MessageKeyService:
    return MessageKeyService(
        MessageKeyRepository(db),
        MessageKeyAuditService(MessageKeyAuditRepository(db)),
    )


def _version_service(
    db: AsyncSession, runtime_cache: IRuntimeMessageCache | None = None
) -> VersionService:
    settings = get_settings()
    return VersionService(
        MessageKeyRepository(db),
        MessageKeyAuditService(MessageKeyAuditRepository(db)),
        runtime_cache=runtime_cache,
        post_commit=SessionPostCommitHooks(db),
        max_attempts=settings.version_create_max_attempts,
        max_versions=settings.max_versions_per_key,
    )


def _import_service(
    db: AsyncSession, runtime_cache: IRuntimeMessageCache | None = None
) -> ImportMessagesService:
    return ImportMessagesService(
        MessageKeyRepository(db),
        _message_key_service(db),
        _version_service(db, runtime_cache),
    )


async def get_message_key_service(db: ReadSession) -> MessageKeyService:
    """MessageKeyService for read routes."""
    return _message_key_service(db)


async def get_message_key_service_for_write(db: WriteSession) -> MessageKeyService:
    """MessageKeyService for create/update (request transaction)."""
    return _message_key_service(db)


async def get_version_service(request: Request, db: WriteSession) -> VersionService:
    """VersionService for createVersion/publish/rollback (request transaction)."""
    return _version_service(db, get_runtime_cache(request))


async def get_audit_history_use_case(db: ReadSession) -> GetAuditHistoryUseCase:
    settings = get_settings()
    return GetAuditHistoryUseCase(
        MessageKeyRepository(db),
        MessageKeyAuditRepository(db),
        default_page_size=settings.audit_default_page_size,
        max_page_size=settings.audit_max_page_size,
    )


async def get_import_preview_service(db: ReadSession) -> ImportMessagesService:
    """ImportMessagesService for preview; nothing is written."""
    return _import_service(db)


async def get_import_service(request: Request, db: WriteSession) -> ImportMessagesService:
    """ImportMessagesService for commit; each key runs in its own savepoint."""
    return _import_service(db, get_runtime_cache(request))


async def get_export_use_case(db: ReadSession) -> ExportMessagesUseCase:
    return ExportMessagesUseCase(MessageKeyRepository(db))
