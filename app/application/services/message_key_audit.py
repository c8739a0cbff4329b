"""Audit trail writer for message key mutations.

Every mutation of a key appends exactly one record through this service,
using the caller's session so the record commits or rolls back with the
mutation it describes.
"""

from __future__ import annotations

import re
from typing import Any

from app.application.dtos.audit import AuditEntryCreate, AuditEntryResult
from app.application.dtos.message_key import MessageKeyResult, VersionResult
from app.application.interfaces.repositories import IMessageKeyAuditRepository
from app.core.constants import (
    ACTION_REASON_MAX_LENGTH,
    ACTOR_MAX_LENGTH,
    ACTOR_PATTERN,
    DEFAULT_ACTOR,
)
from app.domain.entities.message_key import PublishDecision
from app.domain.enums import MessageKeyAuditAction
from app.domain.exceptions import ValidationException
from app.shared.context import get_current_actor_id

_ACTOR_RE = re.compile(ACTOR_PATTERN)


def resolve_actor(explicit: str | None, fallback: str = DEFAULT_ACTOR) -> str:
    """Return explicit actor, else the request's actor header, else fallback.

    Raises:
        ValidationException: If the resolved actor is too long or contains
            characters other than letters, digits and ._@+-.
    """
    actor = (explicit or "").strip() or get_current_actor_id() or fallback
    if len(actor) > ACTOR_MAX_LENGTH:
        raise ValidationException(
            f"Actor must not exceed {ACTOR_MAX_LENGTH} characters", field="actionBy"
        )
    if not _ACTOR_RE.fullmatch(actor):
        raise ValidationException(
            "Actor may only contain letters, digits and ._@+-", field="actionBy"
        )
    return actor


def validate_reason(reason: str | None) -> str | None:
    if reason is None:
        return None
    reason = reason.strip()
    if len(reason) > ACTION_REASON_MAX_LENGTH:
        raise ValidationException(
            f"Reason must not exceed {ACTION_REASON_MAX_LENGTH} characters",
            field="reason",
        )
    return reason or None


class MessageKeyAuditService:
    """Builds audit payloads and appends them via the audit repository."""

    def __init__(self, audit_repo: IMessageKeyAuditRepository) -> None:
        self.audit_repo = audit_repo

    async def _append(
        self,
        key: MessageKeyResult,
        action: MessageKeyAuditAction,
        actor: str,
        data: dict[str, Any],
        version: VersionResult | None = None,
        reason: str | None = None,
    ) -> AuditEntryResult:
        return await self.audit_repo.record(
            AuditEntryCreate(
                message_key_id=key.id,
                action=action.value,
                action_by=actor,
                action_reason=reason,
                audit_data=data,
                message_key_version_id=version.id if version else None,
            )
        )

    async def record_created(
        self,
        key: MessageKeyResult,
        version: VersionResult,
        actor: str,
        action: MessageKeyAuditAction = MessageKeyAuditAction.CREATED,
    ) -> AuditEntryResult:
        """Record creation of a key with its version 1."""
        return await self._append(
            key,
            action,
            actor,
            {"version": version.version, "languages": list(version.languages)},
            version=version,
        )

    async def record_new_version(
        self,
        key: MessageKeyResult,
        version: VersionResult,
        base_version: int,
        updated_languages: list[str],
        added_languages: list[str],
        actor: str,
        action: MessageKeyAuditAction,
    ) -> AuditEntryResult:
        """Record an edit (edited, language_added or imported) that produced `version`."""
        return await self._append(
            key,
            action,
            actor,
            {
                "baseVersion": base_version,
                "newVersion": version.version,
                "updatedLanguages": updated_languages,
                "addedLanguages": added_languages,
            },
            version=version,
        )

    async def record_publish(
        self,
        key: MessageKeyResult,
        decision: PublishDecision,
        version: VersionResult,
        actor: str,
        reason: str | None = None,
    ) -> AuditEntryResult:
        """Record a published/rollback transition of the key's pointer."""
        if decision.action is None:
            raise ValueError("No-op publish decisions are not audited")
        return await self._append(
            key,
            decision.action,
            actor,
            {
                "before": {"publishedVersion": decision.previous_version},
                "after": {"publishedVersion": decision.target_version},
                "affectedLanguages": list(version.languages),
            },
            version=version,
            reason=reason,
        )
