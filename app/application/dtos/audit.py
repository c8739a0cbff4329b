"""DTOs for the message key audit trail."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuditEntryCreate:
    """Input for appending one audit record. Append-only; no update."""

    message_key_id: int
    action: str
    action_by: str
    audit_data: dict[str, Any] = field(default_factory=dict)
    action_reason: str | None = None
    message_key_version_id: str | None = None


@dataclass(frozen=True)
class AuditEntryResult:
    """Single audit record (read-model)."""

    audit_id: str
    message_key_id: int
    action: str
    action_by: str
    action_reason: str | None
    audit_data: dict[str, Any]
    message_key_version_id: str | None
    date_action: datetime


@dataclass(frozen=True)
class AuditFilters:
    """Conjunctive filters for an audit query. None means no constraint."""

    action: str | None = None
    action_by: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


@dataclass(frozen=True)
class AuditPage:
    """One page of audit history, newest first."""

    total: int
    page: int
    page_size: int
    items: list[AuditEntryResult]
