"""Message key audit history API schemas."""

from datetime import datetime
from typing import Any

from app.schemas.common import ApiModel


class AuditEntryResponse(ApiModel):
    """One audit record."""

    audit_id: str
    message_key_id: int
    action: str
    action_by: str
    action_reason: str | None
    audit_data: dict[str, Any]
    message_key_version_id: str | None
    date_action: datetime


class AuditPageResponse(ApiModel):
    """One page of audit history, newest first."""

    total: int
    page: int
    page_size: int
    items: list[AuditEntryResponse]
