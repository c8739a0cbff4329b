"""Audit history query for one message key."""

from __future__ import annotations

from app.application.dtos.audit import AuditFilters, AuditPage
from app.application.interfaces.repositories import (
    IMessageKeyAuditRepository,
    IMessageKeyRepository,
)
from app.domain.enums import MessageKeyAuditAction
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils.datetime import ensure_utc


class GetAuditHistoryUseCase:
    """Paginated, filtered audit trail of a key, newest first. Pure read."""

    def __init__(
        self,
        message_key_repo: IMessageKeyRepository,
        audit_repo: IMessageKeyAuditRepository,
        default_page_size: int = 50,
        max_page_size: int = 100,
    ) -> None:
        self.message_key_repo = message_key_repo
        self.audit_repo = audit_repo
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def execute(
        self,
        message_store_id: int,
        message_key: str,
        filters: AuditFilters | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> AuditPage:
        """Return one page of audit records matching all given filters.

        Args:
            message_store_id: Store of the key.
            message_key: Key name.
            filters: Optional action / actor / date range (AND-ed).
            page: 1-based page number.
            page_size: Records per page (default 50, max 100).

        Raises:
            ResourceNotFoundException: If the key does not exist.
            ValidationException: If paging or filters are invalid.
        """
        filters = filters or AuditFilters()
        page_size = self.default_page_size if page_size is None else page_size
        if page < 1:
            raise ValidationException("page must be >= 1", field="page")
        if not 1 <= page_size <= self.max_page_size:
            raise ValidationException(
                f"pageSize must be between 1 and {self.max_page_size}", field="pageSize"
            )
        if filters.action is not None and filters.action not in MessageKeyAuditAction.values():
            raise ValidationException(
                f"Unknown audit action {filters.action!r}", field="action"
            )
        filters = AuditFilters(
            action=filters.action,
            action_by=filters.action_by,
            start_date=ensure_utc(filters.start_date),
            end_date=ensure_utc(filters.end_date),
        )
        if (
            filters.start_date
            and filters.end_date
            and filters.start_date > filters.end_date
        ):
            raise ValidationException(
                "startDate must not be after endDate", field="startDate"
            )

        key = await self.message_key_repo.get_by_key(message_store_id, message_key)
        if key is None:
            raise ResourceNotFoundException(
                "message_key", f"{message_store_id}/{message_key}"
            )
        items, total = await self.audit_repo.query(
            key.id, filters, skip=(page - 1) * page_size, limit=page_size
        )
        return AuditPage(total=total, page=page, page_size=page_size, items=items)
