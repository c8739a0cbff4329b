"""Message key audit repository. Append-only; implements IMessageKeyAuditRepository."""

from __future__ import annotations

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.audit import AuditEntryCreate, AuditEntryResult, AuditFilters
from app.infrastructure.persistence.models.message_key_audit import MessageKeyAudit
from app.shared.utils.generators import generate_cuid


def _orm_to_result(row: MessageKeyAudit) -> AuditEntryResult:
    """Map ORM to application DTO."""
    return AuditEntryResult(
        audit_id=row.audit_id,
        message_key_id=row.message_key_id,
        action=row.action,
        action_by=row.action_by,
        action_reason=row.action_reason,
        audit_data=row.audit_data or {},
        message_key_version_id=row.message_key_version_id,
        date_action=row.date_action,
    )


class MessageKeyAuditRepository:
    """Append-only audit repository. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def record(self, data: AuditEntryCreate) -> AuditEntryResult:
        """Append one record in the current transaction; return it."""
        row = MessageKeyAudit(
            audit_id=generate_cuid(),
            message_key_id=data.message_key_id,
            message_key_version_id=data.message_key_version_id,
            action=data.action,
            action_by=data.action_by,
            action_reason=data.action_reason,
            audit_data=data.audit_data,
        )
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return _orm_to_result(row)

    async def query(
        self,
        message_key_id: int,
        filters: AuditFilters,
        skip: int,
        limit: int,
    ) -> tuple[list[AuditEntryResult], int]:
        """Return (records newest first, total) for a key; filters are AND-ed."""
        conditions = [MessageKeyAudit.message_key_id == message_key_id]
        if filters.action is not None:
            conditions.append(MessageKeyAudit.action == filters.action)
        if filters.action_by is not None:
            conditions.append(MessageKeyAudit.action_by == filters.action_by)
        if filters.start_date is not None:
            conditions.append(MessageKeyAudit.date_action >= filters.start_date)
        if filters.end_date is not None:
            conditions.append(MessageKeyAudit.date_action <= filters.end_date)

        total = await self.db.scalar(
            select(func.count()).select_from(MessageKeyAudit).where(and_(*conditions))
        )
        result = await self.db.execute(
            select(MessageKeyAudit)
            .where(and_(*conditions))
            .order_by(MessageKeyAudit.date_action.desc(), MessageKeyAudit.audit_id.desc())
            .offset(skip)
            .limit(limit)
        )
        return [_orm_to_result(r) for r in result.scalars().all()], int(total or 0)
