"""Message key audit ORM model. Append-only trail of key lifecycle actions."""

from datetime import datetime
from typing import Any

from sqlalchemy import Connection, DateTime, Index, Integer, String, event, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from app.core.constants import ACTION_REASON_MAX_LENGTH, ACTOR_MAX_LENGTH
from app.infrastructure.persistence.database import Base
from app.shared.utils.generators import generate_cuid


class MessageKeyAudit(Base):
    """Who did what to a message key, and when. No update/delete.

    message_key_id carries no foreign key so the trail outlives the key.
    """

    __tablename__ = "message_key_audit"
    __table_args__ = (
        Index("ix_message_key_audit_key_date", "message_key_id", "date_action"),
    )

    audit_id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    message_key_id: Mapped[int] = mapped_column(Integer, nullable=False)
    message_key_version_id: Mapped[str | None] = mapped_column(String, nullable=True)
    action: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    action_by: Mapped[str] = mapped_column(String(ACTOR_MAX_LENGTH), nullable=False)
    action_reason: Mapped[str | None] = mapped_column(
        String(ACTION_REASON_MAX_LENGTH), nullable=True
    )
    audit_data: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    date_action: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("clock_timestamp()"), nullable=False
    )


@event.listens_for(MessageKeyAudit, "before_update")
def _prevent_audit_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: MessageKeyAudit
) -> None:
    """Audit records are append-only; updates are forbidden."""
    raise ValueError("Message key audit records are immutable and cannot be updated.")


@event.listens_for(MessageKeyAudit, "before_delete")
def _prevent_audit_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: MessageKeyAudit
) -> None:
    """Audit records cannot be deleted."""
    raise ValueError("Message key audit records cannot be deleted.")
