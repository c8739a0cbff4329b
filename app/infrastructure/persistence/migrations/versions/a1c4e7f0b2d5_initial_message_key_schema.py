"""initial_message_key_schema

Revision ID: a1c4e7f0b2d5
Revises:
Create Date: 2026-10-18

Message keys, their immutable numbered versions, per-language content and
the append-only audit trail. The audit table keeps no FK to message_key so
history survives key removal.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "a1c4e7f0b2d5"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create message_key, message_key_version, message_language_content, message_key_audit."""
    op.create_table(
        "message_key",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("message_store_id", sa.Integer(), nullable=False),
        sa.Column("message_key", sa.String(length=64), nullable=False),
        sa.Column("message_type_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("latest_version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("published_version", sa.Integer(), nullable=True),
        sa.Column("display_name", sa.String(length=128), nullable=True),
        sa.Column("description", sa.String(length=512), nullable=True),
        sa.Column("date_created", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("created_by", sa.String(length=100), nullable=True),
        sa.Column("date_updated", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_by", sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("message_store_id", "message_key", name="uq_message_key_store_key"),
        sa.CheckConstraint("latest_version >= 0", name="ck_message_key_latest_version"),
        sa.CheckConstraint(
            "published_version IS NULL OR (published_version >= 1 AND published_version <= latest_version)",
            name="ck_message_key_published_version",
        ),
    )
    op.create_index(
        "ix_message_key_store_published",
        "message_key",
        ["message_store_id"],
        postgresql_where=sa.text("published_version IS NOT NULL"),
    )

    op.create_table(
        "message_key_version",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("message_key_id", sa.Integer(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("version_name", sa.String(length=100), nullable=True),
        sa.Column("date_created", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("created_by", sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["message_key_id"], ["message_key.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("message_key_id", "version", name="uq_message_key_version_number"),
        sa.CheckConstraint("version >= 1", name="ck_message_key_version_positive"),
    )
    op.create_index(
        "ix_message_key_version_message_key_id", "message_key_version", ["message_key_id"]
    )

    op.create_table(
        "message_language_content",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("message_key_version_id", sa.String(), nullable=False),
        sa.Column("language", sa.String(length=10), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("type_settings", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("date_created", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("created_by", sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["message_key_version_id"], ["message_key_version.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint(
            "message_key_version_id", "language", name="uq_message_language_content_lang"
        ),
        sa.CheckConstraint(
            "length(btrim(content)) > 0", name="ck_message_language_content_not_blank"
        ),
    )
    op.create_index(
        "ix_message_language_content_language", "message_language_content", ["language"]
    )

    op.create_table(
        "message_key_audit",
        sa.Column("audit_id", sa.String(), nullable=False),
        sa.Column("message_key_id", sa.Integer(), nullable=False),
        sa.Column("message_key_version_id", sa.String(), nullable=True),
        sa.Column("action", sa.String(length=20), nullable=False),
        sa.Column("action_by", sa.String(length=100), nullable=False),
        sa.Column("action_reason", sa.String(length=500), nullable=True),
        sa.Column("audit_data", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column(
            "date_action",
            sa.DateTime(timezone=True),
            server_default=sa.text("clock_timestamp()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("audit_id"),
    )
    op.create_index("ix_message_key_audit_action", "message_key_audit", ["action"])
    op.create_index(
        "ix_message_key_audit_key_date", "message_key_audit", ["message_key_id", "date_action"]
    )


def downgrade() -> None:
    """Drop message key tables and indexes."""
    op.drop_index("ix_message_key_audit_key_date", table_name="message_key_audit")
    op.drop_index("ix_message_key_audit_action", table_name="message_key_audit")
    op.drop_table("message_key_audit")
    op.drop_index(
        "ix_message_language_content_language", table_name="message_language_content"
    )
    op.drop_table("message_language_content")
    op.drop_index(
        "ix_message_key_version_message_key_id", table_name="message_key_version"
    )
    op.drop_table("message_key_version")
    op.drop_index("ix_message_key_store_published", table_name="message_key")
    op.drop_table("message_key")
