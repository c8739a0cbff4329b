"""Add triggers enforcing immutability of versions, content and audit.

Revision ID: b7d2f9a3c6e1
Revises: a1c4e7f0b2d5
Create Date: 2026-10-18

Versions and their language content are never updated once written (edits
create a new version). Audit records are never updated or deleted. These
triggers enforce that at the database level in addition to the ORM guards.
Deleting a version cascades from its key and stays allowed.
"""

from typing import Sequence, Union

from alembic import op

revision: str = "b7d2f9a3c6e1"
down_revision: Union[str, Sequence[str], None] = "a1c4e7f0b2d5"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_IMMUTABLE_TABLES = ("message_key_version", "message_language_content")


def _trigger_function(name: str, message: str) -> str:
    """Return SQL for a trigger function that always raises `message`."""
    return f"""
    CREATE OR REPLACE FUNCTION {name}()
    RETURNS TRIGGER
    LANGUAGE plpgsql
    AS $$
    BEGIN
        RAISE EXCEPTION '{message}'
            USING ERRCODE = 'integrity_constraint_violation';
    END;
    $$
    """


def upgrade() -> None:
    op.execute(
        _trigger_function(
            "prevent_message_version_update",
            "message versions are immutable; create a new version instead",
        )
    )
    for table in _IMMUTABLE_TABLES:
        op.execute(
            f"CREATE TRIGGER prevent_{table}_update "
            f"BEFORE UPDATE ON {table} "
            "FOR EACH ROW EXECUTE PROCEDURE prevent_message_version_update()"
        )
    op.execute(
        _trigger_function(
            "prevent_message_key_audit_mutation",
            "message_key_audit rows are append-only and cannot be updated or deleted",
        )
    )
    op.execute(
        "CREATE TRIGGER prevent_message_key_audit_update_delete "
        "BEFORE UPDATE OR DELETE ON message_key_audit "
        "FOR EACH ROW EXECUTE PROCEDURE prevent_message_key_audit_mutation()"
    )


def downgrade() -> None:
    op.execute(
        "DROP TRIGGER IF EXISTS prevent_message_key_audit_update_delete ON message_key_audit"
    )
    op.execute("DROP FUNCTION IF EXISTS prevent_message_key_audit_mutation()")
    for table in _IMMUTABLE_TABLES:
        op.execute(f"DROP TRIGGER IF EXISTS prevent_{table}_update ON {table}")
    op.execute("DROP FUNCTION IF EXISTS prevent_message_version_update()")
