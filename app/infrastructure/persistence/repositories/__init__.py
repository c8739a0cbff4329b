"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.message_key_audit_repo import (
    MessageKeyAuditRepository,
)
from app.infrastructure.persistence.repositories.message_key_repo import (
    MessageKeyRepository,
)

__all__ = [
    "MessageKeyAuditRepository",
    "MessageKeyRepository",
]
