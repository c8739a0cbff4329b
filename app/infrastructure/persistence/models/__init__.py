"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.message_key import (
    MessageKey,
    MessageKeyVersion,
    MessageLanguageContent,
)
from app.infrastructure.persistence.models.message_key_audit import MessageKeyAudit
from app.infrastructure.persistence.models.mixins import (
    CreatedMixin,
    CuidMixin,
    UpdatedMixin,
)

__all__ = [
    "CreatedMixin",
    "CuidMixin",
    "MessageKey",
    "MessageKeyAudit",
    "MessageKeyVersion",
    "MessageLanguageContent",
    "UpdatedMixin",
]
