"""Domain enumerations for the message store.

Enums represent fixed sets of domain values (audit actions, version states).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class MessageKeyAuditAction(_ValuesMixin, str, Enum):
    """Actions recorded in the message key audit trail."""

    CREATED = "created"
    EDITED = "edited"
    PUBLISHED = "published"
    ROLLBACK = "rollback"
    DELETED = "deleted"
    LANGUAGE_ADDED = "language_added"
    IMPORTED = "imported"


class VersionState(_ValuesMixin, str, Enum):
    """Publication state of a version (derived from the key's published pointer)."""

    DRAFT = "draft"
    PUBLISHED = "published"


class ImportAction(_ValuesMixin, str, Enum):
    """Classification of one (message_key, language) import tuple."""

    CREATE = "create"
    UPDATE = "update"
    SKIP = "skip"


class ImportItemStatus(_ValuesMixin, str, Enum):
    """Per-item outcome of an import commit."""

    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


class IncludeVersions(_ValuesMixin, str, Enum):
    """Which versions an export contains."""

    ALL = "all"
    PUBLISHED = "published"
