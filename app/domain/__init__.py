"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import (
    ContentBlock,
    MessageKeyEntity,
    PublishDecision,
    merge_language_updates,
)
from app.domain.enums import (
    ImportAction,
    ImportItemStatus,
    IncludeVersions,
    MessageKeyAuditAction,
    VersionState,
)
from app.domain.exceptions import (
    MessageKeyAlreadyExistsException,
    MessageStoreException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
    VersionConflictException,
)
from app.domain.value_objects import LanguageCode, MessageKeyName

__all__ = [
    # Entities
    "ContentBlock",
    "MessageKeyEntity",
    "PublishDecision",
    "merge_language_updates",
    # Enums
    "ImportAction",
    "ImportItemStatus",
    "IncludeVersions",
    "MessageKeyAuditAction",
    "VersionState",
    # Exceptions
    "MessageKeyAlreadyExistsException",
    "MessageStoreException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
    "VersionConflictException",
    # Value objects
    "LanguageCode",
    "MessageKeyName",
]
