"""Domain entities: message key aggregate and content blocks."""

from app.domain.entities.content_block import (
    ContentBlock,
    MergedLanguages,
    merge_language_updates,
    validate_language_set,
)
from app.domain.entities.message_key import MessageKeyEntity, PublishDecision

__all__ = [
    "ContentBlock",
    "MergedLanguages",
    "MessageKeyEntity",
    "PublishDecision",
    "merge_language_updates",
    "validate_language_set",
]
