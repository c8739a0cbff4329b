"""Domain value objects and shared value types."""

from app.domain.value_objects.core import LanguageCode, MessageKeyName

__all__ = [
    "LanguageCode",
    "MessageKeyName",
]
