"""DTOs for the runtime (published-only) read path."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PublishedMessage:
    """Published content of one key in one language."""

    message_store_id: int
    message_key: str
    language: str
    version: int
    content: str
    type_settings: dict[str, Any] = field(default_factory=dict)

    def to_cache(self) -> dict[str, Any]:
        return {
            "message_store_id": self.message_store_id,
            "message_key": self.message_key,
            "language": self.language,
            "version": self.version,
            "content": self.content,
            "type_settings": self.type_settings,
        }

    @classmethod
    def from_cache(cls, data: dict[str, Any]) -> "PublishedMessage":
        return cls(
            message_store_id=int(data["message_store_id"]),
            message_key=data["message_key"],
            language=data["language"],
            version=int(data["version"]),
            content=data["content"],
            type_settings=data.get("type_settings") or {},
        )
