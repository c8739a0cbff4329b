"""DTOs for message keys and their versions (no dependency on ORM or presentation schemas)."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.entities.content_block import ContentBlock


@dataclass(frozen=True)
class MessageKeyCreate:
    """Input for persisting a new message key row (write-model)."""

    message_store_id: int
    message_key: str
    message_type_id: int
    category_id: int
    display_name: str | None = None
    description: str | None = None
    created_by: str | None = None


@dataclass(frozen=True)
class MessageKeyResult:
    """Message key read-model.

    languages is the union of languages over all versions of the key.
    """

    id: int
    message_store_id: int
    message_key: str
    message_type_id: int
    category_id: int
    latest_version: int
    published_version: int | None
    languages: tuple[str, ...]
    display_name: str | None
    description: str | None
    date_created: datetime
    created_by: str | None
    date_updated: datetime
    updated_by: str | None


@dataclass(frozen=True)
class VersionToPersist:
    """Immutable version ready to insert (number already assigned)."""

    version: int
    version_name: str
    blocks: tuple[ContentBlock, ...]
    created_by: str | None = None


@dataclass(frozen=True)
class VersionResult:
    """One version with its full language set; is_published is derived from the key's pointer."""

    id: str
    message_key_id: int
    version: int
    version_name: str | None
    blocks: tuple[ContentBlock, ...]
    is_published: bool
    date_created: datetime
    created_by: str | None

    @property
    def languages(self) -> tuple[str, ...]:
        return tuple(b.language for b in self.blocks)

    def block_for(self, language: str) -> ContentBlock | None:
        """Return the content block for language, or None."""
        for block in self.blocks:
            if block.language == language:
                return block
        return None


@dataclass(frozen=True)
class VersionSummary:
    """Row of listVersions (no content)."""

    version: int
    version_name: str | None
    is_published: bool
    date_created: datetime
    created_by: str | None
    languages: tuple[str, ...]


@dataclass(frozen=True)
class CreateMessageKeyCommand:
    """Input for the create use case: key metadata plus the version 1 language set."""

    message_store_id: int
    message_key: str
    message_type_id: int
    category_id: int
    languages: list[ContentBlock] = field(default_factory=list)
    display_name: str | None = None
    description: str | None = None
    version_name: str | None = None
    created_by: str | None = None


@dataclass(frozen=True)
class CreateVersionCommand:
    """Input for createVersion; base_version None means published, else latest."""

    message_store_id: int
    message_key: str
    language_updates: list[ContentBlock] = field(default_factory=list)
    base_version: int | None = None
    version_name: str | None = None
    created_by: str | None = None


@dataclass(frozen=True)
class UpdateMessageKeyCommand:
    """Metadata-only update of a message key; None leaves a field unchanged."""

    message_store_id: int
    message_key: str
    display_name: str | None = None
    description: str | None = None
    updated_by: str | None = None


@dataclass(frozen=True)
class MessageKeyWithVersion:
    """Result of create / createVersion: the key after the write and the version written."""

    key: MessageKeyResult
    version: VersionResult
