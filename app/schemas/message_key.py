"""Message key, version and publish API schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field

from app.application.dtos.message_key import (
    MessageKeyWithVersion,
    VersionResult,
)
from app.core.constants import (
    ACTION_REASON_MAX_LENGTH,
    ACTOR_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    DISPLAY_NAME_MAX_LENGTH,
    VERSION_NAME_MAX_LENGTH,
)
from app.domain.entities.content_block import ContentBlock
from app.schemas.common import ApiModel


class LanguageContent(ApiModel):
    """Content of one language in a version (request and response)."""

    language: str = Field(..., min_length=1, max_length=10)
    content: str
    type_settings: dict[str, Any] = Field(default_factory=dict)

    def to_block(self) -> ContentBlock:
        return ContentBlock(
            language=self.language,
            content=self.content,
            type_settings=dict(self.type_settings),
        )


class MessageKeyCreateRequest(ApiModel):
    """Request body for creating a key with its version 1."""

    message_key: str = Field(..., min_length=1, max_length=64)
    message_type_id: int = Field(..., ge=1)
    category_id: int = Field(..., ge=1)
    languages: list[LanguageContent] = Field(..., min_length=1)
    display_name: str | None = Field(default=None, max_length=DISPLAY_NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    version_name: str | None = Field(default=None, max_length=VERSION_NAME_MAX_LENGTH)
    created_by: str | None = Field(default=None, max_length=ACTOR_MAX_LENGTH)


class MessageKeyUpdateRequest(ApiModel):
    """Request body for PATCH (metadata only)."""

    display_name: str | None = Field(default=None, max_length=DISPLAY_NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    updated_by: str | None = Field(default=None, max_length=ACTOR_MAX_LENGTH)


class VersionCreateRequest(ApiModel):
    """Request body for creating a new version from a base plus overrides."""

    language_updates: list[LanguageContent] = Field(..., min_length=1)
    base_version: int | None = Field(default=None, ge=1)
    version_name: str | None = Field(default=None, max_length=VERSION_NAME_MAX_LENGTH)
    created_by: str | None = Field(default=None, max_length=ACTOR_MAX_LENGTH)


class PublishRequest(ApiModel):
    """Request body for publishing a version."""

    version: int = Field(..., ge=1)
    published_by: str | None = Field(default=None, max_length=ACTOR_MAX_LENGTH)
    reason: str | None = Field(default=None, max_length=ACTION_REASON_MAX_LENGTH)


class RollbackRequest(ApiModel):
    """Request body for rolling back to an earlier version."""

    version: int = Field(..., ge=1)
    rolled_back_by: str | None = Field(default=None, max_length=ACTOR_MAX_LENGTH)
    reason: str | None = Field(default=None, max_length=ACTION_REASON_MAX_LENGTH)


class MessageKeyResponse(ApiModel):
    """Message key with its version pointers."""

    id: int
    message_store_id: int
    message_key: str
    message_type_id: int
    category_id: int
    latest_version: int
    published_version: int | None
    languages: list[str]
    display_name: str | None
    description: str | None
    date_created: datetime
    created_by: str | None
    date_updated: datetime
    updated_by: str | None


class VersionSummaryResponse(ApiModel):
    """Version list item (no content)."""

    version: int
    version_name: str | None
    is_published: bool
    date_created: datetime
    created_by: str | None
    languages: list[str]


class VersionResponse(ApiModel):
    """One version with its full language set."""

    id: str
    message_key_id: int
    version: int
    version_name: str | None
    is_published: bool
    date_created: datetime
    created_by: str | None
    contents: list[LanguageContent]

    @classmethod
    def from_result(cls, version: VersionResult) -> "VersionResponse":
        return cls(
            id=version.id,
            message_key_id=version.message_key_id,
            version=version.version,
            version_name=version.version_name,
            is_published=version.is_published,
            date_created=version.date_created,
            created_by=version.created_by,
            contents=[
                LanguageContent(
                    language=b.language,
                    content=b.content,
                    type_settings=b.type_settings or {},
                )
                for b in version.blocks
            ],
        )


class MessageKeyVersionResponse(ApiModel):
    """Response of create and createVersion: the key after the write and the new version."""

    key: MessageKeyResponse
    version: VersionResponse

    @classmethod
    def from_result(cls, result: MessageKeyWithVersion) -> "MessageKeyVersionResponse":
        return cls(
            key=MessageKeyResponse.model_validate(result.key),
            version=VersionResponse.from_result(result.version),
        )
