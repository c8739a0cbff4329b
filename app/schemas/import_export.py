"""Import (preview, commit) and export API schemas.

Import items are deliberately loose: structural problems are reported per
item by the preview/commit result instead of rejecting the whole request.
"""

from datetime import datetime
from typing import Any

from pydantic import Field

from app.application.dtos.import_export import ImportItem
from app.core.constants import ACTOR_MAX_LENGTH
from app.schemas.common import ApiModel


class ImportItemRequest(ApiModel):
    """One (messageKey, language) tuple of an import batch."""

    message_key: str = ""
    language: str = ""
    content: str = ""
    type_settings: dict[str, Any] | None = None
    message_type_id: int | None = None
    category_id: int | None = None
    display_name: str | None = None

    def to_item(self) -> ImportItem:
        return ImportItem(
            message_key=self.message_key,
            language=self.language,
            content=self.content,
            type_settings=self.type_settings,
            message_type_id=self.message_type_id,
            category_id=self.category_id,
            display_name=self.display_name,
        )


class ImportRequest(ApiModel):
    """Request body for import preview and commit."""

    items: list[ImportItemRequest] = Field(..., min_length=1)
    overwrite: bool = False
    imported_by: str | None = Field(default=None, max_length=ACTOR_MAX_LENGTH)

    def to_items(self) -> list[ImportItem]:
        return [item.to_item() for item in self.items]


class ImportIssueResponse(ApiModel):
    index: int
    field: str
    message: str
    code: str


class ImportConflictResponse(ApiModel):
    message_key: str
    language: str
    current: str | None
    imported: str | None
    suggested_action: str


class ImportPreviewResponse(ApiModel):
    """Classification of a batch; nothing is written."""

    is_valid: bool
    will_create: int
    will_update: int
    will_skip: int
    conflicts: list[ImportConflictResponse]
    errors: list[ImportIssueResponse]
    warnings: list[ImportIssueResponse]


class ImportItemResultResponse(ApiModel):
    message_key: str
    language: str
    status: str
    version: int | None = None
    error: str | None = None


class ImportCommitResponse(ApiModel):
    """Per-tuple outcome of an import."""

    success: bool
    created: int
    updated: int
    skipped: int
    failed: int
    items: list[ImportItemResultResponse]
    completed_at: datetime


class ExportLanguageResponse(ApiModel):
    content: str
    type_settings: dict[str, Any] | None


class ExportVersionResponse(ApiModel):
    version: int
    version_name: str | None
    is_published: bool
    date_created: datetime
    created_by: str | None
    languages: dict[str, ExportLanguageResponse]


class ExportMessageKeyResponse(ApiModel):
    message_key: str
    message_type_id: int
    category_id: int
    display_name: str | None
    description: str | None
    published_version: int | None
    latest_version: int
    versions: list[ExportVersionResponse]


class ExportSummaryResponse(ApiModel):
    total_keys: int
    total_versions: int
    total_languages: int
    languages: list[str]


class ExportResponse(ApiModel):
    """Export document of a message store."""

    export_version: str
    exported_at: datetime
    message_store_id: int
    include_versions: str
    message_keys: list[ExportMessageKeyResponse]
    summary: ExportSummaryResponse
