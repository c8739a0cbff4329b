"""DTOs for message import (preview, commit) and export."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ImportItem:
    """One (message_key, language) tuple of an import batch."""

    message_key: str
    language: str
    content: str
    type_settings: dict[str, Any] | None = None
    message_type_id: int | None = None
    category_id: int | None = None
    display_name: str | None = None


@dataclass(frozen=True)
class ImportIssue:
    """Structural error or warning attached to a batch item by index."""

    index: int
    field: str
    message: str
    code: str


@dataclass(frozen=True)
class ImportConflict:
    """A tuple whose content differs from current while overwrite is off."""

    message_key: str
    language: str
    current: str | None
    imported: str | None
    suggested_action: str


@dataclass(frozen=True)
class ClassifiedItem:
    """Import tuple with its planned action (create, update or skip)."""

    index: int
    item: ImportItem
    action: str
    key_exists: bool
    is_conflict: bool = False


@dataclass
class ImportPreviewResult:
    """Outcome of preview: counts, conflicts and validation findings. Pure read."""

    is_valid: bool
    will_create: int
    will_update: int
    will_skip: int
    conflicts: list[ImportConflict] = field(default_factory=list)
    errors: list[ImportIssue] = field(default_factory=list)
    warnings: list[ImportIssue] = field(default_factory=list)


@dataclass(frozen=True)
class ImportItemResult:
    """Per-tuple outcome of a commit."""

    message_key: str
    language: str
    status: str
    version: int | None = None
    error: str | None = None


@dataclass
class ImportCommitResult:
    """Outcome of commit; success is False when any tuple failed."""

    success: bool
    created: int
    updated: int
    skipped: int
    failed: int
    items: list[ImportItemResult]
    completed_at: datetime


@dataclass(frozen=True)
class ExportLanguage:
    """Language content of an exported version."""

    content: str
    type_settings: dict[str, Any] | None


@dataclass(frozen=True)
class ExportVersion:
    version: int
    version_name: str | None
    is_published: bool
    date_created: datetime
    created_by: str | None
    languages: dict[str, ExportLanguage]


@dataclass(frozen=True)
class ExportMessageKey:
    message_key: str
    message_type_id: int
    category_id: int
    display_name: str | None
    description: str | None
    published_version: int | None
    latest_version: int
    versions: list[ExportVersion]


@dataclass(frozen=True)
class ExportSummary:
    total_keys: int
    total_versions: int
    total_languages: int
    languages: list[str]


@dataclass(frozen=True)
class ExportDocument:
    """Export of a store: keys with versions and per-language content."""

    export_version: str
    exported_at: datetime
    message_store_id: int
    include_versions: str
    message_keys: list[ExportMessageKey]
    summary: ExportSummary
