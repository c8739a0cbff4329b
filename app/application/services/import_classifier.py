"""Classification of import tuples against current store state.

Each (messageKey, language) tuple is compared with the key's published
version, or its latest version when nothing is published.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from app.application.dtos.import_export import (
    ClassifiedItem,
    ImportConflict,
    ImportIssue,
    ImportItem,
)
from app.application.dtos.message_key import VersionResult
from app.application.services.import_validator import MISSING_CLASSIFICATION
from app.domain.entities.content_block import ContentBlock
from app.domain.enums import ImportAction


def to_content_block(item: ImportItem) -> ContentBlock:
    return ContentBlock(
        language=item.language,
        content=item.content,
        type_settings=dict(item.type_settings or {}),
    )


@dataclass
class ImportPlan:
    """Classified tuples plus the conflicts and warnings found on the way."""

    items: list[ClassifiedItem] = field(default_factory=list)
    conflicts: list[ImportConflict] = field(default_factory=list)
    warnings: list[ImportIssue] = field(default_factory=list)

    def count(self, action: ImportAction) -> int:
        return sum(1 for c in self.items if c.action == action.value)

    def by_key(self) -> dict[str, list[ClassifiedItem]]:
        """Group classified items per message key, keeping batch order."""
        grouped: dict[str, list[ClassifiedItem]] = {}
        for classified in self.items:
            grouped.setdefault(classified.item.message_key, []).append(classified)
        return grouped


def classify_item(
    index: int,
    item: ImportItem,
    current: VersionResult | None,
    key_exists: bool,
    overwrite: bool,
) -> tuple[ClassifiedItem, ImportConflict | None]:
    """Classify one tuple.

    Args:
        index: Position in the batch.
        item: The imported tuple.
        current: Comparison version of the key (None when the key is new).
        key_exists: Whether the key exists in the store.
        overwrite: Whether differing content may replace current content.
    """
    block = current.block_for(item.language) if current is not None else None
    if not key_exists or block is None:
        return ClassifiedItem(index, item, ImportAction.CREATE.value, key_exists), None
    if block.same_content_as(to_content_block(item)):
        return ClassifiedItem(index, item, ImportAction.SKIP.value, key_exists), None
    if overwrite:
        return ClassifiedItem(index, item, ImportAction.UPDATE.value, key_exists), None
    conflict = ImportConflict(
        message_key=item.message_key,
        language=item.language,
        current=block.content,
        imported=item.content,
        suggested_action=ImportAction.SKIP.value,
    )
    return (
        ClassifiedItem(index, item, ImportAction.SKIP.value, key_exists, is_conflict=True),
        conflict,
    )


def classify_batch(
    batch: Sequence[ImportItem],
    valid_indexes: Sequence[int],
    current_versions: Mapping[str, VersionResult],
    overwrite: bool,
) -> ImportPlan:
    """Classify every structurally valid tuple of the batch.

    Args:
        batch: The import batch.
        valid_indexes: Indexes that passed structural validation.
        current_versions: Comparison version per existing key name.
        overwrite: Whether differing content becomes an update.
    """
    plan = ImportPlan()
    warned: set[str] = set()
    for index in valid_indexes:
        item = batch[index]
        current = current_versions.get(item.message_key)
        classified, conflict = classify_item(
            index, item, current, current is not None, overwrite
        )
        plan.items.append(classified)
        if conflict is not None:
            plan.conflicts.append(conflict)
        if (
            current is None
            and item.message_key not in warned
            and not _has_classification(batch, valid_indexes, item.message_key)
        ):
            warned.add(item.message_key)
            plan.warnings.append(
                ImportIssue(
                    index,
                    "messageTypeId",
                    f"New message key {item.message_key} needs messageTypeId and categoryId",
                    MISSING_CLASSIFICATION,
                )
            )
    return plan


def _has_classification(
    batch: Sequence[ImportItem], valid_indexes: Sequence[int], message_key: str
) -> bool:
    type_ids = [
        batch[i].message_type_id for i in valid_indexes if batch[i].message_key == message_key
    ]
    category_ids = [
        batch[i].category_id for i in valid_indexes if batch[i].message_key == message_key
    ]
    return any(t is not None for t in type_ids) and any(c is not None for c in category_ids)
