"""Structural validation of import batches.

Reports problems per item index so the caller can show them next to the
offending row. Items with errors are excluded from classification.
"""

from __future__ import annotations

from collections.abc import Sequence

from app.application.dtos.import_export import ImportIssue, ImportItem
from app.domain.value_objects.core import LanguageCode, MessageKeyName

REQUIRED = "REQUIRED"
INVALID_FORMAT = "INVALID_FORMAT"
DUPLICATE_ITEM = "DUPLICATE_ITEM"
MISSING_CLASSIFICATION = "MISSING_CLASSIFICATION"


class ImportBatchValidator:
    """Checks required fields, key/language format and in-batch duplicates."""

    def validate_item(self, index: int, item: ImportItem) -> list[ImportIssue]:
        """Return the structural errors of one item (empty when valid)."""
        errors: list[ImportIssue] = []
        if not item.message_key or not item.message_key.strip():
            errors.append(
                ImportIssue(index, "messageKey", "messageKey is required", REQUIRED)
            )
        else:
            try:
                MessageKeyName(item.message_key)
            except ValueError as e:
                errors.append(ImportIssue(index, "messageKey", str(e), INVALID_FORMAT))
        if not item.language or not item.language.strip():
            errors.append(ImportIssue(index, "language", "language is required", REQUIRED))
        else:
            try:
                LanguageCode(item.language)
            except ValueError as e:
                errors.append(ImportIssue(index, "language", str(e), INVALID_FORMAT))
        if not item.content or not item.content.strip():
            errors.append(ImportIssue(index, "content", "content is required", REQUIRED))
        return errors

    def validate(
        self, batch: Sequence[ImportItem]
    ) -> tuple[list[int], list[ImportIssue]]:
        """Validate a whole batch.

        Returns:
            (indexes of structurally valid items, errors). The second and
            later occurrences of a (messageKey, language) pair are errors.
        """
        valid: list[int] = []
        errors: list[ImportIssue] = []
        seen: dict[tuple[str, str], int] = {}
        for index, item in enumerate(batch):
            item_errors = self.validate_item(index, item)
            if item_errors:
                errors.extend(item_errors)
                continue
            pair = (item.message_key, item.language)
            if pair in seen:
                errors.append(
                    ImportIssue(
                        index,
                        "language",
                        f"{item.message_key}/{item.language} already appears at index {seen[pair]}",
                        DUPLICATE_ITEM,
                    )
                )
                continue
            seen[pair] = index
            valid.append(index)
        return valid, errors
