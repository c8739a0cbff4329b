"""ContentBlock value entity and the copy-on-write merge of language sets.

A version holds exactly one ContentBlock per language. Edits never mutate
a version; they build a new language set from a base version plus
per-language overrides.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from app.domain.exceptions import ValidationException
from app.domain.value_objects.core import LanguageCode


@dataclass(frozen=True)
class ContentBlock:
    """One language's text and type-specific settings inside a version."""

    language: str
    content: str
    type_settings: dict[str, Any] = field(default_factory=dict)

    def same_content_as(self, other: "ContentBlock") -> bool:
        """Return True if content and type settings are identical (language ignored)."""
        return self.content == other.content and (self.type_settings or {}) == (
            other.type_settings or {}
        )


def validate_language_set(blocks: Sequence[ContentBlock]) -> None:
    """Validate a complete language set for a version.

    Raises:
        ValidationException: If the set is empty, a language code is
            malformed or repeated, or any content is blank.
    """
    if not blocks:
        raise ValidationException(
            "A version must contain at least one language", field="languages"
        )
    seen: set[str] = set()
    for block in blocks:
        _validate_block(block)
        if block.language in seen:
            raise ValidationException(
                f"Language {block.language} appears more than once", field="languages"
            )
        seen.add(block.language)


def _validate_block(block: ContentBlock) -> None:
    try:
        LanguageCode(block.language)
    except ValueError as e:
        raise ValidationException(str(e), field="language") from e
    if not block.content or not block.content.strip():
        raise ValidationException(
            f"Content for language {block.language} must not be blank", field="content"
        )


@dataclass(frozen=True)
class MergedLanguages:
    """Result of applying overrides to a base language set."""

    blocks: tuple[ContentBlock, ...]
    updated_languages: tuple[str, ...]
    added_languages: tuple[str, ...]


def merge_language_updates(
    base: Iterable[ContentBlock], updates: Sequence[ContentBlock]
) -> MergedLanguages:
    """Build the language set of a new version (copy-on-write).

    Every base block is carried over unchanged unless an update supplies
    the same language, in which case the update replaces it as a unit
    (content and type_settings are not merged). Languages only present in
    the updates are appended in update order.

    Raises:
        ValidationException: If updates repeat a language or the result is invalid.
    """
    overrides: dict[str, ContentBlock] = {}
    for update in updates:
        if update.language in overrides:
            raise ValidationException(
                f"Language {update.language} is updated more than once",
                field="languageUpdates",
            )
        overrides[update.language] = update

    merged: list[ContentBlock] = []
    updated: list[str] = []
    base_languages: set[str] = set()
    for block in base:
        base_languages.add(block.language)
        override = overrides.get(block.language)
        if override is None:
            merged.append(block)
        else:
            merged.append(override)
            updated.append(block.language)

    added = [u.language for u in updates if u.language not in base_languages]
    merged.extend(overrides[lang] for lang in added)

    validate_language_set(merged)
    return MergedLanguages(
        blocks=tuple(merged),
        updated_languages=tuple(updated),
        added_languages=tuple(added),
    )
