"""Tests for domain entities (MessageKeyEntity, ContentBlock merge) and enums."""

import pytest

from app.domain.entities.content_block import (
    ContentBlock,
    merge_language_updates,
    validate_language_set,
)
from app.domain.entities.message_key import MessageKeyEntity
from app.domain.enums import (
    ImportAction,
    ImportItemStatus,
    MessageKeyAuditAction,
    VersionState,
)
from app.domain.exceptions import ValidationException


def _block(language: str, content: str, **settings) -> ContentBlock:
    return ContentBlock(language=language, content=content, type_settings=settings)


class TestEnums:
    def test_audit_actions(self) -> None:
        assert set(MessageKeyAuditAction.values()) == {
            "created",
            "edited",
            "published",
            "rollback",
            "deleted",
            "language_added",
            "imported",
        }

    def test_version_states_and_import_values(self) -> None:
        assert VersionState.values() == ["draft", "published"]
        assert ImportAction.values() == ["create", "update", "skip"]
        assert ImportItemStatus.FAILED.value == "failed"


class TestMessageKeyEntity:
    """Version pointers, editing base and publish planning."""

    def test_rejects_latest_below_one(self) -> None:
        with pytest.raises(ValidationException):
            MessageKeyEntity(1, "WELCOME", latest_version=0)

    def test_rejects_published_beyond_latest(self) -> None:
        with pytest.raises(ValidationException):
            MessageKeyEntity(1, "WELCOME", latest_version=2, published_version=3)

    def test_state_is_derived_from_pointer(self) -> None:
        key = MessageKeyEntity(1, "WELCOME", latest_version=3, published_version=2)
        assert key.state_of(2) == VersionState.PUBLISHED
        assert key.state_of(1) == VersionState.DRAFT
        assert key.state_of(3) == VersionState.DRAFT

    def test_editing_base_prefers_published(self) -> None:
        assert MessageKeyEntity(1, "K", 3, 2).editing_base() == 2
        assert MessageKeyEntity(1, "K", 3).editing_base() == 3

    def test_next_version_and_limit(self) -> None:
        key = MessageKeyEntity(1, "K", latest_version=4)
        assert key.next_version() == 5
        assert key.next_version(max_versions=5) == 5
        with pytest.raises(ValidationException, match="maximum"):
            key.next_version(max_versions=4)

    def test_with_new_version_must_be_contiguous(self) -> None:
        key = MessageKeyEntity(1, "K", latest_version=1)
        assert key.with_new_version(2).latest_version == 2
        with pytest.raises(ValidationException, match="contiguous"):
            key.with_new_version(3)

    def test_plan_first_publish(self) -> None:
        decision = MessageKeyEntity(1, "K", 2).plan_publish(1)
        assert decision.action == MessageKeyAuditAction.PUBLISHED
        assert decision.previous_version is None
        assert decision.target_version == 1

    def test_plan_forward_and_backward(self) -> None:
        key = MessageKeyEntity(1, "K", latest_version=3, published_version=2)
        assert key.plan_publish(3).action == MessageKeyAuditAction.PUBLISHED
        assert key.plan_publish(1).action == MessageKeyAuditAction.ROLLBACK

    def test_plan_republish_is_noop(self) -> None:
        decision = MessageKeyEntity(1, "K", 3, 2).plan_publish(2, as_rollback=True)
        assert decision.is_noop

    def test_explicit_rollback_label(self) -> None:
        key = MessageKeyEntity(1, "K", latest_version=3, published_version=1)
        assert key.plan_publish(3, as_rollback=True).action == MessageKeyAuditAction.ROLLBACK

    def test_published_returns_copy(self) -> None:
        key = MessageKeyEntity(1, "K", latest_version=2)
        assert key.published(2).published_version == 2
        assert key.published_version is None


class TestLanguageSet:
    def test_empty_set_rejected(self) -> None:
        with pytest.raises(ValidationException, match="at least one"):
            validate_language_set([])

    def test_blank_content_rejected(self) -> None:
        with pytest.raises(ValidationException, match="blank"):
            validate_language_set([_block("en", "   ")])

    def test_bad_language_rejected(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            validate_language_set([_block("english", "Hi")])
        assert exc_info.value.details == {"field": "language"}

    def test_duplicate_language_rejected(self) -> None:
        with pytest.raises(ValidationException, match="more than once"):
            validate_language_set([_block("en", "Hi"), _block("en", "Hello")])


class TestMergeLanguageUpdates:
    """Copy-on-write: base carried over, overrides replace whole blocks."""

    def test_unchanged_languages_are_copied(self) -> None:
        base = [_block("nl-BE", "Welkom"), _block("fr-BE", "Bienvenue")]
        merged = merge_language_updates(base, [_block("nl-BE", "Hallo")])
        assert [b.language for b in merged.blocks] == ["nl-BE", "fr-BE"]
        assert merged.blocks[0].content == "Hallo"
        assert merged.blocks[1] is base[1]
        assert merged.updated_languages == ("nl-BE",)
        assert merged.added_languages == ()

    def test_new_language_is_appended(self) -> None:
        merged = merge_language_updates([_block("nl-BE", "Welkom")], [_block("de-DE", "Willkommen")])
        assert [b.language for b in merged.blocks] == ["nl-BE", "de-DE"]
        assert merged.added_languages == ("de-DE",)

    def test_override_replaces_type_settings_as_unit(self) -> None:
        base = [_block("en", "Hi", voice="anna", speed=1)]
        merged = merge_language_updates(base, [_block("en", "Hi", voice="bob")])
        assert merged.blocks[0].type_settings == {"voice": "bob"}

    def test_duplicate_update_rejected(self) -> None:
        with pytest.raises(ValidationException, match="more than once"):
            merge_language_updates(
                [_block("en", "Hi")], [_block("fr", "Salut"), _block("fr", "Allo")]
            )

    def test_blank_override_rejected(self) -> None:
        with pytest.raises(ValidationException, match="blank"):
            merge_language_updates([_block("en", "Hi")], [_block("en", "")])

    def test_same_content_ignores_language(self) -> None:
        assert _block("en", "Hi", a=1).same_content_as(_block("fr", "Hi", a=1))
        assert not _block("en", "Hi").same_content_as(_block("en", "Hi", a=1))
