"""Tests for ExportMessagesUseCase."""

import pytest

from app.application.dtos.message_key import (
    CreateMessageKeyCommand,
    CreateVersionCommand,
)
from app.core.constants import EXPORT_FORMAT_VERSION
from app.domain.entities.content_block import ContentBlock
from app.domain.exceptions import ValidationException

STORE = 4


@pytest.fixture
async def populated(services):
    """WELCOME (v1, v2; v1 published), GOODBYE (v1, unpublished)."""
    await services.keys.create(
        CreateMessageKeyCommand(
            message_store_id=STORE,
            message_key="WELCOME",
            message_type_id=1,
            category_id=2,
            languages=[ContentBlock("en", "Hi", {"voice": "anna"})],
            display_name="Welcome",
        )
    )
    await services.versions.create_version(
        CreateVersionCommand(
            message_store_id=STORE,
            message_key="WELCOME",
            language_updates=[ContentBlock("fr", "Salut")],
        )
    )
    await services.versions.publish(STORE, "WELCOME", 1)
    await services.keys.create(
        CreateMessageKeyCommand(
            message_store_id=STORE,
            message_key="GOODBYE",
            message_type_id=1,
            category_id=2,
            languages=[ContentBlock("nl", "Dag")],
        )
    )
    return services


async def test_export_all_versions(populated) -> None:
    document = await populated.export.execute(STORE)

    assert document.export_version == EXPORT_FORMAT_VERSION
    assert document.include_versions == "all"
    assert [k.message_key for k in document.message_keys] == ["GOODBYE", "WELCOME"]
    welcome = document.message_keys[1]
    assert (welcome.published_version, welcome.latest_version) == (1, 2)
    assert [v.version for v in welcome.versions] == [2, 1]
    assert [v.is_published for v in welcome.versions] == [False, True]
    v1 = welcome.versions[1]
    assert v1.languages["en"].content == "Hi"
    assert v1.languages["en"].type_settings == {"voice": "anna"}
    assert welcome.versions[0].languages["fr"].type_settings is None
    assert document.summary.total_keys == 2
    assert document.summary.total_versions == 3
    assert document.summary.languages == ["en", "fr", "nl"]
    assert document.summary.total_languages == 3


async def test_export_published_only(populated) -> None:
    document = await populated.export.execute(STORE, include_versions="published")
    assert [k.message_key for k in document.message_keys] == ["WELCOME"]
    assert [v.version for v in document.message_keys[0].versions] == [1]
    assert document.summary.languages == ["en"]


async def test_export_subset_ignores_unknown_keys(populated) -> None:
    document = await populated.export.execute(STORE, message_keys=["GOODBYE", "NOPE"])
    assert [k.message_key for k in document.message_keys] == ["GOODBYE"]


async def test_export_unknown_include_versions(populated) -> None:
    with pytest.raises(ValidationException):
        await populated.export.execute(STORE, include_versions="latest")


async def test_export_empty_store(services) -> None:
    document = await services.export.execute(STORE + 1)
    assert document.message_keys == []
    assert document.summary.total_keys == 0
