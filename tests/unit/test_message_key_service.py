"""Tests for MessageKeyService: create with version 1, reads, metadata update."""

import pytest

from app.application.dtos.message_key import (
    CreateMessageKeyCommand,
    UpdateMessageKeyCommand,
)
from app.domain.entities.content_block import ContentBlock
from app.domain.exceptions import (
    MessageKeyAlreadyExistsException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.context import clear_request_context, set_request_context

STORE = 12


def _command(message_key: str = "WELCOME", **overrides) -> CreateMessageKeyCommand:
    values = {
        "message_store_id": STORE,
        "message_key": message_key,
        "message_type_id": 1,
        "category_id": 3,
        "languages": [
            ContentBlock("nl-BE", "Welkom", {"voice": "ellen"}),
            ContentBlock("fr-BE", "Bienvenue"),
        ],
    }
    values.update(overrides)
    return CreateMessageKeyCommand(**values)


async def test_create_makes_draft_version_one(services) -> None:
    result = await services.keys.create(_command(created_by="jdoe"))

    assert result.key.latest_version == 1
    assert result.key.published_version is None
    assert result.key.languages == ("fr-BE", "nl-BE")
    assert result.version.version == 1
    assert result.version.version_name == "v1"
    assert result.version.is_published is False
    assert result.version.created_by == "jdoe"
    assert result.version.block_for("nl-BE").type_settings == {"voice": "ellen"}


async def test_create_records_one_created_audit(services) -> None:
    result = await services.keys.create(_command())

    assert len(services.store.audit) == 1
    entry = services.store.audit[0]
    assert entry.action == "created"
    assert entry.action_by == "system"
    assert entry.message_key_id == result.key.id
    assert entry.message_key_version_id == result.version.id
    assert entry.audit_data == {"version": 1, "languages": ["nl-BE", "fr-BE"]}


async def test_create_uses_request_actor_when_not_given(services) -> None:
    set_request_context(actor_id="svc.editor")
    try:
        result = await services.keys.create(_command())
    finally:
        clear_request_context()
    assert result.version.created_by == "svc.editor"
    assert services.store.audit[0].action_by == "svc.editor"


@pytest.mark.parametrize(
    "actor", ["jane\nFAKE LOG LINE", "jane doe", "a\tb", "x\r\ny", "j\u00e9<b>"]
)
async def test_create_rejects_unsafe_actor(services, actor: str) -> None:
    with pytest.raises(ValidationException) as exc:
        await services.keys.create(_command(created_by=actor))
    assert exc.value.details == {"field": "actionBy"}
    assert services.store.keys == {}
    assert services.store.audit == []


async def test_create_duplicate_key_rejected(services) -> None:
    await services.keys.create(_command())
    with pytest.raises(MessageKeyAlreadyExistsException):
        await services.keys.create(_command())
    assert len(services.store.audit) == 1


async def test_same_key_in_other_store_allowed(services) -> None:
    await services.keys.create(_command())
    other = await services.keys.create(_command(message_store_id=STORE + 1))
    assert other.key.message_store_id == STORE + 1


@pytest.mark.parametrize(
    "overrides",
    [
        {"message_key": "welcome"},
        {"languages": []},
        {"languages": [ContentBlock("nl-BE", " ")]},
        {"languages": [ContentBlock("dutch", "Welkom")]},
        {"display_name": "x" * 129},
        {"version_name": "x" * 101},
    ],
)
async def test_create_validation(services, overrides) -> None:
    with pytest.raises(ValidationException):
        await services.keys.create(_command(**overrides))
    assert services.store.keys == {}
    assert services.store.audit == []


async def test_get_and_list(services) -> None:
    await services.keys.create(_command("WELCOME"))
    await services.keys.create(_command("GOODBYE"))

    key = await services.keys.get(STORE, "WELCOME")
    assert key.message_key == "WELCOME"
    listed = await services.keys.list_keys(STORE)
    assert [k.message_key for k in listed] == ["GOODBYE", "WELCOME"]
    assert await services.keys.list_keys(STORE + 1) == []


async def test_get_unknown_key(services) -> None:
    with pytest.raises(ResourceNotFoundException):
        await services.keys.get(STORE, "MISSING")


async def test_update_changes_metadata_only(services) -> None:
    await services.keys.create(_command())
    key = await services.keys.update(
        UpdateMessageKeyCommand(
            message_store_id=STORE,
            message_key="WELCOME",
            display_name="Welcome prompt",
            updated_by="jdoe",
        )
    )
    assert key.display_name == "Welcome prompt"
    assert key.updated_by == "jdoe"
    assert key.latest_version == 1
    assert len(await services.keys.list_versions(STORE, "WELCOME")) == 1


async def test_update_unknown_key(services) -> None:
    with pytest.raises(ResourceNotFoundException):
        await services.keys.update(
            UpdateMessageKeyCommand(message_store_id=STORE, message_key="MISSING")
        )


async def test_get_version_and_missing_version(services) -> None:
    await services.keys.create(_command())
    version = await services.keys.get_version(STORE, "WELCOME", 1)
    assert version.languages == ("nl-BE", "fr-BE")
    with pytest.raises(ResourceNotFoundException):
        await services.keys.get_version(STORE, "WELCOME", 2)
