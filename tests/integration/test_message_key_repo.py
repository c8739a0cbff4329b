"""Integration tests for MessageKeyRepository and MessageKeyAuditRepository.

Require a migrated Postgres database (DATABASE_URL); skipped otherwise.
Each test uses a random store id and rolls back on teardown.
"""

import random

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.audit import AuditFilters
from app.application.dtos.message_key import (
    CreateMessageKeyCommand,
    CreateVersionCommand,
)
from app.application.services.message_key_audit import MessageKeyAuditService
from app.application.use_cases.message_keys import (
    GetAuditHistoryUseCase,
    MessageKeyService,
    VersionService,
)
from app.domain.entities.content_block import ContentBlock
from app.domain.exceptions import MessageKeyAlreadyExistsException
from app.infrastructure.persistence.repositories import (
    MessageKeyAuditRepository,
    MessageKeyRepository,
)

pytestmark = pytest.mark.requires_db


@pytest.fixture
def store_id() -> int:
    return random.randint(1_000_000, 2_000_000_000)


@pytest.fixture
def wired(db_session: AsyncSession):
    repo = MessageKeyRepository(db_session)
    audit_repo = MessageKeyAuditRepository(db_session)
    audit_service = MessageKeyAuditService(audit_repo)
    return (
        repo,
        MessageKeyService(repo, audit_service),
        VersionService(repo, audit_service),
        GetAuditHistoryUseCase(repo, audit_repo),
    )


def _create(store_id: int) -> CreateMessageKeyCommand:
    return CreateMessageKeyCommand(
        message_store_id=store_id,
        message_key="WELCOME",
        message_type_id=1,
        category_id=1,
        languages=[
            ContentBlock("en", "Hi", {"voice": "anna"}),
            ContentBlock("fr", "Salut"),
        ],
    )


async def test_create_edit_publish_round_trip(wired, store_id: int) -> None:
    repo, keys, versions, audit = wired
    created = await keys.create(_create(store_id))
    assert created.key.latest_version == 1
    assert created.version.block_for("en").type_settings == {"voice": "anna"}

    edited = await versions.create_version(
        CreateVersionCommand(
            message_store_id=store_id,
            message_key="WELCOME",
            language_updates=[ContentBlock("en", "Hi there")],
        )
    )
    assert edited.version.version == 2
    assert edited.version.block_for("fr").content == "Salut"

    key = await versions.publish(store_id, "WELCOME", 2)
    assert (key.published_version, key.latest_version) == (2, 2)
    assert key.languages == ("en", "fr")

    v1 = await repo.get_version(key.id, 1)
    assert v1.block_for("en").content == "Hi"
    assert v1.is_published is False

    message = await repo.get_published_message(store_id, "WELCOME", "en")
    assert (message.version, message.content) == (2, "Hi there")
    assert await repo.get_published_message(store_id, "WELCOME", "de") is None
    listing = await repo.list_published_messages(store_id, "fr")
    assert [m.message_key for m in listing] == ["WELCOME"]

    page = await audit.execute(store_id, "WELCOME")
    assert [e.action for e in page.items] == ["published", "edited", "created"]
    published_only = await audit.execute(
        store_id, "WELCOME", AuditFilters(action="published")
    )
    assert published_only.total == 1


async def test_duplicate_key(wired, store_id: int) -> None:
    _, keys, _, _ = wired
    await keys.create(_create(store_id))
    with pytest.raises(MessageKeyAlreadyExistsException):
        await keys.create(_create(store_id))


async def test_get_many_and_list(wired, store_id: int) -> None:
    repo, keys, _, _ = wired
    await keys.create(_create(store_id))
    found = await repo.get_many(store_id, {"WELCOME", "MISSING"})
    assert set(found) == {"WELCOME"}
    assert [k.message_key for k in await repo.list_by_store(store_id)] == ["WELCOME"]
