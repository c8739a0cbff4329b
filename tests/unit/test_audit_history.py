"""Tests for GetAuditHistoryUseCase: ordering, filters, paging, validation."""

from datetime import timedelta

import pytest

from app.application.dtos.audit import AuditFilters
from app.application.dtos.message_key import (
    CreateMessageKeyCommand,
    CreateVersionCommand,
)
from app.domain.entities.content_block import ContentBlock
from app.domain.exceptions import ResourceNotFoundException, ValidationException

STORE = 5


@pytest.fixture
async def history(services):
    """WELCOME with created, edited, language_added, published, rollback records."""
    await services.keys.create(
        CreateMessageKeyCommand(
            message_store_id=STORE,
            message_key="WELCOME",
            message_type_id=1,
            category_id=1,
            languages=[ContentBlock("en", "Hi")],
            created_by="alice",
        )
    )
    await services.versions.create_version(
        CreateVersionCommand(
            message_store_id=STORE,
            message_key="WELCOME",
            language_updates=[ContentBlock("en", "Hello")],
            created_by="bob",
        )
    )
    await services.versions.create_version(
        CreateVersionCommand(
            message_store_id=STORE,
            message_key="WELCOME",
            language_updates=[ContentBlock("fr", "Bonjour")],
            created_by="alice",
        )
    )
    await services.versions.publish(STORE, "WELCOME", 3, "bob")
    await services.versions.publish(STORE, "WELCOME", 2, "alice")
    return services


async def test_newest_first(history) -> None:
    page = await history.audit.execute(STORE, "WELCOME")
    assert page.total == 5
    assert [e.action for e in page.items] == [
        "rollback",
        "published",
        "language_added",
        "edited",
        "created",
    ]
    assert page.page == 1
    assert page.page_size == 50


async def test_filters_are_combined(history) -> None:
    page = await history.audit.execute(
        STORE, "WELCOME", AuditFilters(action="published", action_by="bob")
    )
    assert [(e.action, e.action_by) for e in page.items] == [("published", "bob")]

    page = await history.audit.execute(
        STORE, "WELCOME", AuditFilters(action="published", action_by="alice")
    )
    assert page.total == 0
    assert page.items == []


async def test_actor_filter(history) -> None:
    page = await history.audit.execute(STORE, "WELCOME", AuditFilters(action_by="alice"))
    assert [e.action for e in page.items] == ["rollback", "language_added", "created"]


async def test_date_range(history) -> None:
    entries = sorted(history.store.audit, key=lambda e: e.date_action)
    start = entries[1].date_action
    end = entries[3].date_action
    page = await history.audit.execute(
        STORE, "WELCOME", AuditFilters(start_date=start, end_date=end)
    )
    assert [e.action for e in page.items] == ["published", "language_added", "edited"]


async def test_naive_dates_are_utc(history) -> None:
    latest = max(e.date_action for e in history.store.audit)
    page = await history.audit.execute(
        STORE,
        "WELCOME",
        AuditFilters(start_date=(latest + timedelta(seconds=1)).replace(tzinfo=None)),
    )
    assert page.total == 0


async def test_paging(history) -> None:
    first = await history.audit.execute(STORE, "WELCOME", page=1, page_size=2)
    second = await history.audit.execute(STORE, "WELCOME", page=2, page_size=2)
    third = await history.audit.execute(STORE, "WELCOME", page=3, page_size=2)
    assert [e.action for e in first.items] == ["rollback", "published"]
    assert [e.action for e in second.items] == ["language_added", "edited"]
    assert [e.action for e in third.items] == ["created"]
    assert first.total == second.total == third.total == 5


@pytest.mark.parametrize(
    "kwargs",
    [
        {"page": 0},
        {"page_size": 0},
        {"page_size": 101},
        {"filters": AuditFilters(action="renamed")},
    ],
)
async def test_invalid_queries(history, kwargs) -> None:
    with pytest.raises(ValidationException):
        await history.audit.execute(STORE, "WELCOME", **kwargs)


async def test_start_after_end(history) -> None:
    latest = max(e.date_action for e in history.store.audit)
    with pytest.raises(ValidationException):
        await history.audit.execute(
            STORE,
            "WELCOME",
            AuditFilters(start_date=latest, end_date=latest - timedelta(days=1)),
        )


async def test_unknown_key(services) -> None:
    with pytest.raises(ResourceNotFoundException):
        await services.audit.execute(STORE, "MISSING")
