"""In-memory doubles of the repository and cache ports for unit tests.

InMemoryStore plays the database: both repositories share it, so an audit
record written inside locked() is rolled back together with the key's
writes when the block raises, like a SAVEPOINT would.
"""

from __future__ import annotations

import asyncio
import copy
import fnmatch
import itertools
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Any

from app.application.dtos.audit import AuditEntryCreate, AuditEntryResult, AuditFilters
from app.application.dtos.message_key import (
    MessageKeyCreate,
    MessageKeyResult,
    VersionResult,
    VersionSummary,
    VersionToPersist,
)
from app.application.dtos.runtime import PublishedMessage
from app.domain.exceptions import (
    MessageKeyAlreadyExistsException,
    ResourceNotFoundException,
    VersionConflictException,
)
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid


@dataclass
class _KeyRow:
    id: int
    message_store_id: int
    message_key: str
    message_type_id: int
    category_id: int
    latest_version: int = 0
    published_version: int | None = None
    display_name: str | None = None
    description: str | None = None
    created_by: str | None = None
    updated_by: str | None = None
    date_created: Any = field(default_factory=utc_now)
    date_updated: Any = field(default_factory=utc_now)


class InMemoryStore:
    """Shared state: key rows, versions per key id, audit records, per-key locks."""

    def __init__(self) -> None:
        self.keys: dict[tuple[int, str], _KeyRow] = {}
        self.versions: dict[int, dict[int, VersionResult]] = {}
        self.audit: list[AuditEntryResult] = []
        self.locks: dict[tuple[int, str], asyncio.Lock] = {}
        self._ids = itertools.count(1)
        self._clock = utc_now()

    def next_id(self) -> int:
        return next(self._ids)

    def tick(self):
        """Strictly increasing timestamps so ordering is deterministic."""
        self._clock += timedelta(milliseconds=1)
        return self._clock

    def row_by_id(self, message_key_id: int) -> _KeyRow:
        for row in self.keys.values():
            if row.id == message_key_id:
                return row
        raise ResourceNotFoundException("message_key", str(message_key_id))


class InMemoryMessageKeyRepository:
    """IMessageKeyRepository over InMemoryStore.

    fail_next_inserts makes the next N insert_version calls collide, as if a
    concurrent writer had taken the number first.
    """

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self.store = store or InMemoryStore()
        self.fail_next_inserts = 0
        self.insert_attempts = 0

    def _result(self, row: _KeyRow) -> MessageKeyResult:
        languages = sorted(
            {
                block.language
                for version in self.store.versions.get(row.id, {}).values()
                for block in version.blocks
            }
        )
        return MessageKeyResult(
            id=row.id,
            message_store_id=row.message_store_id,
            message_key=row.message_key,
            message_type_id=row.message_type_id,
            category_id=row.category_id,
            latest_version=row.latest_version,
            published_version=row.published_version,
            languages=tuple(languages),
            display_name=row.display_name,
            description=row.description,
            date_created=row.date_created,
            created_by=row.created_by,
            date_updated=row.date_updated,
            updated_by=row.updated_by,
        )

    @asynccontextmanager
    async def locked(
        self, message_store_id: int, message_key: str
    ) -> AsyncIterator[MessageKeyResult | None]:
        name = (message_store_id, message_key)
        lock = self.store.locks.setdefault(name, asyncio.Lock())
        async with lock:
            before_row = copy.deepcopy(self.store.keys.get(name))
            before_versions = (
                dict(self.store.versions.get(before_row.id, {})) if before_row else None
            )
            before_audit = list(self.store.audit)
            row = self.store.keys.get(name)
            try:
                yield self._result(row) if row else None
            except BaseException:
                self._restore(name, before_row, before_versions, before_audit)
                raise

    def _restore(
        self,
        name: tuple[int, str],
        row: _KeyRow | None,
        versions: dict[int, VersionResult] | None,
        audit: list[AuditEntryResult],
    ) -> None:
        current = self.store.keys.get(name)
        touched_id = (row or current).id if (row or current) else None
        if row is None:
            self.store.keys.pop(name, None)
            if current is not None:
                self.store.versions.pop(current.id, None)
        else:
            self.store.keys[name] = row
            self.store.versions[row.id] = dict(versions or {})
        kept = {a.audit_id for a in audit}
        self.store.audit = [
            a
            for a in self.store.audit
            if a.audit_id in kept or a.message_key_id != touched_id
        ]

    async def get_by_key(
        self, message_store_id: int, message_key: str
    ) -> MessageKeyResult | None:
        row = self.store.keys.get((message_store_id, message_key))
        return self._result(row) if row else None

    async def get_many(
        self, message_store_id: int, message_keys: set[str]
    ) -> dict[str, MessageKeyResult]:
        return {
            name: self._result(self.store.keys[(message_store_id, name)])
            for name in message_keys
            if (message_store_id, name) in self.store.keys
        }

    async def list_by_store(self, message_store_id: int) -> list[MessageKeyResult]:
        rows = [r for (s, _), r in self.store.keys.items() if s == message_store_id]
        return [self._result(r) for r in sorted(rows, key=lambda r: r.message_key)]

    async def create_key(self, data: MessageKeyCreate) -> MessageKeyResult:
        name = (data.message_store_id, data.message_key)
        if name in self.store.keys:
            raise MessageKeyAlreadyExistsException(data.message_store_id, data.message_key)
        now = self.store.tick()
        row = _KeyRow(
            id=self.store.next_id(),
            message_store_id=data.message_store_id,
            message_key=data.message_key,
            message_type_id=data.message_type_id,
            category_id=data.category_id,
            display_name=data.display_name,
            description=data.description,
            created_by=data.created_by,
            updated_by=data.created_by,
            date_created=now,
            date_updated=now,
        )
        self.store.keys[name] = row
        self.store.versions[row.id] = {}
        return self._result(row)

    async def update_metadata(
        self,
        message_key_id: int,
        display_name: str | None,
        description: str | None,
        updated_by: str | None,
    ) -> MessageKeyResult:
        row = self.store.row_by_id(message_key_id)
        if display_name is not None:
            row.display_name = display_name
        if description is not None:
            row.description = description
        row.updated_by = updated_by
        row.date_updated = self.store.tick()
        return self._result(row)

    async def insert_version(
        self, message_key_id: int, data: VersionToPersist
    ) -> VersionResult:
        self.insert_attempts += 1
        row = self.store.row_by_id(message_key_id)
        versions = self.store.versions.setdefault(message_key_id, {})
        if self.fail_next_inserts > 0 or data.version in versions:
            self.fail_next_inserts = max(0, self.fail_next_inserts - 1)
            raise VersionConflictException(row.message_store_id, row.message_key, 1)
        # Yield to the loop so concurrent writers interleave here.
        await asyncio.sleep(0)
        version = VersionResult(
            id=generate_cuid(),
            message_key_id=message_key_id,
            version=data.version,
            version_name=data.version_name,
            blocks=tuple(data.blocks),
            is_published=False,
            date_created=self.store.tick(),
            created_by=data.created_by,
        )
        versions[data.version] = version
        row.latest_version = data.version
        row.updated_by = data.created_by
        return version

    async def set_published_version(
        self, message_key_id: int, version: int, updated_by: str | None
    ) -> MessageKeyResult:
        row = self.store.row_by_id(message_key_id)
        row.published_version = version
        row.updated_by = updated_by
        row.date_updated = self.store.tick()
        return self._result(row)

    def _with_flag(self, row: _KeyRow, version: VersionResult) -> VersionResult:
        return replace(version, is_published=version.version == row.published_version)

    async def get_version(
        self, message_key_id: int, version: int
    ) -> VersionResult | None:
        row = self.store.row_by_id(message_key_id)
        found = self.store.versions.get(message_key_id, {}).get(version)
        return self._with_flag(row, found) if found else None

    async def get_versions(
        self, message_key_id: int, versions: list[int] | None = None
    ) -> list[VersionResult]:
        row = self.store.row_by_id(message_key_id)
        stored = self.store.versions.get(message_key_id, {})
        numbers = sorted(stored, reverse=True)
        if versions is not None:
            numbers = [n for n in numbers if n in versions]
        return [self._with_flag(row, stored[n]) for n in numbers]

    async def list_versions(self, message_key_id: int) -> list[VersionSummary]:
        return [
            VersionSummary(
                version=v.version,
                version_name=v.version_name,
                is_published=v.is_published,
                date_created=v.date_created,
                created_by=v.created_by,
                languages=v.languages,
            )
            for v in await self.get_versions(message_key_id)
        ]

    def _published(self, row: _KeyRow, language: str) -> PublishedMessage | None:
        if row.published_version is None:
            return None
        version = self.store.versions[row.id][row.published_version]
        block = version.block_for(language)
        if block is None:
            return None
        return PublishedMessage(
            message_store_id=row.message_store_id,
            message_key=row.message_key,
            language=language,
            version=version.version,
            content=block.content,
            type_settings=dict(block.type_settings),
        )

    async def get_published_message(
        self, message_store_id: int, message_key: str, language: str
    ) -> PublishedMessage | None:
        row = self.store.keys.get((message_store_id, message_key))
        return self._published(row, language) if row else None

    async def list_published_messages(
        self, message_store_id: int, language: str
    ) -> list[PublishedMessage]:
        messages = []
        for row in sorted(self.store.keys.values(), key=lambda r: r.message_key):
            if row.message_store_id != message_store_id:
                continue
            message = self._published(row, language)
            if message is not None:
                messages.append(message)
        return messages


class InMemoryAuditRepository:
    """IMessageKeyAuditRepository over InMemoryStore (append-only)."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def record(self, data: AuditEntryCreate) -> AuditEntryResult:
        entry = AuditEntryResult(
            audit_id=generate_cuid(),
            message_key_id=data.message_key_id,
            action=data.action,
            action_by=data.action_by,
            action_reason=data.action_reason,
            audit_data=dict(data.audit_data),
            message_key_version_id=data.message_key_version_id,
            date_action=self.store.tick(),
        )
        self.store.audit.append(entry)
        return entry

    async def query(
        self,
        message_key_id: int,
        filters: AuditFilters,
        skip: int,
        limit: int,
    ) -> tuple[list[AuditEntryResult], int]:
        matching = [
            a
            for a in self.store.audit
            if a.message_key_id == message_key_id
            and (filters.action is None or a.action == filters.action)
            and (filters.action_by is None or a.action_by == filters.action_by)
            and (filters.start_date is None or a.date_action >= filters.start_date)
            and (filters.end_date is None or a.date_action <= filters.end_date)
        ]
        matching.sort(key=lambda a: a.date_action, reverse=True)
        return matching[skip : skip + limit], len(matching)


class InMemoryRuntimeCache:
    """IRuntimeMessageCache double recording invalidations."""

    def __init__(self) -> None:
        self.messages: dict[tuple[int, str, str], PublishedMessage] = {}
        self.stores: dict[tuple[int, str], list[PublishedMessage]] = {}
        self.invalidated: list[tuple[int, str]] = []

    async def get_message(
        self, message_store_id: int, message_key: str, language: str
    ) -> PublishedMessage | None:
        return self.messages.get((message_store_id, message_key, language))

    async def set_message(self, message: PublishedMessage) -> None:
        self.messages[
            (message.message_store_id, message.message_key, message.language)
        ] = message

    async def get_store(
        self, message_store_id: int, language: str
    ) -> list[PublishedMessage] | None:
        return self.stores.get((message_store_id, language))

    async def set_store(
        self, message_store_id: int, language: str, messages: list[PublishedMessage]
    ) -> None:
        self.stores[(message_store_id, language)] = list(messages)

    async def invalidate_key(self, message_store_id: int, message_key: str) -> None:
        self.invalidated.append((message_store_id, message_key))
        for name in [n for n in self.messages if n[:2] == (message_store_id, message_key)]:
            del self.messages[name]
        for name in [n for n in self.stores if n[0] == message_store_id]:
            del self.stores[name]


class FakeRedisCache:
    """ICacheService double: dict storage with glob-style delete_pattern."""

    def __init__(self, available: bool = True) -> None:
        self.data: dict[str, Any] = {}
        self.available = available
        self.ttls: dict[str, int] = {}

    def is_available(self) -> bool:
        return self.available

    async def get(self, key: str) -> Any:
        return copy.deepcopy(self.data.get(key)) if self.available else None

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        if not self.available:
            return False
        self.data[key] = copy.deepcopy(value)
        self.ttls[key] = ttl
        return True

    async def delete(self, key: str) -> bool:
        return self.data.pop(key, None) is not None

    async def delete_pattern(self, pattern: str) -> int:
        doomed = [k for k in self.data if fnmatch.fnmatchcase(k, pattern)]
        for key in doomed:
            del self.data[key]
        return len(doomed)


class RecordingPostCommitHooks:
    """IPostCommitHooks double: callbacks wait until commit() is awaited."""

    def __init__(self) -> None:
        self.callbacks: list[Callable[[], Awaitable[None]]] = []

    def add(self, callback: Callable[[], Awaitable[None]]) -> None:
        self.callbacks.append(callback)

    async def commit(self) -> None:
        callbacks, self.callbacks = self.callbacks, []
        for callback in callbacks:
            await callback()
