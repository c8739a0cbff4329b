"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.audit import (
        AuditEntryCreate,
        AuditEntryResult,
        AuditFilters,
    )
    from app.application.dtos.message_key import (
        MessageKeyCreate,
        MessageKeyResult,
        VersionResult,
        VersionSummary,
        VersionToPersist,
    )
    from app.application.dtos.runtime import PublishedMessage


# Message key repository interface
class IMessageKeyRepository(Protocol):
    """Protocol for the message key aggregate and its version store (DIP).

    Writes are only valid inside locked(); the lock scope is also the
    rollback scope, so a failure inside it undoes every write made there.
    """

    def locked(
        self, message_store_id: int, message_key: str
    ) -> AbstractAsyncContextManager[MessageKeyResult | None]:
        """Open a savepoint and take the per-key write lock.

        Yields the current key (None if it does not exist yet). Different
        keys never share a lock. Leaving the block with an exception rolls
        back all writes made inside it.
        """

    async def get_by_key(
        self, message_store_id: int, message_key: str
    ) -> MessageKeyResult | None:
        """Return key by (store, name)."""

    async def get_many(
        self, message_store_id: int, message_keys: set[str]
    ) -> dict[str, MessageKeyResult]:
        """Return existing keys among message_keys (batch), keyed by name."""

    async def list_by_store(self, message_store_id: int) -> list[MessageKeyResult]:
        """Return all keys of a store ordered by name."""

    async def create_key(self, data: MessageKeyCreate) -> MessageKeyResult:
        """Insert key row with latest_version 0 until its first version is inserted.

        Raises:
            MessageKeyAlreadyExistsException: If (store, name) exists.
        """

    async def update_metadata(
        self,
        message_key_id: int,
        display_name: str | None,
        description: str | None,
        updated_by: str | None,
    ) -> MessageKeyResult:
        """Update display name / description; None leaves a field unchanged."""

    async def insert_version(
        self, message_key_id: int, data: VersionToPersist
    ) -> VersionResult:
        """Insert an immutable version and advance the key's latest_version.

        Raises:
            VersionConflictException: If the version number is already taken.
        """

    async def set_published_version(
        self, message_key_id: int, version: int, updated_by: str | None
    ) -> MessageKeyResult:
        """Point the key's published_version at an existing version."""

    async def get_version(
        self, message_key_id: int, version: int
    ) -> VersionResult | None:
        """Return one version with all its content blocks."""

    async def get_versions(
        self, message_key_id: int, versions: list[int] | None = None
    ) -> list[VersionResult]:
        """Return versions with content (all when versions is None), newest first."""

    async def list_versions(self, message_key_id: int) -> list[VersionSummary]:
        """Return version summaries newest first."""

    async def get_published_message(
        self, message_store_id: int, message_key: str, language: str
    ) -> PublishedMessage | None:
        """Return published content of key in language, or None."""

    async def list_published_messages(
        self, message_store_id: int, language: str
    ) -> list[PublishedMessage]:
        """Return published content in language for every published key of the store."""


# Audit repository interface
class IMessageKeyAuditRepository(Protocol):
    """Protocol for the append-only message key audit log (DIP)."""

    async def record(self, data: AuditEntryCreate) -> AuditEntryResult:
        """Append one record in the caller's transaction."""

    async def query(
        self,
        message_key_id: int,
        filters: AuditFilters,
        skip: int,
        limit: int,
    ) -> tuple[list[AuditEntryResult], int]:
        """Return (page of records newest first, total matching count)."""
