"""MessageKey repository: aggregate rows, immutable versions, runtime reads. Returns application DTOs."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import and_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.application.dtos.message_key import (
    MessageKeyCreate,
    MessageKeyResult,
    VersionResult,
    VersionSummary,
    VersionToPersist,
)
from app.application.dtos.runtime import PublishedMessage
from app.domain.entities.content_block import ContentBlock
from app.domain.exceptions import (
    MessageKeyAlreadyExistsException,
    ResourceNotFoundException,
    VersionConflictException,
)
from app.infrastructure.exceptions import StorageException
from app.infrastructure.persistence.models.message_key import (
    MessageKey,
    MessageKeyVersion,
    MessageLanguageContent,
)
from app.shared.utils.generators import generate_cuid


def _blocks(contents: list[MessageLanguageContent]) -> tuple[ContentBlock, ...]:
    return tuple(
        ContentBlock(
            language=c.language,
            content=c.content,
            type_settings=dict(c.type_settings or {}),
        )
        for c in contents
    )


def _version_to_result(v: MessageKeyVersion, published_version: int | None) -> VersionResult:
    """Map ORM MessageKeyVersion (contents loaded) to application VersionResult."""
    return VersionResult(
        id=v.id,
        message_key_id=v.message_key_id,
        version=v.version,
        version_name=v.version_name,
        blocks=_blocks(v.contents),
        is_published=v.version == published_version,
        date_created=v.date_created,
        created_by=v.created_by,
    )


def _key_to_result(k: MessageKey, languages: tuple[str, ...]) -> MessageKeyResult:
    """Map ORM MessageKey to application MessageKeyResult."""
    return MessageKeyResult(
        id=k.id,
        message_store_id=k.message_store_id,
        message_key=k.message_key,
        message_type_id=k.message_type_id,
        category_id=k.category_id,
        latest_version=k.latest_version,
        published_version=k.published_version,
        languages=languages,
        display_name=k.display_name,
        description=k.description,
        date_created=k.date_created,
        created_by=k.created_by,
        date_updated=k.date_updated,
        updated_by=k.updated_by,
    )


class MessageKeyRepository:
    """SQLAlchemy implementation of IMessageKeyRepository.

    locked() is a SAVEPOINT plus SELECT ... FOR UPDATE on the key row; the
    unique (message_key_id, version) constraint backs it up, and a duplicate
    number surfaces as VersionConflictException so the caller can retry.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _languages_by_key(self, key_ids: list[int]) -> dict[int, tuple[str, ...]]:
        """Union of languages over all versions, per key id (sorted)."""
        if not key_ids:
            return {}
        result = await self.db.execute(
            select(MessageKeyVersion.message_key_id, MessageLanguageContent.language)
            .join(
                MessageLanguageContent,
                MessageLanguageContent.message_key_version_id == MessageKeyVersion.id,
            )
            .where(MessageKeyVersion.message_key_id.in_(key_ids))
            .distinct()
        )
        languages: dict[int, set[str]] = {key_id: set() for key_id in key_ids}
        for key_id, language in result.all():
            languages[key_id].add(language)
        return {key_id: tuple(sorted(langs)) for key_id, langs in languages.items()}

    async def _to_results(self, rows: list[MessageKey]) -> list[MessageKeyResult]:
        languages = await self._languages_by_key([r.id for r in rows])
        return [_key_to_result(r, languages.get(r.id, ())) for r in rows]

    async def _get_row(self, message_key_id: int) -> MessageKey:
        row = await self.db.get(MessageKey, message_key_id, populate_existing=True)
        if row is None:
            raise ResourceNotFoundException("message_key", str(message_key_id))
        return row

    @asynccontextmanager
    async def locked(
        self, message_store_id: int, message_key: str
    ) -> AsyncIterator[MessageKeyResult | None]:
        """Savepoint plus row lock on the key; writes of the block roll back together.

        Driver failures inside the block surface as StorageException once the
        savepoint is rolled back, so callers can report the key as failed.
        """
        try:
            async with self.db.begin_nested():
                result = await self.db.execute(
                    select(MessageKey)
                    .where(
                        and_(
                            MessageKey.message_store_id == message_store_id,
                            MessageKey.message_key == message_key,
                        )
                    )
                    .with_for_update()
                    .execution_options(populate_existing=True)
                )
                row = result.scalar_one_or_none()
                yield (await self._to_results([row]))[0] if row else None
        except SQLAlchemyError as e:
            raise StorageException(
                f"write {message_store_id}/{message_key}", type(e).__name__
            ) from e

    async def get_by_key(
        self, message_store_id: int, message_key: str
    ) -> MessageKeyResult | None:
        result = await self.db.execute(
            select(MessageKey)
            .where(
                and_(
                    MessageKey.message_store_id == message_store_id,
                    MessageKey.message_key == message_key,
                )
            )
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return (await self._to_results([row]))[0] if row else None

    async def get_many(
        self, message_store_id: int, message_keys: set[str]
    ) -> dict[str, MessageKeyResult]:
        if not message_keys:
            return {}
        result = await self.db.execute(
            select(MessageKey).where(
                and_(
                    MessageKey.message_store_id == message_store_id,
                    MessageKey.message_key.in_(sorted(message_keys)),
                )
            )
        )
        rows = list(result.scalars().all())
        return {r.message_key: r for r in await self._to_results(rows)}

    async def list_by_store(self, message_store_id: int) -> list[MessageKeyResult]:
        result = await self.db.execute(
            select(MessageKey)
            .where(MessageKey.message_store_id == message_store_id)
            .order_by(MessageKey.message_key)
        )
        return await self._to_results(list(result.scalars().all()))

    async def create_key(self, data: MessageKeyCreate) -> MessageKeyResult:
        """Insert the key row in its own savepoint; duplicates raise MessageKeyAlreadyExistsException."""
        row = MessageKey(
            message_store_id=data.message_store_id,
            message_key=data.message_key,
            message_type_id=data.message_type_id,
            category_id=data.category_id,
            latest_version=0,
            display_name=data.display_name,
            description=data.description,
            created_by=data.created_by,
            updated_by=data.created_by,
        )
        try:
            async with self.db.begin_nested():
                self.db.add(row)
                await self.db.flush()
        except IntegrityError as e:
            raise MessageKeyAlreadyExistsException(
                data.message_store_id, data.message_key
            ) from e
        await self.db.refresh(row)
        return _key_to_result(row, ())

    async def update_metadata(
        self,
        message_key_id: int,
        display_name: str | None,
        description: str | None,
        updated_by: str | None,
    ) -> MessageKeyResult:
        row = await self._get_row(message_key_id)
        if display_name is not None:
            row.display_name = display_name
        if description is not None:
            row.description = description
        row.updated_by = updated_by
        await self.db.flush()
        await self.db.refresh(row)
        return (await self._to_results([row]))[0]

    async def insert_version(
        self, message_key_id: int, data: VersionToPersist
    ) -> VersionResult:
        """Insert version + contents and advance latest_version in one savepoint."""
        version_row = MessageKeyVersion(
            id=generate_cuid(),
            message_key_id=message_key_id,
            version=data.version,
            version_name=data.version_name,
            created_by=data.created_by,
            contents=[
                MessageLanguageContent(
                    language=b.language,
                    content=b.content,
                    type_settings=b.type_settings or None,
                    created_by=data.created_by,
                )
                for b in data.blocks
            ],
        )
        try:
            async with self.db.begin_nested():
                self.db.add(version_row)
                await self.db.flush()
                await self.db.execute(
                    update(MessageKey)
                    .where(MessageKey.id == message_key_id)
                    .values(latest_version=data.version, updated_by=data.created_by)
                )
        except IntegrityError as e:
            key = await self._get_row(message_key_id)
            raise VersionConflictException(key.message_store_id, key.message_key, 1) from e
        key = await self._get_row(message_key_id)
        await self.db.refresh(version_row, attribute_names=["date_created"])
        return _version_to_result(version_row, key.published_version)

    async def set_published_version(
        self, message_key_id: int, version: int, updated_by: str | None
    ) -> MessageKeyResult:
        await self.db.execute(
            update(MessageKey)
            .where(MessageKey.id == message_key_id)
            .values(published_version=version, updated_by=updated_by)
        )
        row = await self._get_row(message_key_id)
        return (await self._to_results([row]))[0]

    async def get_version(
        self, message_key_id: int, version: int
    ) -> VersionResult | None:
        versions = await self.get_versions(message_key_id, [version])
        return versions[0] if versions else None

    async def get_versions(
        self, message_key_id: int, versions: list[int] | None = None
    ) -> list[VersionResult]:
        key = await self._get_row(message_key_id)
        stmt = (
            select(MessageKeyVersion)
            .where(MessageKeyVersion.message_key_id == message_key_id)
            .options(selectinload(MessageKeyVersion.contents))
            .order_by(MessageKeyVersion.version.desc())
        )
        if versions is not None:
            stmt = stmt.where(MessageKeyVersion.version.in_(versions))
        result = await self.db.execute(stmt)
        return [
            _version_to_result(v, key.published_version) for v in result.scalars().all()
        ]

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

    def _published_query(self, message_store_id: int, language: str):
        return (
            select(
                MessageKey.message_key,
                MessageKeyVersion.version,
                MessageLanguageContent.content,
                MessageLanguageContent.type_settings,
            )
            .join(
                MessageKeyVersion,
                and_(
                    MessageKeyVersion.message_key_id == MessageKey.id,
                    MessageKeyVersion.version == MessageKey.published_version,
                ),
            )
            .join(
                MessageLanguageContent,
                MessageLanguageContent.message_key_version_id == MessageKeyVersion.id,
            )
            .where(
                and_(
                    MessageKey.message_store_id == message_store_id,
                    MessageKey.published_version.is_not(None),
                    MessageLanguageContent.language == language,
                )
            )
        )

    async def get_published_message(
        self, message_store_id: int, message_key: str, language: str
    ) -> PublishedMessage | None:
        result = await self.db.execute(
            self._published_query(message_store_id, language).where(
                MessageKey.message_key == message_key
            )
        )
        row = result.first()
        if row is None:
            return None
        return PublishedMessage(
            message_store_id=message_store_id,
            message_key=row.message_key,
            language=language,
            version=row.version,
            content=row.content,
            type_settings=dict(row.type_settings or {}),
        )

    async def list_published_messages(
        self, message_store_id: int, language: str
    ) -> list[PublishedMessage]:
        result = await self.db.execute(
            self._published_query(message_store_id, language).order_by(
                MessageKey.message_key
            )
        )
        return [
            PublishedMessage(
                message_store_id=message_store_id,
                message_key=row.message_key,
                language=language,
                version=row.version,
                content=row.content,
                type_settings=dict(row.type_settings or {}),
            )
            for row in result.all()
        ]
