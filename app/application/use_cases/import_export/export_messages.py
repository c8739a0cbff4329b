"""Export of a message store's keys, versions and content."""

from __future__ import annotations

from app.application.dtos.import_export import (
    ExportDocument,
    ExportLanguage,
    ExportMessageKey,
    ExportSummary,
    ExportVersion,
)
from app.application.dtos.message_key import MessageKeyResult, VersionResult
from app.application.interfaces.repositories import IMessageKeyRepository
from app.core.constants import EXPORT_FORMAT_VERSION
from app.domain.enums import IncludeVersions
from app.domain.exceptions import ValidationException
from app.shared.telemetry.tracing import traced
from app.shared.utils.datetime import utc_now


def _export_version(version: VersionResult) -> ExportVersion:
    return ExportVersion(
        version=version.version,
        version_name=version.version_name,
        is_published=version.is_published,
        date_created=version.date_created,
        created_by=version.created_by,
        languages={
            b.language: ExportLanguage(content=b.content, type_settings=b.type_settings or None)
            for b in version.blocks
        },
    )


class ExportMessagesUseCase:
    """Builds an export document. Pure read."""

    def __init__(self, message_key_repo: IMessageKeyRepository) -> None:
        self.message_key_repo = message_key_repo

    async def _versions_for(
        self, key: MessageKeyResult, include: IncludeVersions
    ) -> list[VersionResult]:
        if include == IncludeVersions.PUBLISHED:
            if key.published_version is None:
                return []
            return await self.message_key_repo.get_versions(
                key.id, [key.published_version]
            )
        return await self.message_key_repo.get_versions(key.id)

    @traced("export.messages")
    async def execute(
        self,
        message_store_id: int,
        message_keys: list[str] | None = None,
        include_versions: str = IncludeVersions.ALL.value,
    ) -> ExportDocument:
        """Export keys of a store.

        Args:
            message_store_id: Store to export.
            message_keys: Optional subset of key names; unknown names are ignored.
            include_versions: 'all' for every version, 'published' for the
                live version only (unpublished keys are left out).

        Raises:
            ValidationException: If include_versions is not a known value.
        """
        try:
            include = IncludeVersions(include_versions)
        except ValueError as e:
            raise ValidationException(
                f"includeVersions must be one of {IncludeVersions.values()}",
                field="includeVersions",
            ) from e

        if message_keys:
            found = await self.message_key_repo.get_many(message_store_id, set(message_keys))
            keys = [found[name] for name in sorted(found)]
        else:
            keys = await self.message_key_repo.list_by_store(message_store_id)

        exported: list[ExportMessageKey] = []
        languages: set[str] = set()
        total_versions = 0
        for key in keys:
            versions = await self._versions_for(key, include)
            if not versions:
                continue
            total_versions += len(versions)
            for version in versions:
                languages.update(version.languages)
            exported.append(
                ExportMessageKey(
                    message_key=key.message_key,
                    message_type_id=key.message_type_id,
                    category_id=key.category_id,
                    display_name=key.display_name,
                    description=key.description,
                    published_version=key.published_version,
                    latest_version=key.latest_version,
                    versions=[_export_version(v) for v in versions],
                )
            )

        return ExportDocument(
            export_version=EXPORT_FORMAT_VERSION,
            exported_at=utc_now(),
            message_store_id=message_store_id,
            include_versions=include.value,
            message_keys=exported,
            summary=ExportSummary(
                total_keys=len(exported),
                total_versions=total_versions,
                total_languages=len(languages),
                languages=sorted(languages),
            ),
        )
