"""Import of (messageKey, language, content) batches: preview and commit."""

from __future__ import annotations

from collections.abc import Sequence

from app.application.dtos.import_export import (
    ClassifiedItem,
    ImportCommitResult,
    ImportIssue,
    ImportItem,
    ImportItemResult,
    ImportPreviewResult,
)
from app.application.dtos.message_key import (
    CreateMessageKeyCommand,
    CreateVersionCommand,
    MessageKeyWithVersion,
    VersionResult,
)
from app.application.interfaces.repositories import IMessageKeyRepository
from app.application.services.import_classifier import (
    ImportPlan,
    classify_batch,
    to_content_block,
)
from app.application.services.import_validator import ImportBatchValidator
from app.application.services.message_key_audit import resolve_actor
from app.application.use_cases.message_keys.message_key_service import (
    MessageKeyService,
)
from app.application.use_cases.message_keys.version_service import VersionService
from app.core.constants import IMPORT_ACTOR
from app.domain.enums import ImportAction, ImportItemStatus, MessageKeyAuditAction
from app.domain.exceptions import MessageStoreException, ValidationException
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import traced
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_STATUS_FOR_ACTION = {
    ImportAction.CREATE.value: ImportItemStatus.CREATED.value,
    ImportAction.UPDATE.value: ImportItemStatus.UPDATED.value,
}


class ImportMessagesService:
    """Previews and commits import batches against one message store.

    Commit applies each key independently: one create (new key) or one
    createVersion (existing key) per key, each with one 'imported' audit
    record. A failing key is reported per tuple and does not affect others.
    """

    def __init__(
        self,
        message_key_repo: IMessageKeyRepository,
        message_key_service: MessageKeyService,
        version_service: VersionService,
        validator: ImportBatchValidator | None = None,
    ) -> None:
        self.message_key_repo = message_key_repo
        self.message_key_service = message_key_service
        self.version_service = version_service
        self.validator = validator or ImportBatchValidator()

    async def _current_versions(
        self, message_store_id: int, batch: Sequence[ImportItem], valid: Sequence[int]
    ) -> dict[str, VersionResult]:
        """Load the comparison version (published, else latest) of each existing key."""
        names = {batch[i].message_key for i in valid}
        if not names:
            return {}
        keys = await self.message_key_repo.get_many(message_store_id, names)
        current: dict[str, VersionResult] = {}
        for name, key in keys.items():
            number = key.published_version or key.latest_version
            version = await self.message_key_repo.get_version(key.id, number)
            if version is not None:
                current[name] = version
        return current

    async def _plan(
        self, message_store_id: int, batch: Sequence[ImportItem], overwrite: bool
    ) -> tuple[ImportPlan, list[ImportIssue]]:
        valid, errors = self.validator.validate(batch)
        current = await self._current_versions(message_store_id, batch, valid)
        return classify_batch(batch, valid, current, overwrite), errors

    @traced("import.preview")
    async def preview(
        self,
        message_store_id: int,
        batch: Sequence[ImportItem],
        overwrite: bool = False,
    ) -> ImportPreviewResult:
        """Classify a batch without mutating anything.

        Conflicts (differing content, overwrite off) are listed in conflicts
        and counted as skips, since commit leaves them untouched.
        """
        plan, errors = await self._plan(message_store_id, batch, overwrite)
        return ImportPreviewResult(
            is_valid=not errors,
            will_create=plan.count(ImportAction.CREATE),
            will_update=plan.count(ImportAction.UPDATE),
            will_skip=plan.count(ImportAction.SKIP),
            conflicts=plan.conflicts,
            errors=errors,
            warnings=plan.warnings,
        )

    @traced("import.commit")
    async def commit(
        self,
        message_store_id: int,
        batch: Sequence[ImportItem],
        overwrite: bool = False,
        imported_by: str | None = None,
    ) -> ImportCommitResult:
        """Apply a batch and report the outcome of every tuple.

        Raises:
            ValidationException: If imported_by is not a valid actor.
        """
        imported_by = resolve_actor(imported_by, IMPORT_ACTOR)
        plan, errors = await self._plan(message_store_id, batch, overwrite)
        results: dict[int, ImportItemResult] = {}

        for error in errors:
            item = batch[error.index]
            if error.index not in results:
                results[error.index] = ImportItemResult(
                    message_key=item.message_key,
                    language=item.language,
                    status=ImportItemStatus.FAILED.value,
                    error=f"{error.field}: {error.message}",
                )

        for message_key, items in plan.by_key().items():
            for index, result in (
                await self._apply_key(message_store_id, message_key, items, imported_by)
            ).items():
                results[index] = result

        ordered = [results[i] for i in sorted(results)]
        counts = {status: 0 for status in ImportItemStatus.values()}
        for result in ordered:
            counts[result.status] += 1
        logger.info(
            "Import into store %s: created=%s updated=%s skipped=%s failed=%s",
            message_store_id,
            counts[ImportItemStatus.CREATED.value],
            counts[ImportItemStatus.UPDATED.value],
            counts[ImportItemStatus.SKIPPED.value],
            counts[ImportItemStatus.FAILED.value],
        )
        return ImportCommitResult(
            success=counts[ImportItemStatus.FAILED.value] == 0,
            created=counts[ImportItemStatus.CREATED.value],
            updated=counts[ImportItemStatus.UPDATED.value],
            skipped=counts[ImportItemStatus.SKIPPED.value],
            failed=counts[ImportItemStatus.FAILED.value],
            items=ordered,
            completed_at=utc_now(),
        )

    async def _apply_key(
        self,
        message_store_id: int,
        message_key: str,
        items: list[ClassifiedItem],
        imported_by: str | None,
    ) -> dict[int, ImportItemResult]:
        """Apply all tuples of one key in one write; return results by batch index."""
        changes = [c for c in items if c.action != ImportAction.SKIP.value]
        results = {
            c.index: ImportItemResult(
                message_key=message_key,
                language=c.item.language,
                status=ImportItemStatus.SKIPPED.value,
            )
            for c in items
            if c.action == ImportAction.SKIP.value
        }
        if not changes:
            return results

        try:
            if changes[0].key_exists:
                written = await self.version_service.create_version(
                    CreateVersionCommand(
                        message_store_id=message_store_id,
                        message_key=message_key,
                        language_updates=[to_content_block(c.item) for c in changes],
                        created_by=imported_by,
                    ),
                    audit_action=MessageKeyAuditAction.IMPORTED,
                    default_actor=IMPORT_ACTOR,
                )
            else:
                written = await self._create_key(
                    message_store_id, message_key, changes, imported_by
                )
        except MessageStoreException as e:
            logger.warning(
                "Import of %s/%s failed: %s", message_store_id, message_key, e.message
            )
            for c in changes:
                results[c.index] = ImportItemResult(
                    message_key=message_key,
                    language=c.item.language,
                    status=ImportItemStatus.FAILED.value,
                    error=e.message,
                )
            return results

        for c in changes:
            results[c.index] = ImportItemResult(
                message_key=message_key,
                language=c.item.language,
                status=_STATUS_FOR_ACTION[c.action],
                version=written.version.version,
            )
        return results

    async def _create_key(
        self,
        message_store_id: int,
        message_key: str,
        changes: list[ClassifiedItem],
        imported_by: str | None,
    ) -> MessageKeyWithVersion:
        type_id = next(
            (c.item.message_type_id for c in changes if c.item.message_type_id is not None),
            None,
        )
        category_id = next(
            (c.item.category_id for c in changes if c.item.category_id is not None), None
        )
        if type_id is None or category_id is None:
            raise ValidationException(
                "messageTypeId and categoryId are required for new message keys",
                field="messageTypeId",
            )
        display_name = next(
            (c.item.display_name for c in changes if c.item.display_name), None
        )
        return await self.message_key_service.create(
            CreateMessageKeyCommand(
                message_store_id=message_store_id,
                message_key=message_key,
                message_type_id=type_id,
                category_id=category_id,
                languages=[to_content_block(c.item) for c in changes],
                display_name=display_name,
                created_by=imported_by,
            ),
            audit_action=MessageKeyAuditAction.IMPORTED,
            default_actor=IMPORT_ACTOR,
        )
