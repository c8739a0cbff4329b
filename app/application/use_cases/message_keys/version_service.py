"""Version creation (copy-on-write) and the publish state machine.

Both run under the per-key lock from IMessageKeyRepository.locked(). A
version number collision (another writer inserted latest+1 first) rolls
back the attempt and retries against the fresh latest_version.
"""

from __future__ import annotations

from functools import partial

from app.application.dtos.message_key import (
    CreateVersionCommand,
    MessageKeyResult,
    MessageKeyWithVersion,
    VersionToPersist,
)
from app.application.interfaces.repositories import IMessageKeyRepository
from app.application.interfaces.services import (
    IPostCommitHooks,
    IRuntimeMessageCache,
)
from app.application.services.message_key_audit import (
    MessageKeyAuditService,
    resolve_actor,
    validate_reason,
)
from app.application.use_cases.message_keys.message_key_service import (
    default_version_name,
    validate_version_name,
)
from app.core.constants import DEFAULT_ACTOR
from app.domain.entities.content_block import merge_language_updates
from app.domain.entities.message_key import MessageKeyEntity
from app.domain.enums import MessageKeyAuditAction
from app.domain.exceptions import (
    ResourceNotFoundException,
    ValidationException,
    VersionConflictException,
)
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced

logger = get_logger(__name__)


def to_entity(key: MessageKeyResult) -> MessageKeyEntity:
    """Map MessageKeyResult (application DTO) to MessageKeyEntity (domain entity)."""
    return MessageKeyEntity(
        message_store_id=key.message_store_id,
        message_key=key.message_key,
        latest_version=key.latest_version,
        published_version=key.published_version,
    )


def _not_found(message_store_id: int, message_key: str) -> ResourceNotFoundException:
    return ResourceNotFoundException("message_key", f"{message_store_id}/{message_key}")


class VersionService:
    """createVersion, publish and rollback for one message key at a time."""

    def __init__(
        self,
        message_key_repo: IMessageKeyRepository,
        audit_service: MessageKeyAuditService,
        runtime_cache: IRuntimeMessageCache | None = None,
        max_attempts: int = 5,
        max_versions: int | None = None,
        post_commit: IPostCommitHooks | None = None,
    ) -> None:
        self.message_key_repo = message_key_repo
        self.audit_service = audit_service
        self.runtime_cache = runtime_cache
        self.max_attempts = max_attempts
        self.max_versions = max_versions
        self.post_commit = post_commit

    @traced("message_key.create_version")
    async def create_version(
        self,
        command: CreateVersionCommand,
        *,
        audit_action: MessageKeyAuditAction | None = None,
        default_actor: str | None = None,
    ) -> MessageKeyWithVersion:
        """Create version latest+1 from a base version plus language overrides.

        Args:
            command: Key, optional base version (published, else latest) and overrides.
            audit_action: Forces the recorded action (imports record 'imported');
                otherwise 'language_added' when languages were introduced, else 'edited'.
            default_actor: Actor used when neither command nor request names one.

        Returns:
            The key after the write and the new (draft) version.

        Raises:
            ResourceNotFoundException: If the key or base version does not exist.
            ValidationException: If the overrides or resulting set are invalid.
            VersionConflictException: If every attempt collided with a concurrent writer.
        """
        if not command.language_updates:
            raise ValidationException(
                "At least one language update is required", field="languageUpdates"
            )
        version_name = validate_version_name(command.version_name)
        actor = resolve_actor(command.created_by, default_actor or DEFAULT_ACTOR)

        for attempt in range(1, self.max_attempts + 1):
            try:
                async with self.message_key_repo.locked(
                    command.message_store_id, command.message_key
                ) as current:
                    if current is None:
                        raise _not_found(command.message_store_id, command.message_key)
                    result = await self._create_version_locked(
                        current, command, version_name, actor, audit_action
                    )
            except VersionConflictException:
                logger.warning(
                    "Version number collision on %s/%s (attempt %s/%s)",
                    command.message_store_id,
                    command.message_key,
                    attempt,
                    self.max_attempts,
                )
                continue
            logger.info(
                "Created version %s of %s/%s",
                result.version.version,
                command.message_store_id,
                command.message_key,
            )
            return result

        raise VersionConflictException(
            command.message_store_id, command.message_key, self.max_attempts
        )

    async def _create_version_locked(
        self,
        current: MessageKeyResult,
        command: CreateVersionCommand,
        version_name: str | None,
        actor: str,
        audit_action: MessageKeyAuditAction | None,
    ) -> MessageKeyWithVersion:
        entity = to_entity(current)
        base_number = (
            entity.editing_base()
            if command.base_version is None
            else command.base_version
        )
        base = await self.message_key_repo.get_version(current.id, base_number)
        if base is None:
            raise ResourceNotFoundException(
                "version", f"{command.message_key}@{base_number}"
            )

        merged = merge_language_updates(base.blocks, command.language_updates)
        number = entity.next_version(self.max_versions)
        add_span_attributes(**{"version.number": number})
        version = await self.message_key_repo.insert_version(
            current.id,
            VersionToPersist(
                version=number,
                version_name=version_name or default_version_name(number),
                blocks=merged.blocks,
                created_by=actor,
            ),
        )
        key = await self.message_key_repo.get_by_key(
            command.message_store_id, command.message_key
        )
        if key is None:
            raise _not_found(command.message_store_id, command.message_key)

        if audit_action is None:
            audit_action = (
                MessageKeyAuditAction.LANGUAGE_ADDED
                if merged.added_languages
                else MessageKeyAuditAction.EDITED
            )
        await self.audit_service.record_new_version(
            key,
            version,
            base_number,
            list(merged.updated_languages),
            list(merged.added_languages),
            actor,
            audit_action,
        )
        return MessageKeyWithVersion(key=key, version=version)

    @traced("message_key.publish")
    async def publish(
        self,
        message_store_id: int,
        message_key: str,
        version: int,
        published_by: str | None = None,
        reason: str | None = None,
        *,
        as_rollback: bool = False,
    ) -> MessageKeyResult:
        """Point the key's published_version at `version`.

        Publishing the already-live version is a no-op (no audit record).
        The record is 'rollback' when the target is lower than the version
        live before (or always, for an explicit rollback), else 'published'.

        Raises:
            ResourceNotFoundException: If the key or version does not exist.
            ValidationException: If reason or actor are invalid.
        """
        actor = resolve_actor(published_by)
        reason = validate_reason(reason)

        async with self.message_key_repo.locked(message_store_id, message_key) as current:
            if current is None:
                raise _not_found(message_store_id, message_key)
            target = await self.message_key_repo.get_version(current.id, version)
            if target is None:
                raise ResourceNotFoundException("version", f"{message_key}@{version}")

            decision = to_entity(current).plan_publish(version, as_rollback=as_rollback)
            add_span_attributes(
                **{"publish.target_version": version, "publish.noop": decision.is_noop}
            )
            if decision.is_noop:
                logger.debug(
                    "Version %s of %s/%s already published",
                    version,
                    message_store_id,
                    message_key,
                )
                return current

            key = await self.message_key_repo.set_published_version(
                current.id, version, actor
            )
            await self.audit_service.record_publish(key, decision, target, actor, reason)

        await self._invalidate_runtime(message_store_id, message_key)
        logger.info(
            "Pointer change (%s) on %s/%s: %s -> %s",
            decision.action.value if decision.action else None,
            message_store_id,
            message_key,
            decision.previous_version,
            decision.target_version,
        )
        return key

    async def rollback(
        self,
        message_store_id: int,
        message_key: str,
        version: int,
        rolled_back_by: str | None = None,
        reason: str | None = None,
    ) -> MessageKeyResult:
        """Re-publish an earlier version, recorded as 'rollback'."""
        return await self.publish(
            message_store_id,
            message_key,
            version,
            rolled_back_by,
            reason,
            as_rollback=True,
        )

    async def _invalidate_runtime(self, message_store_id: int, message_key: str) -> None:
        """Drop cached runtime content of the key once the pointer change is visible.

        With post-commit hooks the drop runs only after the commit, so readers
        never refill the cache from the pre-publish state.
        """
        if self.runtime_cache is None:
            return
        invalidate = partial(self.runtime_cache.invalidate_key, message_store_id, message_key)
        if self.post_commit is None:
            await invalidate()
        else:
            self.post_commit.add(invalidate)
