"""Message key aggregate use cases: create, read, list, metadata update, version reads."""

from __future__ import annotations

from app.application.dtos.message_key import (
    CreateMessageKeyCommand,
    MessageKeyCreate,
    MessageKeyResult,
    MessageKeyWithVersion,
    UpdateMessageKeyCommand,
    VersionResult,
    VersionSummary,
    VersionToPersist,
)
from app.application.interfaces.repositories import IMessageKeyRepository
from app.application.services.message_key_audit import (
    MessageKeyAuditService,
    resolve_actor,
)
from app.core.constants import (
    DEFAULT_ACTOR,
    DESCRIPTION_MAX_LENGTH,
    DISPLAY_NAME_MAX_LENGTH,
    VERSION_NAME_MAX_LENGTH,
)
from app.domain.entities.content_block import validate_language_set
from app.domain.enums import MessageKeyAuditAction
from app.domain.exceptions import (
    MessageKeyAlreadyExistsException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects.core import MessageKeyName
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import traced

logger = get_logger(__name__)


def default_version_name(version: int) -> str:
    return f"v{version}"


def validate_message_key(message_key: str) -> str:
    """Return message_key if well-formed.

    Raises:
        ValidationException: If the key is empty or not upper snake case.
    """
    try:
        return MessageKeyName(message_key).value
    except ValueError as e:
        raise ValidationException(str(e), field="messageKey") from e


def validate_version_name(version_name: str | None) -> str | None:
    if version_name is not None and len(version_name) > VERSION_NAME_MAX_LENGTH:
        raise ValidationException(
            f"Version name must not exceed {VERSION_NAME_MAX_LENGTH} characters",
            field="versionName",
        )
    return version_name or None


def validate_metadata(display_name: str | None, description: str | None) -> None:
    if display_name is not None and len(display_name) > DISPLAY_NAME_MAX_LENGTH:
        raise ValidationException(
            f"Display name must not exceed {DISPLAY_NAME_MAX_LENGTH} characters",
            field="displayName",
        )
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationException(
            f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters",
            field="description",
        )


class MessageKeyService:
    """Creates message keys with their first version and serves key/version reads."""

    def __init__(
        self,
        message_key_repo: IMessageKeyRepository,
        audit_service: MessageKeyAuditService,
    ) -> None:
        self.message_key_repo = message_key_repo
        self.audit_service = audit_service

    async def get(self, message_store_id: int, message_key: str) -> MessageKeyResult:
        """Return key or raise ResourceNotFoundException."""
        key = await self.message_key_repo.get_by_key(message_store_id, message_key)
        if key is None:
            raise ResourceNotFoundException(
                "message_key", f"{message_store_id}/{message_key}"
            )
        return key

    async def list_keys(self, message_store_id: int) -> list[MessageKeyResult]:
        return await self.message_key_repo.list_by_store(message_store_id)

    @traced("message_key.create")
    async def create(
        self,
        command: CreateMessageKeyCommand,
        *,
        audit_action: MessageKeyAuditAction = MessageKeyAuditAction.CREATED,
        default_actor: str | None = None,
    ) -> MessageKeyWithVersion:
        """Create a key and its version 1 (draft) atomically.

        Args:
            command: Key metadata and the initial language set.
            audit_action: Action recorded for the creation (imports record 'imported').
            default_actor: Actor used when neither command nor request names one.

        Returns:
            The created key (latest_version=1, no published version) and version 1.

        Raises:
            ValidationException: If the key, a language or any content is invalid.
            MessageKeyAlreadyExistsException: If (store, key) already exists.
        """
        validate_message_key(command.message_key)
        validate_language_set(command.languages)
        validate_metadata(command.display_name, command.description)
        version_name = validate_version_name(command.version_name)
        actor = resolve_actor(command.created_by, default_actor or DEFAULT_ACTOR)

        async with self.message_key_repo.locked(
            command.message_store_id, command.message_key
        ) as existing:
            if existing is not None:
                raise MessageKeyAlreadyExistsException(
                    command.message_store_id, command.message_key
                )
            row = await self.message_key_repo.create_key(
                MessageKeyCreate(
                    message_store_id=command.message_store_id,
                    message_key=command.message_key,
                    message_type_id=command.message_type_id,
                    category_id=command.category_id,
                    display_name=command.display_name,
                    description=command.description,
                    created_by=actor,
                )
            )
            version = await self.message_key_repo.insert_version(
                row.id,
                VersionToPersist(
                    version=1,
                    version_name=version_name or default_version_name(1),
                    blocks=tuple(command.languages),
                    created_by=actor,
                ),
            )
            key = await self.get(command.message_store_id, command.message_key)
            await self.audit_service.record_created(key, version, actor, audit_action)

        logger.info(
            "Created message key %s in store %s with languages %s",
            command.message_key,
            command.message_store_id,
            ",".join(version.languages),
        )
        return MessageKeyWithVersion(key=key, version=version)

    async def update(self, command: UpdateMessageKeyCommand) -> MessageKeyResult:
        """Update display name / description. Versions are never touched.

        Raises:
            ResourceNotFoundException: If the key does not exist.
            ValidationException: If a field is too long.
        """
        validate_metadata(command.display_name, command.description)
        actor = resolve_actor(command.updated_by)
        async with self.message_key_repo.locked(
            command.message_store_id, command.message_key
        ) as existing:
            if existing is None:
                raise ResourceNotFoundException(
                    "message_key", f"{command.message_store_id}/{command.message_key}"
                )
            return await self.message_key_repo.update_metadata(
                existing.id, command.display_name, command.description, actor
            )

    async def list_versions(
        self, message_store_id: int, message_key: str
    ) -> list[VersionSummary]:
        """Return version summaries, newest first."""
        key = await self.get(message_store_id, message_key)
        return await self.message_key_repo.list_versions(key.id)

    async def get_version(
        self, message_store_id: int, message_key: str, version: int
    ) -> VersionResult:
        """Return one version with all its content.

        Raises:
            ResourceNotFoundException: If the key or the version does not exist.
        """
        key = await self.get(message_store_id, message_key)
        result = await self.message_key_repo.get_version(key.id, version)
        if result is None:
            raise ResourceNotFoundException("version", f"{message_key}@{version}")
        return result
