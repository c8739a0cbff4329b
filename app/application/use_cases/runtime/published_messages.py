"""Runtime read path: published content only, cache-aside."""

from __future__ import annotations

from app.application.dtos.runtime import PublishedMessage
from app.application.interfaces.repositories import IMessageKeyRepository
from app.application.interfaces.services import IRuntimeMessageCache
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.domain.value_objects.core import LanguageCode, MessageKeyName
from app.shared.telemetry.tracing import traced


def _language(value: str) -> str:
    try:
        return LanguageCode(value).value
    except ValueError as e:
        raise ValidationException(str(e), field="language") from e


def _message_key(value: str) -> str:
    try:
        return MessageKeyName(value).value
    except ValueError as e:
        raise ValidationException(str(e), field="messageKey") from e


class RuntimeMessageService:
    """Serves published messages to runtime consumers; drafts are never visible."""

    def __init__(
        self,
        message_key_repo: IMessageKeyRepository,
        cache: IRuntimeMessageCache | None = None,
    ) -> None:
        self.message_key_repo = message_key_repo
        self.cache = cache

    @traced("runtime.fetch_message")
    async def fetch_message(
        self, message_store_id: int, message_key: str, language: str
    ) -> PublishedMessage:
        """Return published content of a key in a language.

        Raises:
            ValidationException: If the key or language is malformed.
            ResourceNotFoundException: If the key is unknown, unpublished, or
                its published version lacks the language.
        """
        _message_key(message_key)
        _language(language)
        if self.cache is not None:
            hit = await self.cache.get_message(message_store_id, message_key, language)
            if hit is not None:
                return hit
        message = await self.message_key_repo.get_published_message(
            message_store_id, message_key, language
        )
        if message is None:
            raise ResourceNotFoundException(
                "published_message", f"{message_store_id}/{message_key}/{language}"
            )
        if self.cache is not None:
            await self.cache.set_message(message)
        return message

    @traced("runtime.fetch_store")
    async def fetch_store(
        self, message_store_id: int, language: str
    ) -> list[PublishedMessage]:
        """Return every published message of the store in a language (may be empty)."""
        _language(language)
        if self.cache is not None:
            hit = await self.cache.get_store(message_store_id, language)
            if hit is not None:
                return hit
        messages = await self.message_key_repo.list_published_messages(
            message_store_id, language
        )
        if self.cache is not None:
            await self.cache.set_store(message_store_id, language, messages)
        return messages
