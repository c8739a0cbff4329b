"""Domain value objects for the message store.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

from app.core.constants import (
    LANGUAGE_CODE_MAX_LENGTH,
    LANGUAGE_CODE_PATTERN,
    MESSAGE_KEY_MAX_LENGTH,
    MESSAGE_KEY_PATTERN,
)

_LANGUAGE_RE = re.compile(LANGUAGE_CODE_PATTERN)
_MESSAGE_KEY_RE = re.compile(MESSAGE_KEY_PATTERN)


@dataclass(frozen=True)
class LanguageCode:
    """Value object for a BCP-47-like language code (e.g. 'nl-BE', 'en-US').

    Language existence is owned by the dictionary subsystem; only the
    format is checked here.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate non-empty, length, and format.

        Raises:
            ValueError: If the code is empty, too long, or malformed.
        """
        if not self.value:
            raise ValueError("Language code must be a non-empty string")
        if len(self.value) > LANGUAGE_CODE_MAX_LENGTH:
            raise ValueError(
                f"Language code must not exceed {LANGUAGE_CODE_MAX_LENGTH} characters"
            )
        if not _LANGUAGE_RE.fullmatch(self.value):
            raise ValueError(
                f"Language code must look like 'nl-BE' or 'en', got {self.value!r}"
            )


@dataclass(frozen=True)
class MessageKeyName:
    """Value object for a message key identifier (e.g. 'WELCOME', 'MAIN_MENU_1').

    Upper snake case starting with a letter, max 64 characters.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Message key must be a non-empty string")
        if len(self.value) > MESSAGE_KEY_MAX_LENGTH:
            raise ValueError(
                f"Message key must not exceed {MESSAGE_KEY_MAX_LENGTH} characters"
            )
        if not _MESSAGE_KEY_RE.fullmatch(self.value):
            raise ValueError(
                "Message key must be upper snake case starting with a letter "
                f"(e.g. 'WELCOME', 'MAIN_MENU_1'), got {self.value!r}"
            )
