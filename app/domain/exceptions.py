"""Domain exceptions for the message store.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class MessageStoreException(Exception):
    """Base exception for all message store errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, message_key).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the API."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(MessageStoreException):
    """Raised when input validation fails (e.g. blank content or malformed language code)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(MessageStoreException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'message_key', 'version').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class MessageKeyAlreadyExistsException(MessageStoreException):
    """Raised when creating a message key that already exists in the store."""

    def __init__(self, message_store_id: int, message_key: str) -> None:
        super().__init__(
            f"Message key '{message_key}' already exists in store {message_store_id}",
            "MESSAGE_KEY_EXISTS",
            {"message_store_id": message_store_id, "message_key": message_key},
        )


class VersionConflictException(MessageStoreException):
    """Raised when concurrent writers keep colliding on the next version number."""

    def __init__(self, message_store_id: int, message_key: str, attempts: int) -> None:
        super().__init__(
            f"Message key '{message_key}' was modified concurrently; retry.",
            "VERSION_CONFLICT",
            {
                "message_store_id": message_store_id,
                "message_key": message_key,
                "attempts": attempts,
            },
        )


class SqlNotConfiguredException(MessageStoreException):
    """Raised when an operation requires the SQL database but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
