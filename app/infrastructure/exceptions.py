"""Infrastructure exceptions for persistence operations.

Storage errors extend MessageStoreException so presentation can map them
to HTTP responses consistently.
"""

from app.domain.exceptions import MessageStoreException


class StorageException(MessageStoreException):
    """Underlying persistence failure (connection loss, driver error).

    Callers may retry the whole operation.
    """

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Storage failure during {operation}",
            "STORAGE_ERROR",
            {"operation": operation, "reason": reason},
        )
