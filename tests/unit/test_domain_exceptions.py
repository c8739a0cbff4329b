"""Tests for domain and storage exceptions (error_code, message, details, to_dict)."""

from app.domain.exceptions import (
    MessageKeyAlreadyExistsException,
    MessageStoreException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
    VersionConflictException,
)
from app.infrastructure.exceptions import StorageException


def test_base_exception_default_error_code() -> None:
    """Base MessageStoreException uses class name as error_code when not provided."""
    exc = MessageStoreException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "MessageStoreException"
    assert exc.details == {}


def test_to_dict_shape() -> None:
    exc = MessageStoreException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception_field() -> None:
    exc = ValidationException("bad", field="language")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "language"}
    assert ValidationException("bad").details == {}


def test_not_found() -> None:
    exc = ResourceNotFoundException("message_key", "1/WELCOME")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert "1/WELCOME" in exc.message
    assert exc.details["resource_type"] == "message_key"


def test_already_exists() -> None:
    exc = MessageKeyAlreadyExistsException(7, "WELCOME")
    assert exc.error_code == "MESSAGE_KEY_EXISTS"
    assert exc.details == {"message_store_id": 7, "message_key": "WELCOME"}


def test_version_conflict_reports_attempts() -> None:
    exc = VersionConflictException(7, "WELCOME", 5)
    assert exc.error_code == "VERSION_CONFLICT"
    assert exc.details["attempts"] == 5


def test_sql_not_configured_and_storage() -> None:
    assert SqlNotConfiguredException().error_code == "SERVICE_UNAVAILABLE"
    storage = StorageException("insert_version", "OperationalError")
    assert storage.error_code == "STORAGE_ERROR"
    assert storage.details == {"operation": "insert_version", "reason": "OperationalError"}
    assert isinstance(storage, MessageStoreException)
