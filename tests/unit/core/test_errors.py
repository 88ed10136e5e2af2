"""Unit tests for error payload fields."""

from __future__ import annotations

from pathlib import Path

from core.errors import (
    DuplicateKeyError,
    InvalidValueError,
    KeeplogError,
    KeeplogStoreError,
    NotFoundError,
    PersistenceError,
)


def test_store_errors_share_store_base() -> None:
    """Validation errors should be catchable as store errors."""
    errors = [DuplicateKeyError(1), NotFoundError(2), InvalidValueError(3, "negative")]

    assert all(isinstance(error, KeeplogStoreError) for error in errors)


def test_invalid_value_error_carries_reason() -> None:
    """Invalid value errors should expose id and reason."""
    error = InvalidValueError(7, "quantity cannot be negative")

    assert (error.entity_id, error.reason) == (7, "quantity cannot be negative")


def test_persistence_error_carries_path_operation_and_cause() -> None:
    """Persistence errors should distinguish path, operation, and cause."""
    cause = PermissionError("denied")
    error = PersistenceError(Path("log.json"), "save", cause)

    assert isinstance(error, KeeplogError)
    assert error.path == Path("log.json")
    assert error.operation == "save"
    assert error.cause is cause
    assert "log.json" in str(error)
