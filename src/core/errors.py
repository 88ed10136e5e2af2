"""Keeplog exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Store validation and log persistence each raise a specific error type.
"""

from __future__ import annotations

from pathlib import Path


class KeeplogError(Exception):
    """Base exception for all Keeplog failures."""


class KeeplogConfigError(KeeplogError):
    """Raised for invalid runtime configuration."""


class KeeplogStoreError(KeeplogError):
    """Raised for keyed store validation failures."""


class DuplicateKeyError(KeeplogStoreError):
    """Raised when an entity id is already present in a store."""

    def __init__(self, entity_id: int) -> None:
        super().__init__(
            f"Entity id {entity_id} already exists in store. "
            "Use a unique id or remove the existing entity first."
        )
        self.entity_id = entity_id


class NotFoundError(KeeplogStoreError):
    """Raised when no entity with the requested id is present."""

    def __init__(self, entity_id: int) -> None:
        super().__init__(f"Entity id {entity_id} not found in store.")
        self.entity_id = entity_id


class InvalidValueError(KeeplogStoreError):
    """Raised when a field update violates a domain constraint."""

    def __init__(self, entity_id: int, reason: str) -> None:
        super().__init__(f"Invalid value for entity id {entity_id}: {reason}.")
        self.entity_id = entity_id
        self.reason = reason


class EntityCodecError(ValueError):
    """Raised when a serialized payload does not match its entity type."""


class PersistenceError(KeeplogError):
    """Raised when saving or loading a persistent log fails.

    Attributes:
        path: File path bound to the failing log.
        operation: Either ``"save"`` or ``"load"``.
        cause: Underlying exception.
    """

    def __init__(self, path: Path, operation: str, cause: BaseException) -> None:
        super().__init__(f"Failed to {operation} log at {path}: {cause}")
        self.path = path
        self.operation = operation
        self.cause = cause
