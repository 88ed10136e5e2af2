"""Persistent ordered entity log.

This module keeps an ordered entity sequence bound to one JSON file.
Saving writes a full snapshot atomically; loading replaces the whole
sequence only after every record in the file decoded successfully.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Generic, Iterable, TypeVar

from core.constants import (
    DEFAULT_JSON_INDENT,
    FILE_ENCODING,
    LOAD_OPERATION,
    SAVE_OPERATION,
    TEMP_FILE_SUFFIX,
)
from core.entities import Entity
from core.errors import EntityCodecError, PersistenceError
from core.logging_config import get_logger
from store.entity_payload import entity_from_payload, entity_to_payload
from store.keyed_store import KeyedStore

_LOGGER = get_logger(__name__)

T = TypeVar("T", bound=Entity)


class PersistentLog(Generic[T]):
    """Ordered entity sequence with full-snapshot file persistence.

    Duplicate ids are allowed; uniqueness belongs to ``KeyedStore``.
    """

    def __init__(
        self,
        file_path: Path,
        entity_type: type[T],
        json_indent: int = DEFAULT_JSON_INDENT,
    ) -> None:
        """Initialize an empty log bound to a file path.

        Args:
            file_path: JSON file used by save and load.
            entity_type: Entity dataclass stored in this log.
            json_indent: Indentation used when writing the file.
        """
        self._file_path = Path(file_path)
        self._entity_type = entity_type
        self._json_indent = json_indent
        self._entries: list[T] = []

    @classmethod
    def from_store(
        cls,
        store: KeyedStore[T],
        file_path: Path,
        entity_type: type[T],
        json_indent: int = DEFAULT_JSON_INDENT,
    ) -> "PersistentLog[T]":
        """Build a log populated with a snapshot of a keyed store."""
        log = cls(file_path, entity_type, json_indent=json_indent)
        log.extend(store.get_all())
        return log

    @property
    def path(self) -> Path:
        return self._file_path

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, entity: T) -> None:
        """Append one entity to the in-memory sequence."""
        self._entries.append(entity)

    def extend(self, entities: Iterable[T]) -> None:
        """Append entities in iteration order."""
        self._entries.extend(entities)

    def get_all(self) -> list[T]:
        """Return a copy of the sequence in append order."""
        return list(self._entries)

    def save_to_file(self) -> None:
        """Write the full sequence to the bound file.

        The payload goes to a sibling temp file which then replaces the
        target, so readers never observe a partially written log.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        try:
            payload = [entity_to_payload(entity) for entity in self._entries]
            text = json.dumps(payload, indent=self._json_indent, ensure_ascii=False) + "\n"
        except (TypeError, ValueError) as error:
            _LOGGER.warning("log_save_failed", path=str(self._file_path), error=str(error))
            raise PersistenceError(self._file_path, SAVE_OPERATION, error) from error
        temp_path = self._file_path.with_name(self._file_path.name + TEMP_FILE_SUFFIX)
        try:
            with temp_path.open("w", encoding=FILE_ENCODING) as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_path, self._file_path)
            _fsync_directory(self._file_path.parent)
        except OSError as error:
            _discard_temp_file(temp_path)
            _LOGGER.warning("log_save_failed", path=str(self._file_path), error=str(error))
            raise PersistenceError(self._file_path, SAVE_OPERATION, error) from error
        _LOGGER.info("log_saved", path=str(self._file_path), count=len(payload))

    def load_from_file(self) -> None:
        """Replace the sequence with the entities stored in the bound file.

        A missing file leaves the sequence unchanged.

        Raises:
            PersistenceError: If the file cannot be read or decoded. The
                in-memory sequence is left unchanged.
        """
        try:
            text = self._file_path.read_text(encoding=FILE_ENCODING)
        except FileNotFoundError:
            _LOGGER.info("log_load_skipped", path=str(self._file_path), reason="missing_file")
            return
        except OSError as error:
            _LOGGER.warning("log_load_failed", path=str(self._file_path), error=str(error))
            raise PersistenceError(self._file_path, LOAD_OPERATION, error) from error
        try:
            entries = self._decode_entries(text)
        except (ValueError, RecursionError) as error:
            _LOGGER.warning("log_load_failed", path=str(self._file_path), error=str(error))
            raise PersistenceError(self._file_path, LOAD_OPERATION, error) from error
        self._entries = entries
        _LOGGER.info("log_loaded", path=str(self._file_path), count=len(entries))

    def _decode_entries(self, text: str) -> list[T]:
        """Decode every record in the file content.

        Raises:
            ValueError: If content is not a JSON array of valid records.
        """
        payload: Any = json.loads(text)
        if not isinstance(payload, list):
            raise EntityCodecError(
                f"expected JSON array at top level, got {type(payload).__name__}"
            )
        entries: list[T] = []
        for index, item_payload in enumerate(payload):
            try:
                entries.append(entity_from_payload(self._entity_type, item_payload))
            except EntityCodecError as error:
                raise EntityCodecError(f"record {index}: {error}") from error
        return entries


def _discard_temp_file(temp_path: Path) -> None:
    """Remove a leftover temp file after a failed save."""
    try:
        temp_path.unlink(missing_ok=True)
    except OSError as error:
        _LOGGER.warning("temp_file_cleanup_failed", path=str(temp_path), error=str(error))


def _fsync_directory(directory: Path) -> None:
    """Flush a directory entry so a completed rename survives a crash."""
    if os.name != "posix":
        return
    descriptor = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(descriptor)
    finally:
        os.close(descriptor)
