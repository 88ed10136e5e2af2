"""Identity-keyed in-memory entity store.

This module enforces id uniqueness and not-found signaling for a typed
collection of entities. Failing operations never mutate the store.
"""

from __future__ import annotations

from typing import Callable, Generic, Hashable, Iterator, TypeVar

from core.entities import Entity, QuantifiedEntity
from core.errors import DuplicateKeyError, InvalidValueError, NotFoundError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)

T = TypeVar("T", bound=Entity)
K = TypeVar("K", bound=Hashable)


class KeyedStore(Generic[T]):
    """In-memory collection of entities keyed by their unique id.

    Entries keep insertion order. The store owns every entity it holds
    until the entity is explicitly removed.
    """

    def __init__(self) -> None:
        self._entities: dict[int, T] = {}

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def __iter__(self) -> Iterator[T]:
        return iter(self.get_all())

    def add(self, entity: T) -> None:
        """Insert an entity under its id.

        Args:
            entity: Entity to store.

        Raises:
            DuplicateKeyError: If an entity with the same id is present.
        """
        if entity.id in self._entities:
            raise DuplicateKeyError(entity.id)
        self._entities[entity.id] = entity
        _LOGGER.debug("entity_added", entity_id=entity.id, entity_type=type(entity).__name__)

    def get_by_id(self, entity_id: int) -> T:
        """Return the entity stored under ``entity_id``.

        Raises:
            NotFoundError: If the id is absent.
        """
        try:
            return self._entities[entity_id]
        except KeyError:
            raise NotFoundError(entity_id) from None

    def remove(self, entity_id: int) -> None:
        """Delete the entity stored under ``entity_id``.

        Raises:
            NotFoundError: If the id is absent.
        """
        if entity_id not in self._entities:
            raise NotFoundError(entity_id)
        del self._entities[entity_id]
        _LOGGER.debug("entity_removed", entity_id=entity_id)

    def update_quantity(self: KeyedStore[QuantifiedEntity], entity_id: int, quantity: int) -> None:
        """Set the quantity of a stored entity in place.

        Args:
            entity_id: Id of the entity to update.
            quantity: New non-negative quantity.

        Raises:
            InvalidValueError: If quantity is negative.
            NotFoundError: If the id is absent.
        """
        if quantity < 0:
            raise InvalidValueError(entity_id, f"quantity cannot be negative, got {quantity}")
        entity = self.get_by_id(entity_id)
        entity.quantity = quantity
        _LOGGER.debug("quantity_updated", entity_id=entity_id, quantity=quantity)

    def get_all(self) -> list[T]:
        """Return a snapshot list of all entities in insertion order."""
        return list(self._entities.values())

    def find(self, predicate: Callable[[T], bool]) -> T | None:
        """Return the first entity matching ``predicate``, if any."""
        for entity in self._entities.values():
            if predicate(entity):
                return entity
        return None

    def group_by(self, key: Callable[[T], K]) -> dict[K, list[T]]:
        """Group entities by a derived key, preserving insertion order.

        Args:
            key: Function deriving the grouping key from an entity.

        Returns:
            Mapping from key to entities sharing it.
        """
        groups: dict[K, list[T]] = {}
        for entity in self._entities.values():
            groups.setdefault(key(entity), []).append(entity)
        return groups
