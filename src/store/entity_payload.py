"""Shared JSON serialization for entity payloads.

This module converts entity dataclasses to JSON-safe dictionaries and
back, keeping field names and value types lossless across a save/load.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, TypeVar, get_type_hints

from core.entities import (
    ElectronicItem,
    GroceryItem,
    InventoryItem,
    Patient,
    Prescription,
    Student,
    Transaction,
)
from core.errors import EntityCodecError

T = TypeVar("T")

ENTITY_KINDS: dict[str, type[Any]] = {
    "inventory_item": InventoryItem,
    "electronic_item": ElectronicItem,
    "grocery_item": GroceryItem,
    "patient": Patient,
    "prescription": Prescription,
    "transaction": Transaction,
    "student": Student,
}


def entity_kind(kind_name: str) -> type[Any]:
    """Resolve a registered entity type by kind name.

    Args:
        kind_name: Snake-case kind name, e.g. ``inventory_item``.

    Returns:
        Entity dataclass type.

    Raises:
        EntityCodecError: If the kind is not registered.
    """
    entity_type = ENTITY_KINDS.get(kind_name)
    if entity_type is None:
        supported = ", ".join(sorted(ENTITY_KINDS))
        raise EntityCodecError(
            f"Unsupported entity kind '{kind_name}'. Use one of: {supported}."
        )
    return entity_type


def entity_to_payload(entity: Any) -> dict[str, object]:
    """Serialize an entity dataclass into a JSON-safe payload.

    Args:
        entity: Entity dataclass instance.

    Returns:
        Dictionary payload in field declaration order.
    """
    if not is_dataclass(entity) or isinstance(entity, type):
        raise EntityCodecError(f"Cannot serialize {type(entity).__name__}: not an entity dataclass")
    return {field.name: _encode_value(getattr(entity, field.name)) for field in fields(entity)}


def entity_from_payload(entity_type: type[T], payload: Any) -> T:
    """Deserialize a JSON payload into an entity of the given type.

    Args:
        entity_type: Entity dataclass type.
        payload: Parsed JSON object.

    Returns:
        Parsed entity instance.

    Raises:
        EntityCodecError: If fields are missing, unexpected, or mistyped.
    """
    if not isinstance(payload, dict):
        raise EntityCodecError(
            f"Invalid {entity_type.__name__} payload: expected JSON object, "
            f"got {type(payload).__name__}"
        )
    field_types = _field_types(entity_type)
    missing = [name for name in field_types if name not in payload]
    unexpected = [str(name) for name in payload if name not in field_types]
    if missing or unexpected:
        raise EntityCodecError(
            f"Invalid {entity_type.__name__} payload: "
            f"missing fields {missing}, unexpected fields {unexpected}"
        )
    values = {
        name: _decode_value(entity_type, name, field_type, payload[name])
        for name, field_type in field_types.items()
    }
    return entity_type(**values)


def _field_types(entity_type: type[Any]) -> dict[str, Any]:
    """Map dataclass field names to resolved annotations."""
    if not is_dataclass(entity_type):
        raise EntityCodecError(f"{entity_type.__name__} is not an entity dataclass")
    hints = get_type_hints(entity_type)
    return {field.name: hints[field.name] for field in fields(entity_type)}


def _encode_value(value: object) -> object:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise EntityCodecError(f"Cannot serialize non-finite decimal {value!r}")
        return str(value)
    return value


def _decode_value(entity_type: type[Any], name: str, field_type: Any, raw_value: object) -> object:
    """Coerce one raw JSON value to its annotated field type."""
    decoder = _DECODERS.get(field_type)
    if decoder is None:
        raise EntityCodecError(
            f"Unsupported field type {field_type!r} for {entity_type.__name__}.{name}"
        )
    try:
        return decoder(raw_value)
    except (TypeError, ValueError, InvalidOperation) as error:
        raise EntityCodecError(
            f"Invalid value for {entity_type.__name__}.{name}: {error}"
        ) from error


def _decode_int(raw_value: object) -> int:
    if isinstance(raw_value, bool) or not isinstance(raw_value, int):
        raise TypeError(f"expected integer, got {raw_value!r}")
    return raw_value


def _decode_str(raw_value: object) -> str:
    if not isinstance(raw_value, str):
        raise TypeError(f"expected string, got {raw_value!r}")
    return raw_value


def _decode_datetime(raw_value: object) -> datetime:
    return datetime.fromisoformat(_decode_str(raw_value))


def _decode_date(raw_value: object) -> date:
    return date.fromisoformat(_decode_str(raw_value))


def _decode_decimal(raw_value: object) -> Decimal:
    amount = Decimal(_decode_str(raw_value))
    if not amount.is_finite():
        raise ValueError(f"expected finite decimal, got {raw_value!r}")
    return amount


_DECODERS: dict[Any, Callable[[object], object]] = {
    int: _decode_int,
    str: _decode_str,
    datetime: _decode_datetime,
    date: _decode_date,
    Decimal: _decode_decimal,
}
