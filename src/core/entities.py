"""Entity models shared by stores and persistent logs.

This module defines the identity protocol every stored entity follows
and the concrete record kinds used by the inventory, warehouse,
healthcare, finance, and grading workflows.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Protocol


class Entity(Protocol):
    """Record exposing a stable integer identity."""

    @property
    def id(self) -> int: ...


class QuantifiedEntity(Entity, Protocol):
    """Entity carrying a mutable non-negative quantity."""

    quantity: int


@dataclass
class InventoryItem:
    """Inventory log entry.

    Attributes:
        id: Unique item id.
        name: Item display name.
        quantity: Units on hand.
        date_added: Timestamp when the item was recorded.
    """

    id: int
    name: str
    quantity: int
    date_added: datetime


@dataclass
class ElectronicItem:
    """Warehouse electronics stock entry."""

    id: int
    name: str
    quantity: int
    brand: str
    warranty_months: int


@dataclass
class GroceryItem:
    """Warehouse grocery stock entry."""

    id: int
    name: str
    quantity: int
    expiry_date: date


@dataclass(frozen=True)
class Patient:
    id: int
    name: str
    age: int
    gender: str


@dataclass(frozen=True)
class Prescription:
    """Medication issued to a patient.

    Attributes:
        id: Unique prescription id.
        patient_id: Id of the patient the prescription belongs to.
        medication_name: Prescribed medication.
        date_issued: Calendar date of issue.
    """

    id: int
    patient_id: int
    medication_name: str
    date_issued: date


@dataclass(frozen=True)
class Transaction:
    """Account transaction with an exact decimal amount."""

    id: int
    date: datetime
    amount: Decimal
    category: str


@dataclass(frozen=True)
class Student:
    id: int
    full_name: str
    score: int
