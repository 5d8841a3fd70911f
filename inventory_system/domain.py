"""Core record types shared by the inventory, grading and health services."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyedRecord(Protocol):
    """Anything identified by a unique integer ``id``."""

    @property
    def id(self) -> int: ...


@runtime_checkable
class StockedRecord(KeyedRecord, Protocol):
    """A keyed record that also tracks a stock quantity."""

    @property
    def name(self) -> str: ...

    @property
    def quantity(self) -> int: ...


@dataclass(frozen=True, slots=True)
class InventoryItem:
    """Logged stock entry with the timestamp it was recorded."""

    id: int
    name: str
    quantity: int
    date_added: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return (
            f"ID: {self.id}, Name: {self.name}, Qty: {self.quantity}, "
            f"Added: {self.date_added:%Y-%m-%d %H:%M}"
        )


@dataclass(frozen=True, slots=True)
class ElectronicItem:
    """Electronics stocked in the warehouse."""

    id: int
    name: str
    quantity: int
    brand: str
    warranty_months: int

    def __str__(self) -> str:
        return (
            f"[ID={self.id}] {self.name} | Brand: {self.brand} | "
            f"Qty: {self.quantity} | Warranty: {self.warranty_months} months"
        )


@dataclass(frozen=True, slots=True)
class GroceryItem:
    """Perishable goods stocked in the warehouse."""

    id: int
    name: str
    quantity: int
    expiry_date: date

    def __str__(self) -> str:
        return f"[ID={self.id}] {self.name} | Qty: {self.quantity} | Expires: {self.expiry_date:%Y-%m-%d}"


@dataclass(frozen=True, slots=True)
class Student:
    """A student result read from a grade sheet."""

    id: int
    full_name: str
    score: int

    @property
    def grade(self) -> str:
        score = self.score
        if 80 <= score <= 100:
            return "A"
        # Scores above 100 are accepted with a warning and land here.
        if score >= 70:
            return "B"
        if score >= 60:
            return "C"
        if score >= 50:
            return "D"
        return "F"

    def __str__(self) -> str:
        return f"{self.full_name} (ID: {self.id}): Score = {self.score}, Grade = {self.grade}"


@dataclass(frozen=True, slots=True)
class Patient:
    id: int
    name: str
    age: int
    gender: str

    def __str__(self) -> str:
        return f"Patient [Id={self.id}, Name={self.name}, Age={self.age}, Gender={self.gender}]"


@dataclass(frozen=True, slots=True)
class Prescription:
    id: int
    patient_id: int
    medication_name: str
    date_issued: date

    def __str__(self) -> str:
        return (
            f"Prescription [Id={self.id}, Medication={self.medication_name}, "
            f"Date={self.date_issued:%Y-%m-%d}, PatientId={self.patient_id}]"
        )


__all__ = [
    "KeyedRecord",
    "StockedRecord",
    "InventoryItem",
    "ElectronicItem",
    "GroceryItem",
    "Student",
    "Patient",
    "Prescription",
]
