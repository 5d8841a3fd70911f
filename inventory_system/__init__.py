"""Keyed in-memory inventory repositories with validation policies.

This package provides immutable record types, a generic repository that
enforces unique ids and non-negative quantities, and small services that
consume it: a warehouse manager, a JSON-backed inventory log, a student
grade report processor, a patient prescription lookup and a small
transaction ledger over savings accounts.
"""

from .config import AppConfig
from .domain import (
    ElectronicItem,
    GroceryItem,
    InventoryItem,
    Patient,
    Prescription,
    Student,
)
from .finance import Account, FinanceService, SavingsAccount, Transaction
from .grades import StudentResultProcessor
from .repository import (
    DuplicateRecordError,
    ErrorKind,
    InvalidQuantityError,
    KeyedRepository,
    RecordNotFoundError,
    RepositoryError,
)
from .services import (
    HealthRecordsService,
    InventoryLogService,
    InventoryManager,
    OperationResult,
    WarehouseService,
)
from .validation import RangeAction, RangePolicy

__all__ = [
    "AppConfig",
    "ElectronicItem",
    "GroceryItem",
    "InventoryItem",
    "Patient",
    "Prescription",
    "Student",
    "StudentResultProcessor",
    "Account",
    "FinanceService",
    "SavingsAccount",
    "Transaction",
    "KeyedRepository",
    "ErrorKind",
    "RepositoryError",
    "DuplicateRecordError",
    "RecordNotFoundError",
    "InvalidQuantityError",
    "HealthRecordsService",
    "InventoryLogService",
    "InventoryManager",
    "OperationResult",
    "WarehouseService",
    "RangeAction",
    "RangePolicy",
]
