"""Service layer that consumes the keyed repositories."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Generic, List, Optional, TypeVar

from .config import AppConfig
from .domain import (
    ElectronicItem,
    GroceryItem,
    InventoryItem,
    Patient,
    Prescription,
    StockedRecord,
)
from .repository import (
    DuplicateRecordError,
    ErrorKind,
    InvalidQuantityError,
    KeyedRepository,
    RecordNotFoundError,
    RepositoryError,
)
from .storage import JsonFileStore, JsonRecordCodec, StorageError

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=StockedRecord)

EMPTY_INVENTORY_MESSAGE = "No items in inventory."


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of a user-facing operation; failures never raise."""

    ok: bool
    message: str
    error: Optional[ErrorKind] = None

    @classmethod
    def success(cls, message: str) -> "OperationResult":
        return cls(ok=True, message=message)

    @classmethod
    def failure(cls, message: str, error: Optional[ErrorKind] = None) -> "OperationResult":
        return cls(ok=False, message=message, error=error)


class InventoryManager(Generic[S]):
    """Stock operations over a single repository.

    Every repository failure is caught here, logged and turned into a failed
    :class:`OperationResult` so that no operation aborts the caller.
    """

    def __init__(self, repository: Optional[KeyedRepository[S]] = None, *, label: str = "inventory") -> None:
        self.repository: KeyedRepository[S] = repository if repository is not None else KeyedRepository()
        self.label = label

    def add_item(self, item: S) -> OperationResult:
        try:
            self.repository.add(item)
        except (DuplicateRecordError, InvalidQuantityError) as exc:
            logger.warning("Rejected %s item %r: %s", self.label, item.id, exc)
            return OperationResult.failure(f"Error adding item: {exc}", exc.kind)
        return OperationResult.success(f"Item ID {item.id} added.")

    def increase_stock(self, item_id: int, delta: int) -> OperationResult:
        try:
            item = self.repository.get(item_id)
            updated = self.repository.update_quantity(item_id, item.quantity + delta)
        except RepositoryError as exc:
            logger.warning("Could not increase %s stock for %r: %s", self.label, item_id, exc)
            return OperationResult.failure(f"Error increasing stock: {exc}", exc.kind)
        logger.info("Increased %s stock for %r by %s to %s", self.label, item_id, delta, updated.quantity)
        return OperationResult.success(
            f"Stock increased: {delta} added to ID {item_id}. New quantity: {updated.quantity}"
        )

    def remove_by_id(self, item_id: int) -> OperationResult:
        try:
            self.repository.remove(item_id)
        except RecordNotFoundError as exc:
            logger.warning("Could not remove %s item %r: %s", self.label, item_id, exc)
            return OperationResult.failure(f"Error removing item: {exc}", exc.kind)
        logger.info("Removed %s item %r", self.label, item_id)
        return OperationResult.success(f"Item ID {item_id} removed successfully.")

    def render_all(self) -> List[str]:
        items = self.repository.list()
        if not items:
            return [EMPTY_INVENTORY_MESSAGE]
        return [str(item) for item in items]


class WarehouseService:
    """Facade bundling the electronics and grocery inventories."""

    def __init__(
        self,
        electronics_repo: Optional[KeyedRepository[ElectronicItem]] = None,
        grocery_repo: Optional[KeyedRepository[GroceryItem]] = None,
        *,
        config: Optional[AppConfig] = None,
    ) -> None:
        self.config = config or AppConfig()
        policy = self.config.validation.quantity_policy()
        self.electronics: InventoryManager[ElectronicItem] = InventoryManager(
            electronics_repo if electronics_repo is not None else KeyedRepository(policy),
            label="electronics",
        )
        self.groceries: InventoryManager[GroceryItem] = InventoryManager(
            grocery_repo if grocery_repo is not None else KeyedRepository(policy),
            label="groceries",
        )

    def section(self, name: str) -> InventoryManager:
        try:
            return {"electronics": self.electronics, "groceries": self.groceries}[name]
        except KeyError as exc:
            raise ValueError(f"Unknown warehouse section {name!r}") from exc


def ensure_demo_data(service: WarehouseService) -> None:
    if len(service.electronics.repository) > 0 or len(service.groceries.repository) > 0:
        return

    for item in (
        ElectronicItem(id=1, name="Laptop", quantity=10, brand="Dell", warranty_months=24),
        ElectronicItem(id=2, name="Smartphone", quantity=25, brand="Samsung", warranty_months=12),
        ElectronicItem(id=3, name="Tablet", quantity=15, brand="Apple", warranty_months=18),
    ):
        service.electronics.add_item(item)

    today = date.today()
    for item in (
        GroceryItem(id=101, name="Milk", quantity=50, expiry_date=today + timedelta(days=7)),
        GroceryItem(id=102, name="Bread", quantity=30, expiry_date=today + timedelta(days=3)),
        GroceryItem(id=103, name="Eggs", quantity=100, expiry_date=today + timedelta(days=14)),
    ):
        service.groceries.add_item(item)


class InventoryLogService:
    """Inventory log that can be saved to and restored from a JSON file."""

    def __init__(
        self,
        store: Optional[JsonFileStore[InventoryItem]] = None,
        repository: Optional[KeyedRepository[InventoryItem]] = None,
        *,
        config: Optional[AppConfig] = None,
    ) -> None:
        self.config = config or AppConfig()
        self.store = store or JsonFileStore(
            self.config.storage.data_file,
            JsonRecordCodec(InventoryItem, indent=self.config.storage.indent),
        )
        self.manager: InventoryManager[InventoryItem] = InventoryManager(
            repository
            if repository is not None
            else KeyedRepository(self.config.validation.quantity_policy()),
            label="log",
        )

    @property
    def repository(self) -> KeyedRepository[InventoryItem]:
        return self.manager.repository

    def add(self, item: InventoryItem) -> OperationResult:
        return self.manager.add_item(item)

    def save(self) -> OperationResult:
        try:
            count = self.store.save(self.repository.list())
        except StorageError as exc:
            logger.error("Saving inventory log failed: %s", exc)
            return OperationResult.failure(f"Error saving data: {exc}")
        return OperationResult.success(f"Data saved to {self.store.path} ({count} items)")

    def load(self) -> OperationResult:
        try:
            records = self.store.load()
            self.repository.replace_all(records)
        except StorageError as exc:
            logger.error("Loading inventory log failed: %s", exc)
            return OperationResult.failure(f"Error loading data: {exc}")
        except RepositoryError as exc:
            logger.error("Inventory log at %s is inconsistent: %s", self.store.path, exc)
            return OperationResult.failure(f"Error loading data: {exc}", exc.kind)
        return OperationResult.success(f"Loaded {len(records)} items from {self.store.path}")

    def render_all(self) -> List[str]:
        lines = self.manager.render_all()
        if len(self.repository) > 0:
            lines.append(f"Total Items: {len(self.repository)}")
        return lines


class HealthRecordsService:
    """Patient lookup with prescriptions grouped per patient."""

    def __init__(
        self,
        patient_repo: Optional[KeyedRepository[Patient]] = None,
        prescription_repo: Optional[KeyedRepository[Prescription]] = None,
    ) -> None:
        self.patients = patient_repo if patient_repo is not None else KeyedRepository()
        self.prescriptions = (
            prescription_repo if prescription_repo is not None else KeyedRepository()
        )
        self._prescription_map: Dict[int, List[Prescription]] = {}

    def build_prescription_map(self) -> Dict[int, List[Prescription]]:
        grouped: Dict[int, List[Prescription]] = defaultdict(list)
        for prescription in self.prescriptions:
            grouped[prescription.patient_id].append(prescription)
        self._prescription_map = dict(grouped)
        return {patient_id: list(items) for patient_id, items in self._prescription_map.items()}

    def prescriptions_for(self, patient_id: int) -> List[Prescription]:
        return list(self._prescription_map.get(patient_id, []))

    def render_patients(self) -> List[str]:
        patients = self.patients.list()
        if not patients:
            return ["No patients found."]
        return [str(patient) for patient in patients]

    def render_prescriptions(self, patient_id: int) -> List[str]:
        prescriptions = self.prescriptions_for(patient_id)
        if not prescriptions:
            return ["No prescriptions found for this patient."]
        return [str(prescription) for prescription in prescriptions]


__all__ = [
    "OperationResult",
    "InventoryManager",
    "WarehouseService",
    "InventoryLogService",
    "HealthRecordsService",
    "EMPTY_INVENTORY_MESSAGE",
    "ensure_demo_data",
]
