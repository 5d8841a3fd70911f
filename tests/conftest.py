from __future__ import annotations

from datetime import date

import pytest

from inventory_system import ElectronicItem, GroceryItem, KeyedRepository, WarehouseService


@pytest.fixture
def laptop() -> ElectronicItem:
    return ElectronicItem(id=1, name="Laptop", quantity=10, brand="Dell", warranty_months=24)


@pytest.fixture
def repo(laptop: ElectronicItem) -> KeyedRepository[ElectronicItem]:
    repository: KeyedRepository[ElectronicItem] = KeyedRepository()
    repository.add(laptop)
    return repository


@pytest.fixture
def warehouse(laptop: ElectronicItem) -> WarehouseService:
    service = WarehouseService()
    service.electronics.add_item(laptop)
    service.groceries.add_item(
        GroceryItem(id=101, name="Milk", quantity=50, expiry_date=date(2030, 1, 1))
    )
    return service
