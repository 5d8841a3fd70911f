from __future__ import annotations

import logging

import pytest

from inventory_system import (
    ElectronicItem,
    ErrorKind,
    InventoryManager,
    KeyedRepository,
    WarehouseService,
    sample_usage,
)
from inventory_system.services import EMPTY_INVENTORY_MESSAGE, ensure_demo_data


def test_increase_stock_updates_quantity(warehouse):
    result = warehouse.electronics.increase_stock(1, 5)

    assert result.ok
    assert result.error is None
    assert "New quantity: 15" in result.message
    assert warehouse.electronics.repository.get(1).quantity == 15


def test_increase_stock_on_missing_item_is_reported(warehouse, caplog):
    caplog.set_level(logging.WARNING)
    result = warehouse.electronics.increase_stock(999, 5)

    assert not result.ok
    assert result.error is ErrorKind.NOT_FOUND
    assert result.message.startswith("Error increasing stock:")
    assert "999" in caplog.text


def test_increase_stock_below_zero_is_reported(warehouse):
    result = warehouse.groceries.increase_stock(101, -55)

    assert not result.ok
    assert result.error is ErrorKind.INVALID_QUANTITY
    assert warehouse.groceries.repository.get(101).quantity == 50


def test_remove_missing_item_leaves_repository_unchanged(warehouse):
    before = warehouse.groceries.repository.list()
    result = warehouse.groceries.remove_by_id(999)

    assert not result.ok
    assert result.error is ErrorKind.NOT_FOUND
    assert "not found" in result.message
    assert warehouse.groceries.repository.list() == before


def test_remove_existing_item(warehouse):
    result = warehouse.electronics.remove_by_id(1)

    assert result.ok
    assert result.message == "Item ID 1 removed successfully."
    assert 1 not in warehouse.electronics.repository


def test_add_duplicate_is_reported(warehouse):
    duplicate = ElectronicItem(id=1, name="Duplicate Laptop", quantity=5, brand="HP", warranty_months=24)
    result = warehouse.electronics.add_item(duplicate)

    assert not result.ok
    assert result.error is ErrorKind.DUPLICATE_KEY
    assert warehouse.electronics.repository.get(1).name == "Laptop"


def test_laptop_scenario_end_to_end(warehouse):
    assert warehouse.electronics.increase_stock(1, 5).ok
    assert not warehouse.electronics.remove_by_id(999).ok
    result = warehouse.electronics.increase_stock(1, -20)

    assert result.error is ErrorKind.INVALID_QUANTITY
    assert warehouse.electronics.repository.get(1).quantity == 15


def test_render_all_lists_each_item(warehouse):
    lines = warehouse.electronics.render_all()
    assert lines == ["[ID=1] Laptop | Brand: Dell | Qty: 10 | Warranty: 24 months"]


def test_render_all_reports_empty_inventory():
    manager: InventoryManager[ElectronicItem] = InventoryManager(KeyedRepository())
    assert manager.render_all() == [EMPTY_INVENTORY_MESSAGE]


def test_unknown_section_raises(warehouse):
    with pytest.raises(ValueError, match="furniture"):
        warehouse.section("furniture")


def test_demo_data_is_seeded_once():
    service = WarehouseService()
    ensure_demo_data(service)
    service.electronics.increase_stock(1, 5)
    ensure_demo_data(service)

    assert [item.id for item in service.electronics.repository.list()] == [1, 2, 3]
    assert [item.id for item in service.groceries.repository.list()] == [101, 102, 103]
    assert service.electronics.repository.get(1).quantity == 15


def test_demo_entry_point_runs(capsys):
    sample_usage.main([])

    out = capsys.readouterr().out
    assert "Stock increased: 5 added to ID 1. New quantity: 15" in out
    assert "Total Students Processed: 4" in out
    assert "Insufficient funds: Cannot deduct 900.00 from balance of 770.00." in out
