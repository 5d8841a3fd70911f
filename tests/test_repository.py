from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from inventory_system import (
    DuplicateRecordError,
    ElectronicItem,
    ErrorKind,
    InvalidQuantityError,
    InventoryManager,
    KeyedRepository,
    RangeAction,
    RangePolicy,
    RecordNotFoundError,
    RepositoryError,
)
from inventory_system.repository import QUANTITY_POLICY


def make_item(item_id: int, quantity: int = 5, name: str = "Tablet") -> ElectronicItem:
    return ElectronicItem(id=item_id, name=name, quantity=quantity, brand="Apple", warranty_months=18)


def test_add_duplicate_keeps_first_record(repo, laptop):
    with pytest.raises(DuplicateRecordError) as info:
        repo.add(make_item(1, name="Duplicate Laptop"))

    assert info.value.kind is ErrorKind.DUPLICATE_KEY
    assert info.value.record_id == 1
    assert repo.get(1) == laptop
    assert len(repo) == 1


@pytest.mark.parametrize("missing_id", [0, 2, 999, -1])
def test_missing_ids_raise_not_found(repo, missing_id):
    with pytest.raises(RecordNotFoundError):
        repo.get(missing_id)
    with pytest.raises(RecordNotFoundError):
        repo.remove(missing_id)
    with pytest.raises(RecordNotFoundError) as info:
        repo.update_quantity(missing_id, 3)
    assert info.value.kind is ErrorKind.NOT_FOUND


@pytest.mark.parametrize("quantity", [-1, -5, -1000])
def test_negative_quantity_rejected_and_unchanged(repo, quantity):
    with pytest.raises(InvalidQuantityError) as info:
        repo.update_quantity(1, quantity)

    assert info.value.kind is ErrorKind.INVALID_QUANTITY
    assert info.value.record_id == 1
    assert repo.get(1).quantity == 10


def test_negative_quantity_checked_before_existence(repo):
    with pytest.raises(InvalidQuantityError):
        repo.update_quantity(999, -5)


@pytest.mark.parametrize("quantity", [0, 1, 15, 10_000])
def test_update_quantity_replaces_only_quantity(repo, laptop, quantity):
    updated = repo.update_quantity(1, quantity)

    assert updated.quantity == quantity
    stored = repo.get(1)
    assert stored.quantity == quantity
    assert (stored.id, stored.name, stored.brand, stored.warranty_months) == (
        laptop.id,
        laptop.name,
        laptop.brand,
        laptop.warranty_months,
    )
    assert laptop.quantity == 10


def test_remove_succeeds_once(repo):
    repo.remove(1)
    assert 1 not in repo
    with pytest.raises(RecordNotFoundError):
        repo.remove(1)


def test_list_is_snapshot_in_insertion_order(repo):
    repo.add(make_item(7))
    repo.add(make_item(3))
    repo.update_quantity(1, 42)

    snapshot = repo.list()
    assert [item.id for item in snapshot] == [1, 7, 3]

    snapshot.clear()
    assert len(repo) == 3
    assert [item.id for item in repo] == [1, 7, 3]


def test_returned_records_are_immutable(repo):
    item = repo.get(1)
    with pytest.raises(FrozenInstanceError):
        item.quantity = 99  # type: ignore[misc]
    assert repo.get(1).quantity == 10


def test_add_rejects_negative_quantity():
    repository: KeyedRepository[ElectronicItem] = KeyedRepository()
    with pytest.raises(InvalidQuantityError):
        repository.add(make_item(1, quantity=-1))
    assert len(repository) == 0


def test_relaxed_quantity_policies_are_refused():
    for action in (RangeAction.WARN, RangeAction.IGNORE):
        with pytest.raises(ValueError):
            KeyedRepository(QUANTITY_POLICY.with_action(action))
    with pytest.raises(ValueError):
        KeyedRepository(RangePolicy("quantity", minimum=-10))


def test_plain_policy_still_raises_invalid_quantity():
    repository: KeyedRepository[ElectronicItem] = KeyedRepository(RangePolicy("quantity", minimum=0))
    repository.add(make_item(1, quantity=10))

    with pytest.raises(InvalidQuantityError) as info:
        repository.update_quantity(1, -10)
    assert info.value.record_id == 1

    result = InventoryManager(repository).increase_stock(1, -20)
    assert result.error is ErrorKind.INVALID_QUANTITY
    assert repository.get(1).quantity == 10


def test_raised_minimum_bound():
    repository: KeyedRepository[ElectronicItem] = KeyedRepository(RangePolicy("quantity", minimum=2))
    with pytest.raises(InvalidQuantityError):
        repository.add(make_item(1, quantity=1))
    repository.add(make_item(1, quantity=2))


def test_replace_all_is_atomic(repo, laptop):
    with pytest.raises(DuplicateRecordError):
        repo.replace_all([make_item(2), make_item(3), make_item(2)])
    assert repo.list() == [laptop]

    repo.replace_all([make_item(4), make_item(5)])
    assert [item.id for item in repo.list()] == [4, 5]


def test_all_errors_share_the_base_class():
    for error_type in (DuplicateRecordError, RecordNotFoundError, InvalidQuantityError):
        assert issubclass(error_type, RepositoryError)
