"""In-memory keyed repository and its error taxonomy."""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from .domain import KeyedRecord
from .validation import RangeAction, RangePolicy

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=KeyedRecord)


class ErrorKind(str, Enum):
    """Tag carried by every repository error."""

    DUPLICATE_KEY = "duplicate_key"
    NOT_FOUND = "not_found"
    INVALID_QUANTITY = "invalid_quantity"


class RepositoryError(RuntimeError):
    """Base exception for repository errors."""

    kind: ErrorKind

    def __init__(self, message: str, *, record_id: Optional[int] = None) -> None:
        super().__init__(message)
        self.record_id = record_id


class DuplicateRecordError(RepositoryError):
    """Raised when attempting to insert a record that already exists."""

    kind = ErrorKind.DUPLICATE_KEY


class RecordNotFoundError(RepositoryError):
    """Raised when a requested record is missing."""

    kind = ErrorKind.NOT_FOUND


class InvalidQuantityError(RepositoryError):
    """Raised when a quantity falls outside the repository's quantity policy."""

    kind = ErrorKind.INVALID_QUANTITY


QUANTITY_POLICY = RangePolicy(
    field_name="quantity",
    minimum=0,
    action=RangeAction.REJECT,
    error_type=InvalidQuantityError,
)


class KeyedRepository(Generic[T]):
    """Generic repository keyed by the record's integer id.

    Records are kept in insertion order. Stored records are immutable, so
    handing them out never exposes mutable internal state; updates replace
    the entry with a modified copy.
    """

    def __init__(self, quantity_policy: Optional[RangePolicy] = None) -> None:
        policy = quantity_policy or QUANTITY_POLICY
        if policy.action is not RangeAction.REJECT or policy.minimum is None or policy.minimum < 0:
            raise ValueError("Quantity policy must reject values below a non-negative minimum")
        self._items: Dict[int, T] = {}
        self.quantity_policy = policy

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.list())

    def add(self, record: T) -> None:
        record_id = record.id
        if record_id in self._items:
            raise DuplicateRecordError(
                f"Record with id {record_id!r} already exists: {_label(record)}",
                record_id=record_id,
            )
        quantity = getattr(record, "quantity", None)
        if quantity is not None:
            self._check_quantity(record_id, quantity)
        self._items[record_id] = record
        logger.debug("Added record %r", record_id)

    def get(self, record_id: int) -> T:
        try:
            return self._items[record_id]
        except KeyError as exc:
            raise RecordNotFoundError(
                f"Record with id {record_id!r} not found", record_id=record_id
            ) from exc

    def remove(self, record_id: int) -> None:
        if record_id not in self._items:
            raise RecordNotFoundError(
                f"Cannot remove: record with id {record_id!r} not found",
                record_id=record_id,
            )
        del self._items[record_id]
        logger.debug("Removed record %r", record_id)

    def list(self) -> List[T]:
        return list(self._items.values())

    def update_quantity(self, record_id: int, new_quantity: int) -> T:
        """Replace the stored record with a copy carrying ``new_quantity``."""

        self._check_quantity(record_id, new_quantity)
        current = self.get(record_id)
        updated = replace(current, quantity=new_quantity)
        self._items[record_id] = updated
        logger.debug("Record %r quantity %s -> %s", record_id, current.quantity, new_quantity)
        return updated

    def replace_all(self, records: Iterable[T]) -> None:
        """Swap the whole content; nothing changes if the batch is invalid."""

        staged: Dict[int, T] = {}
        for record in records:
            if record.id in staged:
                raise DuplicateRecordError(
                    f"Record with id {record.id!r} appears more than once",
                    record_id=record.id,
                )
            quantity = getattr(record, "quantity", None)
            if quantity is not None:
                self._check_quantity(record.id, quantity)
            staged[record.id] = record
        self._items = staged

    def _check_quantity(self, record_id: int, quantity: int) -> None:
        policy = self.quantity_policy
        if not policy.contains(quantity):
            raise InvalidQuantityError(
                f"Quantity {quantity} for record {record_id!r} is out of range ({policy.describe()})",
                record_id=record_id,
            )


def _label(record: KeyedRecord) -> str:
    for attribute in ("name", "full_name", "medication_name"):
        value = getattr(record, attribute, None)
        if value:
            return str(value)
    return repr(record.id)


__all__ = [
    "KeyedRepository",
    "ErrorKind",
    "RepositoryError",
    "DuplicateRecordError",
    "RecordNotFoundError",
    "InvalidQuantityError",
    "QUANTITY_POLICY",
]
