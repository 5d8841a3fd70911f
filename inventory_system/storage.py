"""JSON persistence helpers for keyed records."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Generic, Iterable, List, Type, TypeVar, Union

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when records cannot be written or read back."""


class JsonRecordCodec(Generic[T]):
    """Encode a sequence of dataclass records as a JSON array."""

    def __init__(self, record_type: Type[T], *, indent: int = 2) -> None:
        self.record_type = record_type
        self.indent = indent
        self._adapter: TypeAdapter[List[T]] = TypeAdapter(List[record_type])  # type: ignore[valid-type]

    def serialize(self, records: Iterable[T]) -> bytes:
        return self._adapter.dump_json(list(records), indent=self.indent or None)

    def deserialize(self, payload: bytes) -> List[T]:
        try:
            return self._adapter.validate_json(payload)
        except ValidationError as exc:
            raise StorageError(
                f"Invalid {self.record_type.__name__} data: {exc.error_count()} error(s)"
            ) from exc


class JsonFileStore(Generic[T]):
    """File-backed store that keeps the full record list in one JSON file."""

    def __init__(self, path: Union[str, Path], codec: JsonRecordCodec[T]) -> None:
        self.path = Path(path)
        self.codec = codec

    def save(self, records: Iterable[T]) -> int:
        items = list(records)
        try:
            payload = self.codec.serialize(items)
            self.path.write_bytes(payload)
        except PydanticSerializationError as exc:
            raise StorageError(f"Could not encode records for {self.path}: {exc}") from exc
        except OSError as exc:
            raise StorageError(f"Could not write {self.path}: {exc.strerror or exc}") from exc
        logger.info("Saved %d record(s) to %s", len(items), self.path)
        return len(items)

    def load(self) -> List[T]:
        if not self.path.exists():
            logger.warning("File not found: %s. Starting with empty log.", self.path)
            return []
        try:
            payload = self.path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Could not read {self.path}: {exc.strerror or exc}") from exc
        if not payload.strip():
            logger.warning("File %s is empty. No data to load.", self.path)
            return []
        records = self.codec.deserialize(payload)
        logger.info("Loaded %d record(s) from %s", len(records), self.path)
        return records


__all__ = ["StorageError", "JsonRecordCodec", "JsonFileStore"]
