"""Runtime configuration for the inventory services."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .repository import InvalidQuantityError
from .validation import RangeAction, RangePolicy


class ScoreOutOfRangeError(ValueError):
    """Raised by a rejecting score policy."""


@dataclass(frozen=True)
class ValidationConfig:
    """Quantity and score checks are configured independently.

    Quantities below ``quantity_min`` are always rejected; only the score
    policy can be relaxed to warn or ignore.
    """

    quantity_min: int = 0
    score_action: RangeAction = RangeAction.WARN
    score_min: int = 0
    score_max: int = 100

    def __post_init__(self) -> None:
        if self.quantity_min < 0:
            raise ValueError(f"quantity_min must not be negative, got {self.quantity_min}")

    def quantity_policy(self) -> RangePolicy:
        return RangePolicy(
            field_name="quantity",
            minimum=self.quantity_min,
            action=RangeAction.REJECT,
            error_type=InvalidQuantityError,
        )

    def score_policy(self) -> RangePolicy:
        return RangePolicy(
            field_name="score",
            minimum=self.score_min,
            maximum=self.score_max,
            action=self.score_action,
            error_type=ScoreOutOfRangeError,
        )


@dataclass(frozen=True)
class StorageConfig:
    data_file: str = "inventory.json"
    indent: int = 2


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """Root configuration container."""

    validation: ValidationConfig = field(default_factory=ValidationConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Load configuration with environment variable overrides."""

        env = os.environ if environ is None else environ
        return cls(
            validation=ValidationConfig(
                quantity_min=int(env.get("INVENTORY_QUANTITY_MIN", "0")),
                score_action=RangeAction(
                    env.get("INVENTORY_SCORE_ACTION", RangeAction.WARN.value).lower()
                ),
                score_min=int(env.get("INVENTORY_SCORE_MIN", "0")),
                score_max=int(env.get("INVENTORY_SCORE_MAX", "100")),
            ),
            storage=StorageConfig(
                data_file=env.get("INVENTORY_DATA_FILE", "inventory.json"),
                indent=int(env.get("INVENTORY_JSON_INDENT", "2")),
            ),
            logging=LoggingConfig(level=env.get("INVENTORY_LOG_LEVEL", "INFO").upper()),
        )


__all__ = [
    "AppConfig",
    "ValidationConfig",
    "StorageConfig",
    "LoggingConfig",
    "ScoreOutOfRangeError",
]
