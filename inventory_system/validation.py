"""Range validation policies for numeric record fields.

Quantities and scores are validated by separate policy instances so that one
can reject out-of-range values while the other only warns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Type

logger = logging.getLogger(__name__)


class RangeAction(str, Enum):
    """What a policy does with a value outside its bounds."""

    REJECT = "reject"
    WARN = "warn"
    IGNORE = "ignore"


@dataclass(frozen=True, slots=True)
class RangePolicy:
    """Inclusive bounds check for a single named field."""

    field_name: str
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    action: RangeAction = RangeAction.REJECT
    error_type: Type[Exception] = ValueError

    def __post_init__(self) -> None:
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise ValueError(f"Invalid bounds for {self.field_name}: {self.minimum} > {self.maximum}")

    def contains(self, value: int) -> bool:
        if self.minimum is not None and value < self.minimum:
            return False
        if self.maximum is not None and value > self.maximum:
            return False
        return True

    def describe(self) -> str:
        if self.minimum is not None and self.maximum is not None:
            return f"{self.minimum}-{self.maximum}"
        if self.minimum is not None:
            return f">= {self.minimum}"
        if self.maximum is not None:
            return f"<= {self.maximum}"
        return "any value"

    def check(self, value: int, *, context: str = "") -> bool:
        """Apply the policy to ``value``.

        Returns ``True`` when the value is inside the bounds. Out-of-range
        values raise ``error_type`` under ``REJECT``, are logged under
        ``WARN`` and pass silently under ``IGNORE``; the latter two return
        ``False`` so callers can still tell the value was unusual.
        """

        if self.contains(value):
            return True
        subject = f" for {context}" if context else ""
        if self.action is RangeAction.REJECT:
            raise self.error_type(
                f"{self.field_name.capitalize()} {value}{subject} is out of range ({self.describe()})"
            )
        if self.action is RangeAction.WARN:
            logger.warning(
                "%s %s%s is outside typical range (%s), but accepted",
                self.field_name.capitalize(),
                value,
                subject,
                self.describe(),
            )
        return False

    def with_action(self, action: RangeAction) -> "RangePolicy":
        return RangePolicy(
            field_name=self.field_name,
            minimum=self.minimum,
            maximum=self.maximum,
            action=action,
            error_type=self.error_type,
        )


__all__ = ["RangeAction", "RangePolicy"]
