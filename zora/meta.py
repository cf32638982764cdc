"""Object metadata, conditions and the common status block shared by resources."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ConditionStatus(str, Enum):
    """The value of a condition's status field."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


@dataclass
class Condition:
    """One observation of an aspect of a resource's current state."""

    type: str
    status: ConditionStatus
    observed_generation: int = 0
    last_transition_time: datetime | None = None
    reason: str = ""
    message: str = ""


@dataclass(frozen=True)
class NamespacedName:
    """A name qualified by its namespace."""

    name: str
    namespace: str = ""

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "namespace": self.namespace}


@dataclass
class ObjectMeta:
    """Metadata every stored resource carries."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    generation: int = 0
    uid: str = ""
    resource_version: str = ""
    creation_timestamp: datetime | None = None
    deletion_timestamp: datetime | None = None


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def is_before(left: datetime | None, right: datetime | None) -> bool:
    """True when both times are set and ``left`` is strictly earlier than ``right``."""
    if left is None or right is None:
        return False
    return left < right


@dataclass
class Status:
    """The minimal status block: observed generation and conditions."""

    observed_generation: int = 0
    conditions: list[Condition] = field(default_factory=list)

    def get_condition(self, condition_type: str) -> Condition | None:
        """Return the condition of the given type, or None."""
        return next((c for c in self.conditions if c.type == condition_type), None)

    def condition_is_true(self, condition_type: str) -> bool:
        """True if the condition of the given type has status True."""
        condition = self.get_condition(condition_type)
        return condition is not None and condition.status == ConditionStatus.TRUE

    def set_condition(self, new_condition: Condition) -> None:
        """Add or update the condition of ``new_condition``'s type.

        The transition time is refreshed only when the status changes (or the
        condition is new and carries no time of its own).
        """
        existing = self.get_condition(new_condition.type)
        if existing is None:
            added = dataclasses.replace(new_condition)
            if added.last_transition_time is None:
                added.last_transition_time = _now()
            self.conditions.append(added)
            return
        if existing.status != new_condition.status:
            existing.status = new_condition.status
            existing.last_transition_time = new_condition.last_transition_time or _now()
        existing.reason = new_condition.reason
        existing.message = new_condition.message
        existing.observed_generation = new_condition.observed_generation