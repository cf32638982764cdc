"""The CustomCheck resource: a user-defined validation run by the marvin plugin."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from zora.meta import Condition, ConditionStatus, ObjectMeta, Status


@dataclass
class CustomCheckSpec:
    """What a custom check matches, how it validates and how it reports."""

    match: dict[str, Any] = field(default_factory=dict)
    validations: list[dict[str, Any]] = field(default_factory=list)
    message: str = ""
    category: str = ""
    url: str = ""
    # Raw JSON text of the parameters used in validations.
    params: str | bytes | None = None
    severity: str = ""


@dataclass
class CustomCheck:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: CustomCheckSpec = field(default_factory=CustomCheckSpec)
    status: Status = field(default_factory=Status)

    def get_params(self) -> dict[str, Any] | None:
        """The parameters as a mapping; None when absent or not a JSON object."""
        if self.spec.params is None:
            return None
        try:
            values = json.loads(self.spec.params)
        except ValueError:
            return None
        return values if isinstance(values, dict) else None

    def file_name(self) -> str:
        """Name of the file holding this check in the custom checks ConfigMap."""
        return f"{self.metadata.name}.yaml"

    def set_ready_status(self, ready: bool, reason: str, msg: str) -> None:
        self.status.set_condition(
            Condition(
                type="Ready",
                status=ConditionStatus.TRUE if ready else ConditionStatus.FALSE,
                observed_generation=self.metadata.generation,
                reason=reason,
                message=msg,
            )
        )