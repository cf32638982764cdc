"""The Plugin resource: a container image that scans a cluster."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from zora.meta import ObjectMeta

PULL_ALWAYS = "Always"
PULL_NEVER = "Never"
PULL_IF_NOT_PRESENT = "IfNotPresent"

TYPE_MISCONFIGURATION = "misconfiguration"
TYPE_VULNERABILITY = "vulnerability"


@dataclass
class PluginSpec:
    """How a plugin container is run and what it reports."""

    image: str = ""
    type: str = TYPE_MISCONFIGURATION
    command: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)
    env_from: list[dict[str, Any]] = field(default_factory=list)
    env: list[dict[str, Any]] = field(default_factory=list)
    annotations: dict[str, str] = field(default_factory=dict)
    resources: dict[str, Any] = field(default_factory=dict)
    image_pull_policy: str = ""
    security_context: dict[str, Any] | None = None
    mount_custom_checks_volume: bool | None = None

    def get_image_pull_policy(self) -> str:
        """The configured pull policy, ``IfNotPresent`` when none is set."""
        return self.image_pull_policy or PULL_IF_NOT_PRESENT


@dataclass
class Plugin:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PluginSpec = field(default_factory=PluginSpec)