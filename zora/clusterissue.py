"""The ClusterIssue resource: one misconfiguration found by a plugin scan."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from zora.meta import ObjectMeta

LABEL_SCAN_ID = "scanID"
LABEL_CLUSTER = "cluster"
LABEL_CLUSTER_UID = "clusterUID"
LABEL_SEVERITY = "severity"
LABEL_ISSUE_ID = "id"
LABEL_CATEGORY = "category"
LABEL_PLUGIN = "plugin"
LABEL_CUSTOM = "custom"


class ClusterIssueSeverity(str, Enum):
    """How serious an issue is."""

    UNKNOWN = "Unknown"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    def __str__(self) -> str:
        return self.value


@dataclass
class ClusterIssueSpec:
    """What the issue is and which resources it affects."""

    cluster: str = ""
    id: str = ""
    message: str = ""
    severity: ClusterIssueSeverity = ClusterIssueSeverity.UNKNOWN
    category: str = ""
    resources: dict[str, list[str]] = field(default_factory=dict)
    total_resources: int = 0
    url: str = ""
    custom: bool = False

    def add_resource(self, gvr: str, resource: str) -> None:
        """Record ``resource`` under ``gvr`` unless it is already recorded."""
        entries = self.resources.setdefault(gvr, [])
        if resource in entries:
            return
        entries.append(resource)
        self.total_resources += 1


@dataclass
class ClusterIssue:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ClusterIssueSpec = field(default_factory=ClusterIssueSpec)