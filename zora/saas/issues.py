"""Issue payloads sent to the SaaS, built from ClusterIssue resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from zora.clusterissue import LABEL_PLUGIN, ClusterIssue
from zora.meta import NamespacedName

API_VERSION = "v1alpha1"


@dataclass
class Issue:
    """A misconfiguration as the SaaS sees it."""

    api_version: str = API_VERSION
    id: str = ""
    message: str = ""
    severity: str = ""
    category: str = ""
    plugin: str = ""
    url: str = ""
    cluster_scoped: bool = False
    custom: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "id": self.id,
            "message": self.message,
            "severity": self.severity,
            "category": self.category,
            "plugin": self.plugin,
            "url": self.url,
            "clusterScoped": self.cluster_scoped,
            "custom": self.custom,
        }


@dataclass
class ResourcedIssue:
    """An issue together with the resources it affects, grouped by resource type."""

    issue: Issue = field(default_factory=Issue)
    resources: dict[str, list[NamespacedName]] | None = None

    def to_dict(self) -> dict[str, Any]:
        data = self.issue.to_dict()
        if self.resources is None:
            data["resources"] = None
        else:
            data["resources"] = {
                gvr: [name.to_dict() for name in names] for gvr, names in self.resources.items()
            }
        return data


def new_issue(cluster_issue: ClusterIssue) -> Issue:
    """Build the SaaS issue for ``cluster_issue``, without its resources."""
    spec = cluster_issue.spec
    return Issue(
        api_version=API_VERSION,
        id=spec.id,
        message=spec.message,
        severity=str(spec.severity),
        category=spec.category,
        plugin=cluster_issue.metadata.labels.get(LABEL_PLUGIN, ""),
        url=spec.url,
        cluster_scoped=not spec.resources,
        custom=spec.custom,
    )


def new_resourced_issue(cluster_issue: ClusterIssue) -> ResourcedIssue:
    """Build the SaaS issue for ``cluster_issue`` with its affected resources.

    Resources are written ``namespace/name``; a bare name has an empty namespace.
    """
    resources: dict[str, list[NamespacedName]] | None = None
    for gvr, names in (cluster_issue.spec.resources or {}).items():
        for value in names:
            parts = value.split("/")
            if len(parts) == 1:
                parts = ["", parts[0]]
            if resources is None:
                resources = {}
            resources.setdefault(gvr, []).append(NamespacedName(name=parts[1], namespace=parts[0]))
    return ResourcedIssue(issue=new_issue(cluster_issue), resources=resources)