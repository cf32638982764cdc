"""The Cluster resource: a Kubernetes cluster known to the operator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from zora.meta import Condition, ConditionStatus, NamespacedName, ObjectMeta, Status

LABEL_ENVIRONMENT = "zora.undistro.io/environment"

CLUSTER_READY = "Ready"
CLUSTER_DISCOVERED = "Discovered"
CLUSTER_RESOURCES_DISCOVERED = "ResourcesDiscovered"


@dataclass
class ClusterSpec:
    """Name of a secret in the cluster's namespace holding its kubeconfig, if any."""

    kubeconfig_ref: str | None = None


@dataclass
class ClusterStatus(Status):
    """Observed state of a Cluster."""

    provider: str = ""
    region: str = ""
    total_nodes: int | None = None
    creation_timestamp: datetime | None = None
    kubernetes_version: str = ""
    resources: dict[str, Any] = field(default_factory=dict)
    memory_usage: str = ""
    memory_available: str = ""
    cpu_usage: str = ""
    cpu_available: str = ""
    last_reconciliation_time: datetime | None = None


@dataclass
class Cluster:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ClusterSpec = field(default_factory=ClusterSpec)
    status: ClusterStatus = field(default_factory=ClusterStatus)

    def kubeconfig_ref_key(self) -> NamespacedName | None:
        """Key of the kubeconfig secret, or None when the cluster has none."""
        if self.spec.kubeconfig_ref is None:
            return None
        return NamespacedName(name=self.spec.kubeconfig_ref, namespace=self.metadata.namespace)

    def set_status(self, status_type: str, status: bool, reason: str, msg: str) -> None:
        """Set the condition ``status_type`` to True or False."""
        self.status.set_condition(
            Condition(
                type=status_type,
                status=ConditionStatus.TRUE if status else ConditionStatus.FALSE,
                observed_generation=self.metadata.generation,
                reason=reason,
                message=msg,
            )
        )