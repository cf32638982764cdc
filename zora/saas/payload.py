"""Cluster and scan status payloads sent to the SaaS."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from zora.cluster import CLUSTER_READY, CLUSTER_RESOURCES_DISCOVERED, LABEL_ENVIRONMENT, Cluster
from zora.clusterissue import LABEL_PLUGIN, ClusterIssue
from zora.clusterscan import JOB_COMPLETE, JOB_FAILED, ClusterScan
from zora.meta import ConditionStatus, is_before
from zora.saas.issues import API_VERSION, ResourcedIssue, new_resourced_issue

RESOURCE_CPU = "cpu"
RESOURCE_MEMORY = "memory"


def _format_time(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


class ScanStatusType(str, Enum):
    FAILED = "failed"
    UNKNOWN = "unknown"
    SCANNED = "scanned"

    def __str__(self) -> str:
        return self.value


@dataclass
class ScanStatus:
    status: ScanStatusType = ScanStatusType.UNKNOWN
    message: str = ""
    suspend: bool = False
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": str(self.status),
            "message": self.message,
            "suspend": self.suspend,
            "id": self.id,
        }


@dataclass
class PluginStatus:
    """What the SaaS is told about one plugin's scans."""

    scan: ScanStatus | None = None
    issue_count: int | None = None
    issues: list[ResourcedIssue] = field(default_factory=list)
    last_successful_scan_time: datetime | None = None
    last_finished_scan_time: datetime | None = None
    next_schedule_scan_time: datetime | None = None
    schedule: str = ""
    last_successful_scan_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "scan": None if self.scan is None else self.scan.to_dict(),
            "issueCount": self.issue_count,
            "issues": [i.to_dict() for i in self.issues] if self.issues else None,
            "lastSuccessfulScanTime": _format_time(self.last_successful_scan_time),
            "lastFinishedScanTime": _format_time(self.last_finished_scan_time),
            "nextScheduleScanTime": _format_time(self.next_schedule_scan_time),
            "schedule": self.schedule,
            "lastSuccessfulScanID": self.last_successful_scan_id,
        }


@dataclass
class Resource:
    available: str = ""
    usage: str = ""
    usage_percentage: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "available": self.available,
            "usage": self.usage,
            "usagePercentage": self.usage_percentage,
        }


@dataclass
class Resources:
    discovered: bool = False
    message: str = ""
    memory: Resource | None = None
    cpu: Resource | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "discovered": self.discovered,
            "message": self.message,
            "memory": None if self.memory is None else self.memory.to_dict(),
            "cpu": None if self.cpu is None else self.cpu.to_dict(),
        }


@dataclass
class ConnectionStatus:
    connected: bool = False
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"connected": self.connected, "message": self.message}


@dataclass
class ClusterPayload:
    """A cluster as the SaaS sees it."""

    api_version: str = API_VERSION
    name: str = ""
    namespace: str = ""
    environment: str = ""
    provider: str = ""
    region: str = ""
    total_nodes: int | None = None
    version: str = ""
    connection: ConnectionStatus | None = None
    resources: Resources | None = None
    creation_timestamp: datetime | None = None
    total_issues: int | None = None
    plugin_status: dict[str, PluginStatus] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "name": self.name,
            "namespace": self.namespace,
            "environment": self.environment,
            "provider": self.provider,
            "region": self.region,
            "totalNodes": self.total_nodes,
            "version": self.version,
            "connection": None if self.connection is None else self.connection.to_dict(),
            "resources": None if self.resources is None else self.resources.to_dict(),
            "creationTimestamp": _format_time(self.creation_timestamp),
            "totalIssues": self.total_issues,
            "pluginStatus": None
            if self.plugin_status is None
            else {name: status.to_dict() for name, status in self.plugin_status.items()},
        }


def _resource(entry: Mapping[str, Any] | None) -> Resource | None:
    if entry is None:
        return None
    return Resource(
        available=str(entry.get("available", "")),
        usage=str(entry.get("usage", "")),
        usage_percentage=int(entry.get("usagePercentage", 0)),
    )


def new_cluster(cluster: Cluster) -> ClusterPayload:
    """The SaaS payload for ``cluster``, without plugin status and issues.

    Resource entries are mappings with ``available``, ``usage`` and
    ``usagePercentage``; the quantities are passed on as given.
    """
    status = cluster.status
    payload = ClusterPayload(
        api_version=API_VERSION,
        name=cluster.metadata.name,
        namespace=cluster.metadata.namespace,
        environment=cluster.metadata.labels.get(LABEL_ENVIRONMENT, ""),
        provider=status.provider,
        region=status.region,
        total_nodes=status.total_nodes,
        version=status.kubernetes_version,
        creation_timestamp=status.creation_timestamp,
        resources=Resources(),
        connection=ConnectionStatus(),
    )
    for condition in status.conditions:
        if condition.type == CLUSTER_READY:
            payload.connection.connected = condition.status == ConditionStatus.TRUE
            payload.connection.message = condition.message
        elif condition.type == CLUSTER_RESOURCES_DISCOVERED:
            payload.resources.discovered = condition.status == ConditionStatus.TRUE
            payload.resources.message = condition.message

    payload.resources.cpu = _resource(status.resources.get(RESOURCE_CPU))
    payload.resources.memory = _resource(status.resources.get(RESOURCE_MEMORY))
    return payload


def new_scan_status(
    cluster_scan: ClusterScan, scans: Iterable[ClusterScan]
) -> tuple[dict[str, PluginStatus] | None, int | None]:
    """Merge the plugin statuses of ``scans`` and ``cluster_scan`` (applied last).

    Returns the status per plugin and the total number of issues; either is
    None when no scan contributes to it.
    """
    plugin_status: dict[str, PluginStatus] | None = None
    total_issues: int | None = None

    for cs in [*scans, cluster_scan]:
        if cs.status.total_issues is not None:
            total_issues = (total_issues or 0) + cs.status.total_issues
        for plugin, scan in cs.status.plugins.items():
            if plugin_status is None:
                plugin_status = {}
            current = plugin_status.get(plugin)
            if current is None:
                current = plugin_status[plugin] = PluginStatus(
                    scan=ScanStatus(status=ScanStatusType.UNKNOWN)
                )
            current.scan.suspend = bool(cs.spec.suspend)
            current.schedule = cs.spec.schedule
            current.scan.id = scan.last_scan_id
            current.last_successful_scan_id = scan.last_successful_scan_id

            if scan.total_issues is not None:
                current.issue_count = (current.issue_count or 0) + scan.total_issues

            if scan.last_finished_status == JOB_COMPLETE:
                current.scan.status = ScanStatusType.SCANNED
            elif scan.last_finished_status == JOB_FAILED:
                current.scan.status = ScanStatusType.FAILED
                current.scan.message = scan.last_error_msg
            elif scan.last_finished_status == "":
                current.scan.message = "Scan not finished"

            if current.last_successful_scan_time is None or is_before(
                current.last_successful_scan_time, cs.status.last_successful_time
            ):
                current.last_successful_scan_time = cs.status.last_successful_time
            if current.last_finished_scan_time is None or is_before(
                current.last_finished_scan_time, cs.status.last_finished_time
            ):
                current.last_finished_scan_time = cs.status.last_finished_time
            if current.next_schedule_scan_time is None or is_before(
                cs.status.next_schedule_time, current.next_schedule_scan_time
            ):
                current.next_schedule_scan_time = cs.status.next_schedule_time

    return plugin_status, total_issues


def new_scan_status_with_issues(
    cluster_scan: ClusterScan,
    scans: Iterable[ClusterScan],
    issues: Iterable[ClusterIssue],
) -> dict[str, PluginStatus] | None:
    """Like :func:`new_scan_status`, with each plugin's issues attached."""
    plugin_status, _ = new_scan_status(cluster_scan, scans)
    if plugin_status is None:
        return None
    for issue in issues:
        plugin = issue.metadata.labels.get(LABEL_PLUGIN, "")
        if plugin in plugin_status:
            plugin_status[plugin].issues.append(new_resourced_issue(issue))
    return plugin_status