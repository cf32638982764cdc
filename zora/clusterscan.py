"""The ClusterScan resource: which plugins scan a cluster and how they fared."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from zora.meta import Condition, ConditionStatus, NamespacedName, ObjectMeta, Status, is_before

JOB_COMPLETE = "Complete"
JOB_FAILED = "Failed"
ACTIVE = "Active"


@dataclass
class PluginReference:
    """A reference to a Plugin resource used to scan a cluster."""

    name: str
    namespace: str = ""
    env: list[dict[str, Any]] = field(default_factory=list)

    def plugin_key(self, default_namespace: str) -> NamespacedName:
        """Key of the referenced Plugin, falling back to ``default_namespace``."""
        return NamespacedName(name=self.name, namespace=self.namespace or default_namespace)


@dataclass
class ProcessedScanStatus:
    status: str = ""
    message: str = ""
    suspend: bool = False
    id: str = ""


@dataclass
class PluginScanProcessedStatus:
    scan: ProcessedScanStatus | None = None
    issue_count: int | None = None
    last_successful_scan_time: datetime | None = None
    last_finished_scan_time: datetime | None = None
    next_schedule_scan_time: datetime | None = None
    schedule: str = ""
    last_successful_scan_id: str = ""


@dataclass
class PluginScanStatus:
    """Observed state of the scans of one plugin."""

    last_schedule_time: datetime | None = None
    last_finished_time: datetime | None = None
    last_successful_time: datetime | None = None
    next_schedule_time: datetime | None = None
    last_scan_id: str = ""
    last_successful_scan_id: str = ""
    last_status: str = ""
    last_finished_status: str = ""
    last_error_msg: str = ""
    total_issues: int | None = None


@dataclass
class ClusterScanSpec:
    cluster_ref: str = ""
    schedule: str = ""
    suspend: bool | None = None
    plugins: list[PluginReference] = field(default_factory=list)
    successful_scans_history_limit: int | None = 3
    failed_scans_history_limit: int | None = 1


@dataclass
class ClusterScanStatus(Status):
    """Observed state of a ClusterScan, aggregated from its plugins."""

    plugins: dict[str, PluginScanStatus] = field(default_factory=dict)
    plugin_names: str = ""
    suspend: bool = False
    last_schedule_time: datetime | None = None
    last_finished_time: datetime | None = None
    last_finished_status: str = ""
    last_status: str = ""
    last_successful_time: datetime | None = None
    next_schedule_time: datetime | None = None
    total_issues: int | None = None
    processed_vulnerabilities: dict[str, dict[str, str]] | None = None
    processed_misconfigurations: dict[str, dict[str, str]] | None = None
    processed_plugin_status: dict[str, PluginScanProcessedStatus] | None = None

    def get_plugin_status(self, name: str) -> PluginScanStatus:
        """Return the status of a plugin, creating an empty one if absent."""
        return self.plugins.setdefault(name, PluginScanStatus())

    def sync_status(self) -> None:
        """Derive the aggregate status and times from the plugin statuses."""
        failed: list[str] = []
        active: list[str] = []
        complete: list[str] = []
        schedule = finished = successful = upcoming = None
        first = True
        for name, plugin in self.plugins.items():
            if first or is_before(schedule, plugin.last_schedule_time) or schedule is None:
                schedule = plugin.last_schedule_time
            if first or finished is None or is_before(finished, plugin.last_finished_time):
                finished = plugin.last_finished_time
            if first or successful is None or is_before(successful, plugin.last_successful_time):
                successful = plugin.last_successful_time
            if first or upcoming is None or is_before(plugin.next_schedule_time, upcoming):
                upcoming = plugin.next_schedule_time
            first = False
            if plugin.last_status == ACTIVE:
                active.append(name)
            if plugin.last_finished_status == JOB_FAILED:
                failed.append(name)
            elif plugin.last_finished_status == JOB_COMPLETE:
                complete.append(name)

        finished_status = status = ""
        if failed:
            finished_status = status = JOB_FAILED
        elif complete:
            finished_status = status = JOB_COMPLETE
        if active:
            status = ACTIVE

        self.last_schedule_time = schedule
        self.last_finished_time = finished
        self.last_successful_time = successful
        self.next_schedule_time = upcoming
        self.last_finished_status = finished_status
        self.last_status = status
        self.plugin_names = ",".join(sorted(self.plugins))

    def last_scan_ids(self, successful: bool) -> list[str]:
        """IDs of each plugin's last scan, or last successful scan; blanks skipped."""
        ids = (
            plugin.last_successful_scan_id if successful else plugin.last_scan_id
            for plugin in self.plugins.values()
        )
        return [scan_id for scan_id in ids if scan_id]


@dataclass
class ClusterScan:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ClusterScanSpec = field(default_factory=ClusterScanSpec)
    status: ClusterScanStatus = field(default_factory=ClusterScanStatus)

    def _set(self, condition_type: str, status: ConditionStatus, reason: str, msg: str) -> None:
        self.status.set_condition(
            Condition(
                type=condition_type,
                status=status,
                observed_generation=self.metadata.generation,
                reason=reason,
                message=msg,
            )
        )

    def set_ready_status(self, status: bool, reason: str, msg: str) -> None:
        self._set("Ready", ConditionStatus.TRUE if status else ConditionStatus.FALSE, reason, msg)

    def set_saas_status(self, status: ConditionStatus, reason: str, msg: str) -> None:
        self._set("SaaS", ConditionStatus(status), reason, msg)

    def cluster_key(self) -> NamespacedName:
        """Key of the referenced Cluster, which lives in the scan's namespace."""
        return NamespacedName(name=self.spec.cluster_ref, namespace=self.metadata.namespace)