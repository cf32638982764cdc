"""Jobs started by plugin CronJobs and how their outcome feeds a scan status."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from zora.clusterscan import ACTIVE, JOB_COMPLETE, JOB_FAILED, PluginScanStatus
from zora.meta import ConditionStatus, ObjectMeta
from zora.naming import truncate_name

CRON_JOB_NAME_MAX_LENGTH = 52


@dataclass
class JobCondition:
    """One condition of a Job, such as Complete or Failed."""

    type: str
    status: ConditionStatus = ConditionStatus.TRUE
    last_transition_time: datetime | None = None


@dataclass
class Job:
    """A single run of a plugin scan."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    start_time: datetime | None = None
    conditions: list[JobCondition] = field(default_factory=list)


def cron_job_name(cluster_scan_name: str, plugin_name: str) -> str:
    """Name of the CronJob running ``plugin_name`` for a scan, at most 52 characters."""
    return truncate_name(f"{cluster_scan_name}-{plugin_name}", CRON_JOB_NAME_MAX_LENGTH)


def get_finished_status(job: Job) -> tuple[bool, str, datetime | None]:
    """Whether the job finished, with its final condition type and time.

    A job is finished when its Complete or Failed condition is True.
    """
    for condition in job.conditions:
        if condition.type in (JOB_COMPLETE, JOB_FAILED) and condition.status == ConditionStatus.TRUE:
            return True, condition.type, condition.last_transition_time
    return False, "", None


def _start_order(job: Job) -> tuple[bool, float]:
    # Jobs that have not started yet come first, then the most recently started.
    if job.start_time is None:
        return True, 0.0
    return False, job.start_time.timestamp()


def latest_job(jobs: Iterable[Job]) -> Job | None:
    """The most recent job: one not started yet, else the latest to start."""
    return max(jobs, key=_start_order, default=None)


def record_job(
    plugin_status: PluginScanStatus,
    job: Job,
    last_schedule_time: datetime | None,
    active: bool,
) -> str:
    """Update ``plugin_status`` from the plugin's last job and return its status.

    ``active`` tells whether the CronJob currently has running jobs.
    """
    finished, status, finished_time = get_finished_status(job)
    if finished:
        plugin_status.last_finished_status = status
    elif active:
        status = ACTIVE
    plugin_status.last_status = status
    plugin_status.last_scan_id = job.metadata.uid
    plugin_status.last_schedule_time = last_schedule_time
    plugin_status.last_finished_time = finished_time
    if status == JOB_COMPLETE:
        plugin_status.last_successful_scan_id = job.metadata.uid
        plugin_status.last_successful_time = finished_time
    return status