"""The VulnerabilityReport resource: vulnerabilities found in one image."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from zora.meta import Condition, ConditionStatus, ObjectMeta, Status


def _format_time(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def _put_if(data: dict[str, Any], key: str, value: Any) -> None:
    if value:
        data[key] = value


@dataclass
class Vulnerability:
    id: str = ""
    severity: str = ""
    title: str = ""
    description: str = ""
    package: str = ""
    version: str = ""
    fix_version: str = ""
    url: str = ""
    status: str = ""
    type: str = ""
    score: str = ""
    published_date: datetime | None = None
    last_modified_date: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "severity": self.severity,
            "title": self.title,
        }
        _put_if(data, "description", self.description)
        data["package"] = self.package
        data["version"] = self.version
        _put_if(data, "fixVersion", self.fix_version)
        _put_if(data, "url", self.url)
        _put_if(data, "status", self.status)
        _put_if(data, "type", self.type)
        _put_if(data, "score", self.score)
        if self.published_date is not None:
            data["publishedDate"] = _format_time(self.published_date)
        if self.last_modified_date is not None:
            data["lastModifiedDate"] = _format_time(self.last_modified_date)
        return data


@dataclass
class Distro:
    name: str = ""
    version: str = ""


@dataclass
class VulnerabilitySummary:
    total: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    unknown: int = 0


@dataclass
class VulnerabilityReportSpec:
    cluster: str = ""
    image: str = ""
    digest: str = ""
    tags: list[str] = field(default_factory=list)
    architecture: str = ""
    os: str = ""
    distro: Distro | None = None
    total_resources: int = 0
    resources: dict[str, list[str]] = field(default_factory=dict)
    vulnerabilities: list[Vulnerability] = field(default_factory=list)
    summary: VulnerabilitySummary = field(default_factory=VulnerabilitySummary)


def _condition_dict(condition: Condition) -> dict[str, Any]:
    data: dict[str, Any] = {"type": condition.type, "status": str(condition.status)}
    _put_if(data, "observedGeneration", condition.observed_generation)
    if condition.last_transition_time is not None:
        data["lastTransitionTime"] = _format_time(condition.last_transition_time)
    data["reason"] = condition.reason
    data["message"] = condition.message
    return data


def _metadata_dict(meta: ObjectMeta) -> dict[str, Any]:
    data: dict[str, Any] = {}
    _put_if(data, "name", meta.name)
    _put_if(data, "namespace", meta.namespace)
    _put_if(data, "uid", meta.uid)
    _put_if(data, "resourceVersion", meta.resource_version)
    _put_if(data, "generation", meta.generation)
    if meta.creation_timestamp is not None:
        data["creationTimestamp"] = _format_time(meta.creation_timestamp)
    if meta.deletion_timestamp is not None:
        data["deletionTimestamp"] = _format_time(meta.deletion_timestamp)
    _put_if(data, "labels", dict(meta.labels))
    _put_if(data, "annotations", dict(meta.annotations))
    return data


@dataclass
class VulnerabilityReport:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: VulnerabilityReportSpec = field(default_factory=VulnerabilityReportSpec)
    status: Status = field(default_factory=Status)

    def set_saas_status(self, status: ConditionStatus, reason: str, msg: str) -> None:
        """Record the outcome of pushing this report to the SaaS."""
        self.status.set_condition(
            Condition(
                type="SaaS",
                status=ConditionStatus(status),
                observed_generation=self.metadata.generation,
                reason=reason,
                message=msg,
            )
        )

    def saas_status_is_true(self) -> bool:
        return self.status.condition_is_true("SaaS")

    def to_dict(self) -> dict[str, Any]:
        """The report as a JSON-ready mapping."""
        spec = self.spec
        spec_data: dict[str, Any] = {
            "cluster": spec.cluster,
            "image": spec.image,
            "digest": spec.digest,
        }
        _put_if(spec_data, "tags", list(spec.tags))
        _put_if(spec_data, "architecture", spec.architecture)
        _put_if(spec_data, "os", spec.os)
        if spec.distro is not None:
            distro: dict[str, Any] = {}
            _put_if(distro, "name", spec.distro.name)
            _put_if(distro, "version", spec.distro.version)
            spec_data["distro"] = distro
        spec_data["totalResources"] = spec.total_resources
        spec_data["resources"] = {k: list(v) for k, v in spec.resources.items()}
        spec_data["vulnerabilities"] = [v.to_dict() for v in spec.vulnerabilities]
        summary = spec.summary
        spec_data["summary"] = {
            "total": summary.total,
            "critical": summary.critical,
            "high": summary.high,
            "medium": summary.medium,
            "low": summary.low,
            "unknown": summary.unknown,
        }

        status_data: dict[str, Any] = {}
        _put_if(status_data, "observedGeneration", self.status.observed_generation)
        _put_if(status_data, "conditions", [_condition_dict(c) for c in self.status.conditions])

        return {
            "metadata": _metadata_dict(self.metadata),
            "spec": spec_data,
            "status": status_data,
        }