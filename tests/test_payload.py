from datetime import datetime, timezone

from zora.cluster import LABEL_ENVIRONMENT, Cluster, ClusterStatus
from zora.clusterissue import LABEL_PLUGIN, ClusterIssue, ClusterIssueSpec
from zora.clusterscan import ClusterScan, ClusterScanSpec, ClusterScanStatus, PluginScanStatus
from zora.meta import Condition, ConditionStatus, ObjectMeta
from zora.saas.payload import (
    ConnectionStatus,
    Resource,
    ScanStatusType,
    new_cluster,
    new_scan_status,
    new_scan_status_with_issues,
)


def _time(text):
    return datetime.strptime(text, "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=timezone.utc)


def _scan(plugins, suspend=None, schedule="0 * * * *", total=None, **times):
    return ClusterScan(
        metadata=ObjectMeta(name="scan", namespace="ns"),
        spec=ClusterScanSpec(cluster_ref="prd", schedule=schedule, suspend=suspend),
        status=ClusterScanStatus(plugins=plugins, total_issues=total, **times),
    )


def _cluster():
    return Cluster(
        metadata=ObjectMeta(name="prd", namespace="ns", labels={LABEL_ENVIRONMENT: "prod"}),
        status=ClusterStatus(
            provider="aws",
            region="us-east-1",
            total_nodes=3,
            kubernetes_version="v1.27.1",
            creation_timestamp=_time("2022-08-08T21:00:00Z"),
            conditions=[
                Condition(type="Ready", status=ConditionStatus.TRUE, message="connected"),
                Condition(
                    type="ResourcesDiscovered", status=ConditionStatus.FALSE, message="no metrics"
                ),
            ],
            resources={"cpu": {"available": "4", "usage": "1", "usagePercentage": 25}},
        ),
    )


def test_new_cluster_copies_identity_and_status():
    payload = new_cluster(_cluster())
    assert payload.name == "prd"
    assert payload.namespace == "ns"
    assert payload.environment == "prod"
    assert payload.provider == "aws"
    assert payload.total_nodes == 3
    assert payload.version == "v1.27.1"
    assert payload.api_version == "v1alpha1"


def test_new_cluster_reads_conditions():
    payload = new_cluster(_cluster())
    assert payload.connection == ConnectionStatus(connected=True, message="connected")
    assert payload.resources.discovered is False
    assert payload.resources.message == "no metrics"


def test_new_cluster_resources():
    payload = new_cluster(_cluster())
    assert payload.resources.cpu == Resource(available="4", usage="1", usage_percentage=25)
    assert payload.resources.memory is None


def test_new_cluster_without_plugin_status():
    payload = new_cluster(_cluster())
    assert payload.plugin_status is None
    assert payload.total_issues is None


def test_cluster_to_dict_formats_timestamp():
    data = new_cluster(_cluster()).to_dict()
    assert data["creationTimestamp"] == "2022-08-08T21:00:00Z"
    assert data["connection"] == {"connected": True, "message": "connected"}
    assert data["pluginStatus"] is None


def test_scan_status_without_plugins_is_none():
    status, total = new_scan_status(_scan({}), [])
    assert status is None
    assert total is None


def test_scan_status_complete_is_scanned():
    scan = _scan(
        {"popeye": PluginScanStatus(last_finished_status="Complete", last_scan_id="a1", total_issues=4)},
        total=4,
    )
    status, total = new_scan_status(scan, [])
    assert status["popeye"].scan.status == ScanStatusType.SCANNED
    assert status["popeye"].scan.id == "a1"
    assert status["popeye"].issue_count == 4
    assert total == 4


def test_scan_status_failed_carries_error():
    scan = _scan({"brutus": PluginScanStatus(last_finished_status="Failed", last_error_msg="boom")})
    status, _ = new_scan_status(scan, [])
    assert status["brutus"].scan.status == ScanStatusType.FAILED
    assert status["brutus"].scan.message == "boom"


def test_scan_status_not_finished():
    scan = _scan({"popeye": PluginScanStatus(last_status="Active")})
    status, _ = new_scan_status(scan, [])
    assert status["popeye"].scan.status == ScanStatusType.UNKNOWN
    assert status["popeye"].scan.message == "Scan not finished"
    assert status["popeye"].issue_count is None


def test_scan_status_suspend_and_schedule_from_spec():
    scan = _scan({"popeye": PluginScanStatus()}, suspend=True, schedule="*/5 * * * *")
    status, _ = new_scan_status(scan, [])
    assert status["popeye"].scan.suspend is True
    assert status["popeye"].schedule == "*/5 * * * *"


def test_scan_status_picks_latest_and_earliest_times():
    early = _time("2022-08-08T20:00:00Z")
    late = _time("2022-08-08T21:00:00Z")
    other = _scan(
        {"popeye": PluginScanStatus()},
        last_successful_time=late,
        last_finished_time=early,
        next_schedule_time=late,
    )
    main = _scan(
        {"popeye": PluginScanStatus()},
        last_successful_time=early,
        last_finished_time=late,
        next_schedule_time=early,
    )
    status, _ = new_scan_status(main, [other])
    assert status["popeye"].last_successful_scan_time == late
    assert status["popeye"].last_finished_scan_time == late
    assert status["popeye"].next_schedule_scan_time == early


def test_scan_status_with_issues_attaches_known_plugins_only():
    scan = _scan({"popeye": PluginScanStatus()})
    issues = [
        ClusterIssue(metadata=ObjectMeta(labels={LABEL_PLUGIN: "popeye"}), spec=ClusterIssueSpec(id="POP-106")),
        ClusterIssue(metadata=ObjectMeta(labels={LABEL_PLUGIN: "marvin"}), spec=ClusterIssueSpec(id="M-1")),
    ]
    status = new_scan_status_with_issues(scan, [], issues)
    assert [i.issue.id for i in status["popeye"].issues] == ["POP-106"]
    assert "marvin" not in status


def test_scan_status_with_issues_none_without_plugins():
    issue = ClusterIssue(metadata=ObjectMeta(labels={LABEL_PLUGIN: "popeye"}))
    assert new_scan_status_with_issues(_scan({}), [], [issue]) is None


def test_plugin_status_to_dict():
    scan = _scan({"popeye": PluginScanStatus(last_finished_status="Complete", last_successful_scan_id="a1")})
    status, _ = new_scan_status(scan, [])
    data = status["popeye"].to_dict()
    assert data["scan"]["status"] == "scanned"
    assert data["lastSuccessfulScanID"] == "a1"
    assert data["issues"] is None