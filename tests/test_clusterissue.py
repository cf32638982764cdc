import pytest

from zora.clusterissue import (
    LABEL_PLUGIN,
    LABEL_SCAN_ID,
    ClusterIssue,
    ClusterIssueSeverity,
    ClusterIssueSpec,
)


def test_add_resource_records_new_resource():
    spec = ClusterIssueSpec(id="POP-106")
    spec.add_resource("apps/v1/deployments", "ns/dep1")
    assert spec.resources == {"apps/v1/deployments": ["ns/dep1"]}
    assert spec.total_resources == 1


def test_add_resource_ignores_duplicates():
    spec = ClusterIssueSpec()
    spec.add_resource("apps/v1/deployments", "ns/dep1")
    spec.add_resource("apps/v1/deployments", "ns/dep1")
    assert spec.resources["apps/v1/deployments"] == ["ns/dep1"]
    assert spec.total_resources == 1


def test_add_resource_counts_across_kinds():
    spec = ClusterIssueSpec()
    spec.add_resource("apps/v1/deployments", "ns/dep1")
    spec.add_resource("apps/v1/deployments", "ns/dep2")
    spec.add_resource("v1/pods", "ns/pod1")
    assert spec.total_resources == sum(len(v) for v in spec.resources.values())
    assert sorted(spec.resources) == ["apps/v1/deployments", "v1/pods"]


def test_same_resource_under_different_kinds_is_kept_twice():
    spec = ClusterIssueSpec()
    spec.add_resource("v1/pods", "ns/x")
    spec.add_resource("v1/services", "ns/x")
    assert spec.total_resources == 2


@pytest.mark.parametrize(
    "member, value",
    [
        (ClusterIssueSeverity.UNKNOWN, "Unknown"),
        (ClusterIssueSeverity.LOW, "Low"),
        (ClusterIssueSeverity.MEDIUM, "Medium"),
        (ClusterIssueSeverity.HIGH, "High"),
    ],
)
def test_severity_values(member, value):
    assert ClusterIssueSeverity(value) is member
    assert str(member) == value


def test_unknown_severity_rejected():
    with pytest.raises(ValueError):
        ClusterIssueSeverity("Critical")


def test_cluster_issue_holds_labels():
    issue = ClusterIssue()
    issue.metadata.labels[LABEL_PLUGIN] = "popeye"
    issue.metadata.labels[LABEL_SCAN_ID] = "123"
    assert issue.metadata.labels == {"plugin": "popeye", "scanID": "123"}
    assert issue.spec.total_resources == 0