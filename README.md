# zora

Data models and logic for Kubernetes cluster scanning: the resources that
describe clusters, scans, plugins, issues and vulnerability reports; rolling
per-plugin scan results up into a scan-wide status; and building the payloads
that describe a cluster and its scans to a SaaS workspace.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `zora.meta` – `ConditionStatus`, `Condition`, `NamespacedName`, `ObjectMeta`,
  the `Status` block with `get_condition`, `condition_is_true` and
  `set_condition`, and `is_before` for comparing optional times.
  `set_condition` updates an existing condition in place and refreshes its
  transition time only when its status changes.
- `zora.clusterscan` – `ClusterScan` with `ClusterScanSpec`,
  `ClusterScanStatus`, `PluginReference` and `PluginScanStatus`.
  `ClusterScanStatus.sync_status()` derives the scan-wide schedule, finish,
  success and next-schedule times, the last finished status (Failed wins over
  Complete), the last status (Active when any plugin is active) and the sorted,
  comma-separated plugin names. `last_scan_ids(successful)` lists the plugins'
  last (or last successful) scan IDs.
- `zora.cluster` – `Cluster`, `ClusterSpec`, `ClusterStatus`, with
  `kubeconfig_ref_key()` and `set_status()`.
- `zora.clusterissue` – `ClusterIssue`, `ClusterIssueSpec` (with
  `add_resource`, which ignores duplicates) and `ClusterIssueSeverity`.
- `zora.vulnerability` – `VulnerabilityReport` and its parts, with
  `set_saas_status`, `saas_status_is_true` and `to_dict` for a JSON-ready form.
- `zora.plugin` – `Plugin` and `PluginSpec`; `get_image_pull_policy()` falls
  back to `IfNotPresent`.
- `zora.customcheck` – `CustomCheck` with `get_params()` (parses the raw JSON
  parameters), `file_name()` and `set_ready_status()`.
- `zora.jobs` – `Job`, `JobCondition`, `get_finished_status`, `latest_job`
  (a job not yet started, else the latest started), `record_job` (updates a
  `PluginScanStatus` from a job) and `cron_job_name` (at most 52 characters).
- `zora.scanning` – `default_plugins`, `get_old_plugins`,
  `remove_old_plugins` and `count_issues`.
- `zora.naming` – `truncate_name` shortens a name to a given length by keeping
  both ends joined with `---`.
- `zora.saas.issues` – `Issue`, `ResourcedIssue`, `new_issue` and
  `new_resourced_issue` (resources written `namespace/name`; a bare name gets
  an empty namespace).
- `zora.saas.payload` – `ClusterPayload`, `PluginStatus`, `ScanStatus`,
  `ScanStatusType`, `Resources`, `Resource`, `ConnectionStatus`, and the
  builders `new_cluster`, `new_scan_status` and `new_scan_status_with_issues`.
  Each payload class has a `to_dict()` for serialising with `json`.

## Examples

```python
from zora.clusterscan import ClusterScanStatus, PluginScanStatus

status = ClusterScanStatus(plugins={
    "popeye": PluginScanStatus(last_status="Active"),
    "marvin": PluginScanStatus(last_finished_status="Complete"),
})
status.sync_status()
print(status.last_status, status.last_finished_status, status.plugin_names)
# Active Complete marvin,popeye
```

```python
from zora.naming import truncate_name

truncate_name("a-very-long-cluster-scan-name-with-a-plugin", 20)
# 'a-very-lo---a-plugin'
```

## What this package does not do

It builds SaaS payloads but does not send them: there is no HTTP client and no
hooks that push cluster or scan changes to a workspace. It does not talk to a
Kubernetes API server, run controllers or reconcile resources, create CronJobs,
or store anything; callers supply the resources and act on the results. It
provides no command-line program.