"""Plugin bookkeeping for a ClusterScan: defaults, outdated plugins and issue counts."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from zora.clusterissue import LABEL_PLUGIN, ClusterIssue
from zora.clusterscan import ClusterScan, PluginReference


def default_plugins(names: Iterable[str], namespace: str) -> list[PluginReference]:
    """References to the default plugins, all in ``namespace``."""
    return [PluginReference(name=name, namespace=namespace) for name in names]


def get_old_plugins(
    cluster_scan: ClusterScan, plugin_refs: Iterable[PluginReference]
) -> list[str]:
    """Plugins in the scan's status that are no longer among ``plugin_refs``."""
    declared = {ref.name for ref in plugin_refs}
    return [name for name in cluster_scan.status.plugins if name not in declared]


def remove_old_plugins(
    cluster_scan: ClusterScan, plugin_refs: Iterable[PluginReference]
) -> list[str]:
    """Drop outdated plugins from the scan's status and return their names.

    The caller is expected to delete the CronJobs of the returned plugins.
    """
    old = get_old_plugins(cluster_scan, plugin_refs)
    for name in old:
        del cluster_scan.status.plugins[name]
    return old


def count_issues(issues: Iterable[ClusterIssue], cluster_scan: ClusterScan) -> None:
    """Set the per-plugin and overall issue totals of ``cluster_scan`` from ``issues``.

    A plugin without issues gets no total; the overall total is None when
    there are no issues at all.
    """
    by_plugin = Counter(issue.metadata.labels.get(LABEL_PLUGIN, "") for issue in issues)
    for name, plugin_status in cluster_scan.status.plugins.items():
        plugin_status.total_issues = by_plugin[name] if name in by_plugin else None
    total = sum(by_plugin.values())
    cluster_scan.status.total_issues = total if total else None