"""
Tests for host resolution from cluster or host names.
"""

from unittest.mock import MagicMock

import pytest
from pyVmomi import vim

from conftest import make_client
from vsphere_ops.core import resolve_hosts
from vsphere_ops.utils import HostSelectionError, ResourceNotFoundError


def _cluster(*hosts):
    cluster = MagicMock()
    cluster.host = list(hosts)
    return cluster


class TestResolveHosts:
    def test_cluster_members_concatenated_in_order(self):
        h1, h2, h3 = MagicMock(), MagicMock(), MagicMock()
        client = make_client({"A": _cluster(h1, h2), "B": _cluster(h3)})

        assert resolve_hosts(client, cluster_names=["A", "B"]) == [h1, h2, h3]

    def test_overlapping_clusters_are_not_deduplicated(self):
        h1 = MagicMock()
        client = make_client({"A": _cluster(h1), "B": _cluster(h1)})

        assert resolve_hosts(client, cluster_names=["A", "B"]) == [h1, h1]

    def test_cluster_lookup_uses_cluster_type(self):
        client = make_client({"A": _cluster()})

        resolve_hosts(client, cluster_names=["A"])

        client.get_object_by_name.assert_called_once_with(
            "A", vim.ClusterComputeResource, "cluster_names"
        )

    def test_host_names_resolved_directly(self):
        h1, h2 = MagicMock(), MagicMock()
        client = make_client({"esx01": h1, "esx02": h2})

        assert resolve_hosts(client, host_names=["esx02", "esx01"]) == [h2, h1]
        client.get_object_by_name.assert_any_call("esx02", vim.HostSystem, "host_names")

    def test_unknown_name_propagates(self):
        client = make_client({"A": _cluster()})

        with pytest.raises(ResourceNotFoundError) as exc_info:
            resolve_hosts(client, cluster_names=["A", "missing"])

        assert exc_info.value.parameter == "cluster_names"

    def test_both_selectors_rejected(self):
        with pytest.raises(HostSelectionError):
            resolve_hosts(make_client(), cluster_names=["A"], host_names=["esx01"])

    def test_no_selector_rejected(self):
        with pytest.raises(HostSelectionError):
            resolve_hosts(make_client())
