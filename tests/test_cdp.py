"""
Tests for CDP neighbor query and adapter filtering.
"""

from conftest import make_cdp_info, make_host
from vsphere_ops.core import query_cdp_neighbors, iter_cdp_neighbors, neighbor_record_from


class TestNeighborRecord:
    def test_all_fields_mapped(self):
        record = neighbor_record_from("esx01", "vmnic0", make_cdp_info())

        assert record.host_name == "esx01"
        assert record.device == "vmnic0"
        assert record.cdp_version == 2
        assert record.ttl == 146
        assert record.samples == 3
        assert record.dev_id == "sw01"
        assert record.port_id == "GigabitEthernet1/0/1"
        assert record.software_version.startswith("Cisco IOS")
        assert record.hardware_platform == "cisco WS-C3850-48T"
        assert record.ip_prefix == "10.0.0.0"
        assert record.ip_prefix_len == 24
        assert record.vlan == 100
        assert record.full_duplex is True
        assert record.mtu == 1500
        assert record.system_name == "sw01.example.com"
        assert record.system_oid == "1.3.6.1.4.1.9.1.1745"
        assert record.mgmt_addr == "10.0.0.2"
        assert record.location == "DC1 Row 4"

    def test_capabilities_mapped(self):
        caps = neighbor_record_from("esx01", "vmnic0", make_cdp_info()).device_capability

        assert caps.router is True
        assert caps.network_switch is True
        assert caps.igmp_enabled is True
        assert caps.transparent_bridge is False
        assert caps.repeater is False


class TestQueryCdpNeighbors:
    def test_adapters_without_neighbor_are_dropped(self, esx_hosts):
        esx01, _ = esx_hosts

        records = query_cdp_neighbors([esx01])

        assert [r.device for r in records] == ["vmnic0", "vmnic2"]

    def test_order_follows_hosts_then_adapters(self, esx_hosts):
        records = query_cdp_neighbors(list(esx_hosts))

        assert [(r.host_name, r.device) for r in records] == [
            ("esx01", "vmnic0"),
            ("esx01", "vmnic2"),
            ("esx02", "vmnic0"),
            ("esx02", "vmnic1"),
        ]

    def test_filter_is_subset_with_identical_values(self, esx_hosts):
        full = query_cdp_neighbors(list(esx_hosts))
        filtered = query_cdp_neighbors(list(esx_hosts), ["vmnic0"])

        assert filtered == [r for r in full if r.device == "vmnic0"]

    def test_filter_only_queries_matching_adapters(self, esx_hosts):
        esx01, _ = esx_hosts

        query_cdp_neighbors([esx01], ["vmnic2"])

        esx01.configManager.networkSystem.QueryNetworkHint.assert_called_once_with(device=["vmnic2"])

    def test_unmatched_filter_names_ignored(self, esx_hosts):
        esx01, _ = esx_hosts

        records = query_cdp_neighbors([esx01], ["vmnic9", "vmnic0"])

        assert [r.device for r in records] == ["vmnic0"]

    def test_filter_on_adapter_without_neighbor_yields_nothing(self, esx_hosts):
        esx01, _ = esx_hosts

        assert query_cdp_neighbors([esx01], ["vmnic1"]) == []

    def test_host_without_pnics(self):
        host = make_host("esx03", {})
        host.config.network.pnic = None

        assert query_cdp_neighbors([host]) == []

    def test_generator_is_lazy(self, esx_hosts):
        esx01, esx02 = esx_hosts

        first = next(iter_cdp_neighbors([esx01, esx02]))

        assert first.device == "vmnic0"
        esx02.configManager.networkSystem.QueryNetworkHint.assert_not_called()
