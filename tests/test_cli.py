"""
Tests for CLI commands.
"""

import json
from unittest.mock import patch

import pytest
from rich.console import Console
from typer.testing import CliRunner

from conftest import make_client, make_controller, make_disk, make_vm
from vsphere_ops.cli import app

runner = CliRunner()

ENV = {
    "VSPHERE_HOST": "vcenter.example.com",
    "VSPHERE_USERNAME": "administrator@vsphere.local",
    "VSPHERE_PASSWORD": "secret",
}


@pytest.fixture
def fake_client():
    """patch VSphereClient so commands use an in-memory inventory"""
    with patch("vsphere_ops.cli.VSphereClient") as client_cls:
        def install(objects=None):
            client = make_client(objects)
            client.connect.return_value = None
            client_cls.return_value = client
            return client

        yield install


class TestCdp:
    def test_json_output(self, fake_client, esx_hosts):
        esx01, _ = esx_hosts
        client = fake_client({"esx01": esx01})

        result = runner.invoke(app, ["cdp", "--host", "esx01", "--json"], env=ENV)

        assert result.exit_code == 0
        records = json.loads(result.stdout)
        assert [r["device"] for r in records] == ["vmnic0", "vmnic2"]
        assert records[1]["vlan"] == 200
        client.disconnect.assert_called_once()

    def test_adapter_filter(self, fake_client, esx_hosts):
        esx01, _ = esx_hosts
        fake_client({"esx01": esx01})

        result = runner.invoke(app, ["cdp", "-H", "esx01", "-a", "vmnic2", "--json"], env=ENV)

        assert [r["device"] for r in json.loads(result.stdout)] == ["vmnic2"]

    def test_table_output(self, fake_client, esx_hosts):
        esx01, _ = esx_hosts
        fake_client({"esx01": esx01})

        with patch("vsphere_ops.cli.console", Console(width=200)):
            result = runner.invoke(app, ["cdp", "--host", "esx01"], env=ENV)

        assert result.exit_code == 0
        assert "vmnic0" in result.stdout
        assert "Gi1/0/1" in result.stdout

    def test_cluster_and_host_are_exclusive(self, fake_client):
        fake_client()

        result = runner.invoke(app, ["cdp", "--cluster", "A", "--host", "esx01"], env=ENV)

        assert result.exit_code == 2

    def test_unknown_host_exits_1(self, fake_client):
        fake_client()

        result = runner.invoke(app, ["cdp", "--host", "missing"], env=ENV)

        assert result.exit_code == 1
        assert "missing" in result.output


class TestAddDisk:
    def test_submits_and_prints_task(self, fake_client):
        vm = make_vm("vm01", [make_controller()], task_id="task-5")
        fake_client({"vm01": vm})

        result = runner.invoke(
            app, ["add-disk", "vm01", "--capacity-gb", "20", "--storage-format", "EagerZeroedThick", "--json"], env=ENV
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout)["task_id"] == "task-5"
        change = vm.ReconfigVM_Task.call_args.kwargs["spec"].deviceChange[0]
        assert change.device.capacityInKB == 20971520
        assert change.device.backing.eagerlyScrub is True
        assert change.device.backing.thinProvisioned is False

    def test_vm_name_from_stdin(self, fake_client):
        vm = make_vm("vm01", [make_controller()])
        fake_client({"vm01": vm})

        result = runner.invoke(app, ["add-disk", "-", "--capacity-gb", "1", "--thin", "--json"], input="vm01\n", env=ENV)

        assert result.exit_code == 0
        vm.ReconfigVM_Task.assert_called_once()

    def test_controller_key_option(self, fake_client):
        vm = make_vm("vm01", [make_controller(1000), make_controller(1001, "SCSI controller 1")])
        fake_client({"vm01": vm})

        result = runner.invoke(app, ["add-disk", "vm01", "--capacity-gb", "1", "--controller", "1001"], env=ENV)

        assert result.exit_code == 0
        change = vm.ReconfigVM_Task.call_args.kwargs["spec"].deviceChange[0]
        assert change.device.controllerKey == 1001

    def test_rejects_non_positive_capacity(self, fake_client):
        fake_client()

        result = runner.invoke(app, ["add-disk", "vm01", "--capacity-gb", "0"], env=ENV)

        assert result.exit_code == 2

    @pytest.mark.parametrize("capacity", ["nan", "inf"])
    def test_rejects_non_finite_capacity_before_connecting(self, capacity):
        with patch("vsphere_ops.cli.VSphereClient") as client_cls:
            result = runner.invoke(app, ["add-disk", "vm01", "--capacity-gb", capacity], env=ENV)

        assert result.exit_code == 2
        client_cls.assert_not_called()

    def test_no_free_slot_exits_1(self, fake_client):
        disks = [make_disk(2000 + u, 1000, u) for u in range(16) if u != 7]
        vm = make_vm("vm01", [make_controller(attached=[d.key for d in disks]), *disks])
        fake_client({"vm01": vm})

        result = runner.invoke(app, ["add-disk", "vm01", "--capacity-gb", "1"], env=ENV)

        assert result.exit_code == 1
        vm.ReconfigVM_Task.assert_not_called()


class TestTask:
    def test_prints_state(self, fake_client):
        fake_client()

        result = runner.invoke(app, ["task", "task-5", "--json"], env=ENV)

        assert result.exit_code == 0
        assert json.loads(result.stdout)["state"] == "queued"
