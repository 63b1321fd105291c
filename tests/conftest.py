"""
Shared fixtures: pyVmomi data objects built offline, MagicMock for managed objects.
"""

from unittest.mock import MagicMock

import pytest
from pyVmomi import vim

from vsphere_ops.models import TaskInfo
from vsphere_ops.utils import ResourceNotFoundError


def make_controller(key=1000, label="SCSI controller 0", attached=(), scsi_unit=7):
    return vim.vm.device.VirtualLsiLogicController(
        key=key,
        busNumber=key - 1000,
        device=list(attached),
        scsiCtlrUnitNumber=scsi_unit,
        deviceInfo=vim.Description(label=label, summary="LSI Logic"),
    )


def make_disk(key, controller_key, unit_number):
    return vim.vm.device.VirtualDisk(
        key=key,
        controllerKey=controller_key,
        unitNumber=unit_number,
        deviceInfo=vim.Description(label=f"Hard disk {key - 1999}", summary="disk"),
    )


def make_vm(name, devices, task_id="task-42"):
    vm = MagicMock(name=f"vm:{name}")
    vm.name = name
    vm.config.hardware.device = devices
    vm.ReconfigVM_Task.return_value = MagicMock(_moId=task_id)
    return vm


def make_cdp_info(dev_id="sw01", port_id="GigabitEthernet1/0/1", vlan=100):
    return vim.host.PhysicalNic.CdpInfo(
        cdpVersion=2,
        timeout=0,
        ttl=146,
        samples=3,
        devId=dev_id,
        address="10.0.0.2",
        portId=port_id,
        deviceCapability=vim.host.PhysicalNic.CdpDeviceCapability(
            router=True,
            transparentBridge=False,
            sourceRouteBridge=False,
            networkSwitch=True,
            host=False,
            igmpEnabled=True,
            repeater=False,
        ),
        softwareVersion="Cisco IOS Software, Version 16.12.4",
        hardwarePlatform="cisco WS-C3850-48T",
        ipPrefix="10.0.0.0",
        ipPrefixLen=24,
        vlan=vlan,
        fullDuplex=True,
        mtu=1500,
        systemName=f"{dev_id}.example.com",
        systemOID="1.3.6.1.4.1.9.1.1745",
        mgmtAddr="10.0.0.2",
        location="DC1 Row 4",
    )


def make_host(name, neighbors):
    """neighbors: 设备名 -> CdpInfo 或 None (无邻居)，按插入顺序枚举网卡"""
    host = MagicMock(name=f"host:{name}")
    host.name = name
    host.config.network.pnic = [vim.host.PhysicalNic(device=device) for device in neighbors]

    def query_network_hint(device):
        return [
            vim.host.PhysicalNic.NetworkHint(device=d, connectedSwitchPort=neighbors[d])
            for d in device
        ]

    host.configManager.networkSystem.QueryNetworkHint.side_effect = query_network_hint
    return host


def make_client(objects=None, task_state="queued"):
    """objects: 名称 -> 对象；查不到时按真实客户端行为抛出 ResourceNotFoundError"""
    objects = objects or {}
    client = MagicMock(name="client")

    def get_object_by_name(name, vim_type, parameter=None):
        if name not in objects:
            raise ResourceNotFoundError("对象", name, parameter)
        return objects[name]

    client.get_object_by_name.side_effect = get_object_by_name
    client.get_task_info.side_effect = lambda task_id: TaskInfo(task_id=task_id, state=task_state)
    return client


@pytest.fixture
def esx_hosts():
    esx01 = make_host("esx01", {
        "vmnic0": make_cdp_info("sw01", "Gi1/0/1"),
        "vmnic1": None,
        "vmnic2": make_cdp_info("sw02", "Gi1/0/2", vlan=200),
    })
    esx02 = make_host("esx02", {
        "vmnic0": make_cdp_info("sw01", "Gi1/0/3"),
        "vmnic1": make_cdp_info("sw02", "Gi1/0/4"),
    })
    return esx01, esx02
