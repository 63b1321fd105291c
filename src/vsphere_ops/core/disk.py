# -*- coding: utf-8 -*-
"""
vSphere Ops - 虚拟磁盘置备

为虚拟机选择 SCSI 控制器和空闲 unit number，构造新增磁盘的设备变更，
以异步重配置任务提交，返回任务状态而不等待完成。
"""

import logging
from decimal import Decimal
from typing import Optional, Union

from pyVmomi import vim

from ..client.vsphere import classify_device
from ..models import (
    SCSI_CONTROLLER_SLOTS,
    DeviceKind,
    DiskSpec,
    StorageFormat,
    TaskInfo,
)
from ..utils.errors import (
    NoAvailableControllerError,
    NoFreeUnitNumberError,
    ResourceNotFoundError,
)


logger = logging.getLogger(__name__)

# 临时设备 key 的基数，新设备 key = -(基数 + 控制器已挂载设备数)
DEVICE_KEY_BASE = 101


# =============================================================================
# 控制器与 unit number 选择
# =============================================================================
def _devices(vm) -> list:
    return list(vm.config.hardware.device or [])


def _scsi_controllers(vm) -> list:
    return [d for d in _devices(vm) if classify_device(d) == DeviceKind.SCSI_CONTROLLER]


def _attached_count(controller) -> int:
    return len(controller.device or [])


def _used_unit_numbers(vm, controller) -> set:
    """控制器上已占用的 unit number，含控制器自身的 scsiCtlrUnitNumber"""
    used = {
        d.unitNumber for d in _devices(vm)
        if d.controllerKey == controller.key and d.unitNumber is not None
    }
    own_unit = getattr(controller, "scsiCtlrUnitNumber", None)
    if own_unit is not None:
        used.add(own_unit)
    return used


def _has_free_unit(vm, controller) -> bool:
    used = _used_unit_numbers(vm, controller)
    return any(u not in used for u in range(SCSI_CONTROLLER_SLOTS))


def select_controller(vm, controller: Optional[Union[int, str]] = None):
    """
    选择新磁盘要挂载的 SCSI 控制器

    未指定时取设备列表中第一个还有空闲 unit number 的 SCSI 控制器
    (控制器自身占用的 7 号也计入)；指定时按 key (int) 或标签 (str) 匹配。
    两种情况都会在最新的设备列表中重新查找，避免使用过期的设备对象。
    """
    if controller is None:
        candidate = next(
            (c for c in _scsi_controllers(vm) if _has_free_unit(vm, c)),
            None
        )
        if candidate is None:
            raise NoAvailableControllerError(
                f"虚拟机 '{vm.name}' 没有可用的 SCSI 控制器", "controller"
            )
        controller = candidate.deviceInfo.label

    for device in _scsi_controllers(vm):
        if isinstance(controller, int) and not isinstance(controller, bool):
            if device.key == controller:
                return device
        elif device.deviceInfo is not None and device.deviceInfo.label == controller:
            return device

    raise ResourceNotFoundError("SCSI 控制器", controller, "controller")


def next_free_unit_number(vm, controller) -> int:
    """
    返回控制器上最小的空闲 unit number

    已占用的号码包括挂在该控制器上的设备，以及控制器自身占用的
    scsiCtlrUnitNumber (通常为 7)。16 个号码全部占用时抛出 NoFreeUnitNumberError。
    """
    used = _used_unit_numbers(vm, controller)
    for unit_number in range(SCSI_CONTROLLER_SLOTS):
        if unit_number not in used:
            return unit_number

    raise NoFreeUnitNumberError(
        f"控制器 '{controller.deviceInfo.label}' 的 {SCSI_CONTROLLER_SLOTS} 个 unit number 已全部占用",
        "controller"
    )


# =============================================================================
# 设备变更构造
# =============================================================================
def capacity_units(capacity_gb: Union[int, float, str, Decimal]):
    """把 GB 换算为 (KB, 字节)，两者严格满足 1024 倍关系"""
    capacity_kb = int(Decimal(str(capacity_gb)) * 1024 * 1024)
    return capacity_kb, capacity_kb * 1024


def build_disk_spec(
    capacity_gb,
    controller_key: int,
    unit_number: int,
    attached_count: int,
    storage_format: StorageFormat = StorageFormat.THIN,
    thin_provisioned: bool = False,
) -> DiskSpec:
    """
    由校验过的输入一次性构造 DiskSpec

    thin_provisioned 开关与 Thin 格式取或，显式开关优先于 Thick 类格式；
    只有 EagerZeroedThick 会置零。
    """
    storage_format = StorageFormat(storage_format)
    capacity_kb, capacity_bytes = capacity_units(capacity_gb)

    return DiskSpec(
        capacity_in_bytes=capacity_bytes,
        capacity_in_kb=capacity_kb,
        eagerly_scrub=storage_format == StorageFormat.EAGER_ZEROED_THICK,
        thin_provisioned=thin_provisioned or storage_format == StorageFormat.THIN,
        controller_key=controller_key,
        unit_number=unit_number,
        key=-(DEVICE_KEY_BASE + attached_count),
    )


def to_device_change(spec: DiskSpec):
    """把 DiskSpec 转换为 vim.vm.device.VirtualDeviceSpec (add + create)"""
    backing = vim.vm.device.VirtualDisk.FlatVer2BackingInfo(
        fileName=spec.file_name,
        diskMode=spec.disk_mode,
        eagerlyScrub=spec.eagerly_scrub,
        thinProvisioned=spec.thin_provisioned,
    )
    disk = vim.vm.device.VirtualDisk(
        key=spec.key,
        controllerKey=spec.controller_key,
        unitNumber=spec.unit_number,
        capacityInKB=spec.capacity_in_kb,
        capacityInBytes=spec.capacity_in_bytes,
        backing=backing,
        deviceInfo=vim.Description(label=spec.label, summary=spec.summary),
    )
    return vim.vm.device.VirtualDeviceSpec(
        operation=vim.vm.device.VirtualDeviceSpec.Operation.add,
        fileOperation=vim.vm.device.VirtualDeviceSpec.FileOperation.create,
        device=disk,
    )


# =============================================================================
# 提交
# =============================================================================
def add_virtual_disk(
    client,
    vm,
    capacity_gb,
    controller: Optional[Union[int, str]] = None,
    storage_format: StorageFormat = StorageFormat.THIN,
    thin_provisioned: bool = False,
) -> TaskInfo:
    """
    为虚拟机新增一块虚拟磁盘

    vm 可以是虚拟机名称或 vim.VirtualMachine 对象。提交重配置任务后
    立即返回任务状态，调用方通过 describeTask 轮询结果。
    任何一步失败都原样抛出，提交之前不会修改虚拟机。
    """
    try:
        if isinstance(vm, str):
            vm = client.get_object_by_name(vm, vim.VirtualMachine, "vm_name")

        chosen = select_controller(vm, controller)
        unit_number = next_free_unit_number(vm, chosen)
        spec = build_disk_spec(
            capacity_gb,
            controller_key=chosen.key,
            unit_number=unit_number,
            attached_count=_attached_count(chosen),
            storage_format=storage_format,
            thin_provisioned=thin_provisioned,
        )
        logger.info(
            f"为虚拟机 {vm.name} 新增 {capacity_gb}GB 磁盘: "
            f"控制器 {chosen.deviceInfo.label}, unit {unit_number}, "
            f"thin={spec.thin_provisioned}, eagerlyScrub={spec.eagerly_scrub}"
        )

        task = vm.ReconfigVM_Task(spec=vim.vm.ConfigSpec(deviceChange=[to_device_change(spec)]))
        return client.get_task_info(task._moId)

    except Exception as e:
        logger.error(f"新增虚拟磁盘失败: {e}")
        raise
