# -*- coding: utf-8 -*-
"""
vSphere Ops - 虚拟机配置变更工具
"""

import logging
from typing import Optional, Union

from pydantic import Field

from ..models import MCPResult, StorageFormat
from ..client import get_vsphere_client
from ..core import add_virtual_disk
from ..utils import (
    parse_vsphere_error,
    validate_vm_name,
    validate_capacity_gb,
)


logger = logging.getLogger(__name__)


async def create_virtual_disk(
    vm_name: str = Field(description="虚拟机名称"),
    capacity_gb: float = Field(description="磁盘容量 (GB)，支持小数"),
    controller: Optional[Union[int, str]] = Field(
        default=None,
        description="SCSI 控制器 key 或标签 (如 'SCSI controller 0')，不填则自动选择第一个有空闲插槽的控制器"
    ),
    storage_format: StorageFormat = Field(default=StorageFormat.THIN, description="置备格式: Thin/Thick/EagerZeroedThick"),
    thin_provisioned: bool = Field(default=False, description="强制精简置备，优先于 Thick 类格式")
) -> MCPResult:
    """
    为虚拟机新增一块虚拟磁盘

    注意：
    1. 请求以异步任务提交，返回任务 ID 后不等待完成，请用 describeTask 查询结果。
    2. 每个 SCSI 控制器最多挂载 16 个设备，全部占用时会返回 NO_FREE_SLOT 错误。
    """
    if error := validate_vm_name(vm_name):
        return MCPResult.fail(error)

    if error := validate_capacity_gb(capacity_gb):
        return MCPResult.fail(error)

    client, error = get_vsphere_client()
    if error:
        return MCPResult.fail(error)

    try:
        task = add_virtual_disk(
            client,
            vm_name,
            capacity_gb,
            controller=controller,
            storage_format=storage_format,
            thin_provisioned=thin_provisioned
        )
    except Exception as e:
        return MCPResult.fail(parse_vsphere_error(e, "create_virtual_disk"))

    result_data = {
        "vm_name": vm_name,
        "status": "reconfiguration_started",
        "message": f"虚拟机 '{vm_name}' 新增磁盘请求已提交",
        "task_id": task.task_id,
        "task": task,
        "details": {
            "capacity_gb": capacity_gb,
            "storage_format": StorageFormat(storage_format).value,
            "thin_provisioned": thin_provisioned,
        }
    }
    if controller is not None:
        result_data["details"]["controller"] = controller

    return MCPResult.ok(result_data, request_id=task.task_id)
