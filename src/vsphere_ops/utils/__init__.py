# -*- coding: utf-8 -*-
"""
vSphere Ops - 工具函数包导出
"""

from .errors import (
    VSphereOpsError,
    ResourceNotFoundError,
    HostSelectionError,
    NoAvailableControllerError,
    NoFreeUnitNumberError,
    TOOL_DESCRIBE_CDP_NEIGHBORS,
    TOOL_CREATE_VIRTUAL_DISK,
    TOOL_DESCRIBE_TASK,
    parse_vsphere_error,
)

from .validators import (
    validate_host_selection,
    validate_vm_name,
    validate_capacity_gb,
    validate_task_id,
)

__all__ = [
    # 异常
    "VSphereOpsError",
    "ResourceNotFoundError",
    "HostSelectionError",
    "NoAvailableControllerError",
    "NoFreeUnitNumberError",
    # 错误处理
    "TOOL_DESCRIBE_CDP_NEIGHBORS",
    "TOOL_CREATE_VIRTUAL_DISK",
    "TOOL_DESCRIBE_TASK",
    "parse_vsphere_error",
    # 验证函数
    "validate_host_selection",
    "validate_vm_name",
    "validate_capacity_gb",
    "validate_task_id",
]
