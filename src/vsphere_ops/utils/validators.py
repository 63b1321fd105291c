# -*- coding: utf-8 -*-
"""
vSphere Ops - 参数验证模块
"""

import math
from typing import Optional, Sequence

from ..models import ErrorType, MCPError


def validate_host_selection(
    cluster_names: Optional[Sequence[str]],
    host_names: Optional[Sequence[str]],
) -> Optional[MCPError]:
    """验证主机选择条件：集群名称和主机名称互斥且必须提供一种"""
    if cluster_names and host_names:
        return MCPError(
            error_type=ErrorType.INVALID_PARAMETER,
            parameter="cluster_names",
            message="cluster_names 与 host_names 不能同时提供",
            suggestion="请只按集群或只按主机选择 ESXi 主机"
        )

    if not cluster_names and not host_names:
        return MCPError(
            error_type=ErrorType.MISSING_PARAMETER,
            parameter="cluster_names",
            message="缺少必需参数: cluster_names 或 host_names",
            suggestion="请提供集群名称列表，如 ['Cluster01']，或主机名称列表"
        )

    return None


def validate_vm_name(vm_name: Optional[str]) -> Optional[MCPError]:
    """验证虚拟机名称"""
    if not vm_name or not vm_name.strip():
        return MCPError(
            error_type=ErrorType.MISSING_PARAMETER,
            parameter="vm_name",
            message="缺少必需参数: vm_name (虚拟机名称)",
            suggestion="请提供目标虚拟机名称，如 'web-server-01'"
        )

    # vCenter 中虚拟机名称最长 80 个字符
    if len(vm_name) > 80:
        return MCPError(
            error_type=ErrorType.INVALID_PARAMETER,
            parameter="vm_name",
            message=f"虚拟机名称超过 80 个字符: '{vm_name}'",
            suggestion="请检查虚拟机名称是否正确"
        )

    return None


def validate_capacity_gb(capacity_gb: Optional[float]) -> Optional[MCPError]:
    """验证磁盘容量 (GB)"""
    if capacity_gb is None:
        return MCPError(
            error_type=ErrorType.MISSING_PARAMETER,
            parameter="capacity_gb",
            message="缺少必需参数: capacity_gb (磁盘容量, GB)",
            suggestion="请提供磁盘容量，如 20"
        )

    # NaN 与任何数比较都为 False，需单独拦截
    if not math.isfinite(capacity_gb):
        return MCPError(
            error_type=ErrorType.INVALID_PARAMETER,
            parameter="capacity_gb",
            message=f"磁盘容量必须是有限数值: {capacity_gb}",
            suggestion="请提供大于 0 的磁盘容量，如 20"
        )

    # 至少 1 KB，否则换算后容量为 0
    if capacity_gb * 1024 * 1024 < 1:
        return MCPError(
            error_type=ErrorType.INVALID_PARAMETER,
            parameter="capacity_gb",
            message=f"磁盘容量必须大于 0: {capacity_gb}",
            suggestion="请提供大于 0 的磁盘容量"
        )

    return None


def validate_task_id(task_id: Optional[str]) -> Optional[MCPError]:
    """验证任务 ID"""
    if not task_id:
        return MCPError(
            error_type=ErrorType.MISSING_PARAMETER,
            parameter="task_id",
            message="缺少必需参数: task_id (任务 ID)",
            suggestion="请使用 createVirtualDisk 返回的任务 ID，如 'task-1234'"
        )
    return None
