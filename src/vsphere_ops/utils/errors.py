# -*- coding: utf-8 -*-
"""
vSphere Ops - 错误处理模块

包含核心层异常、工具建议常量和 vSphere 错误解析函数
"""

import logging
from typing import Optional

from pyVmomi import vim, vmodl

from ..models import ErrorType, MCPError, ToolSuggestion


logger = logging.getLogger(__name__)


# =============================================================================
# 核心层异常
# =============================================================================
class VSphereOpsError(Exception):
    """核心操作异常基类"""

    error_type = ErrorType.API_ERROR

    def __init__(self, message: str, parameter: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.parameter = parameter


class ResourceNotFoundError(VSphereOpsError):
    """按名称或标识找不到 vSphere 对象"""

    error_type = ErrorType.RESOURCE_NOT_FOUND

    def __init__(self, kind: str, name, parameter: Optional[str] = None):
        super().__init__(f"{kind} '{name}' 不存在", parameter)
        self.kind = kind
        self.name = name


class HostSelectionError(VSphereOpsError):
    """集群名称与主机名称必须且只能提供一种"""

    error_type = ErrorType.INVALID_PARAMETER


class NoAvailableControllerError(VSphereOpsError):
    """虚拟机上没有可挂载新磁盘的 SCSI 控制器"""

    error_type = ErrorType.NO_FREE_SLOT


class NoFreeUnitNumberError(VSphereOpsError):
    """控制器的 16 个 unit number 已全部占用"""

    error_type = ErrorType.NO_FREE_SLOT


# =============================================================================
# 工具建议常量 - 用于错误响应中引导调用方
# =============================================================================
TOOL_DESCRIBE_CDP_NEIGHBORS = ToolSuggestion(
    tool_name="describeCdpNeighbors",
    description="按集群或主机查询物理网卡的 CDP 邻居",
    example_params={"cluster_names": ["Cluster01"], "adapter_names": ["vmnic0"]}
)

TOOL_CREATE_VIRTUAL_DISK = ToolSuggestion(
    tool_name="createVirtualDisk",
    description="为虚拟机新增虚拟磁盘",
    example_params={"vm_name": "web-server-01", "capacity_gb": 20, "storage_format": "Thin"}
)

TOOL_DESCRIBE_TASK = ToolSuggestion(
    tool_name="describeTask",
    description="查询异步任务的执行状态",
    example_params={"task_id": "task-1234"}
)


_SUGGESTIONS = {
    "cluster_names": "请检查集群名称是否正确（区分大小写）",
    "host_names": "请检查 ESXi 主机名称是否与清单中显示的一致",
    "vm_name": "请检查虚拟机名称是否正确（区分大小写）",
    "controller": "请提供虚拟机上已有 SCSI 控制器的 key 或标签，如 'SCSI controller 0'",
    "task_id": "请使用 createVirtualDisk 返回的任务 ID",
}


def _fault_message(error: Exception) -> str:
    """取 vmodl 故障的 msg 字段，普通异常直接转字符串"""
    msg = getattr(error, "msg", None)
    return msg if isinstance(msg, str) and msg else str(error)


def parse_vsphere_error(error: Exception, operation: str) -> MCPError:
    """
    解析核心层异常和 vSphere API 错误，转换为结构化的 MCPError
    """
    # 核心层异常自带类型和参数
    if isinstance(error, VSphereOpsError):
        if isinstance(error, (NoAvailableControllerError, NoFreeUnitNumberError)):
            suggestion = "请先为虚拟机添加新的 SCSI 控制器，或指定其他控制器"
        elif isinstance(error, HostSelectionError):
            suggestion = "请只提供 cluster_names 或 host_names 其中之一"
        else:
            suggestion = _SUGGESTIONS.get(error.parameter or "", "请检查参数是否正确")
        return MCPError(
            error_type=error.error_type,
            message=error.message,
            parameter=error.parameter,
            suggestion=suggestion,
            related_tools=[TOOL_DESCRIBE_TASK] if error.parameter == "task_id" else None
        )

    error_msg = _fault_message(error)

    if isinstance(error, (vim.fault.NoPermission, vim.fault.InvalidLogin)):
        return MCPError(
            error_type=ErrorType.PERMISSION_DENIED,
            message=f"权限不足: {error_msg}",
            suggestion="请检查用户名、密码和权限配置"
        )

    if isinstance(error, vmodl.fault.ManagedObjectNotFound):
        return MCPError(
            error_type=ErrorType.RESOURCE_NOT_FOUND,
            message=f"对象已不存在: {error_msg}",
            suggestion="对象可能已被删除，请刷新清单后重试",
            related_tools=[TOOL_DESCRIBE_TASK] if "task" in operation.lower() else None
        )

    lowered = error_msg.lower()

    # 连接错误
    if 'connection' in lowered or 'timeout' in lowered or 'timed out' in lowered:
        return MCPError(
            error_type=ErrorType.CONNECTION_ERROR,
            message=f"无法连接到 vSphere: {error_msg}",
            suggestion="请检查 vSphere 主机地址、端口和网络连接"
        )

    # 权限不足
    if 'permission' in lowered or 'unauthorized' in lowered:
        return MCPError(
            error_type=ErrorType.PERMISSION_DENIED,
            message=f"权限不足: {error_msg}",
            suggestion="请检查用户名、密码和权限配置"
        )

    # 磁盘配置被拒绝
    if 'disk' in operation.lower() and ('insufficient' in lowered or 'space' in lowered):
        return MCPError(
            error_type=ErrorType.API_ERROR,
            parameter="capacity_gb",
            message=f"数据存储空间不足: {error_msg}",
            suggestion="请减小磁盘容量，或释放虚拟机所在数据存储的空间"
        )

    logger.debug(f"未分类的 vSphere 错误 ({operation}): {error!r}")
    return MCPError(
        error_type=ErrorType.API_ERROR,
        message=f"vSphere 操作失败: {error_msg}",
        suggestion="请检查参数是否正确，或稍后重试"
    )
