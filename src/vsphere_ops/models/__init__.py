# -*- coding: utf-8 -*-
"""
vSphere Ops - 模型包导出
"""

from .base import (
    ErrorType,
    OpsModel,
    ToolSuggestion,
    MCPError,
    MCPResult,
)

from .vsphere import (
    SCSI_CONTROLLER_SLOTS,
    NEW_DISK_LABEL,
    StorageFormat,
    DeviceKind,
    CdpCapabilities,
    NeighborRecord,
    DiskSpec,
    TaskInfo,
)

__all__ = [
    # 基础模型
    "ErrorType",
    "OpsModel",
    "ToolSuggestion",
    "MCPError",
    "MCPResult",
    # vSphere 模型
    "SCSI_CONTROLLER_SLOTS",
    "NEW_DISK_LABEL",
    "StorageFormat",
    "DeviceKind",
    "CdpCapabilities",
    "NeighborRecord",
    "DiskSpec",
    "TaskInfo",
]
