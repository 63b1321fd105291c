# -*- coding: utf-8 -*-
"""
vSphere Ops

vSphere 运维工具：ESXi 物理网卡 CDP 邻居查询、虚拟机磁盘置备。
同时提供 MCP 服务器和命令行两种入口。
"""

from .client import VSphereClient, get_vsphere_client
from .core import resolve_hosts, query_cdp_neighbors, add_virtual_disk
from .models import MCPResult, MCPError, ErrorType, NeighborRecord, StorageFormat, TaskInfo

__version__ = "0.1.0"

__all__ = [
    "VSphereClient",
    "get_vsphere_client",
    "resolve_hosts",
    "query_cdp_neighbors",
    "add_virtual_disk",
    "MCPResult",
    "MCPError",
    "ErrorType",
    "NeighborRecord",
    "StorageFormat",
    "TaskInfo",
]
