# -*- coding: utf-8 -*-
"""
vSphere Ops - 工具包导出
"""

from .network import describe_cdp_neighbors

from .lifecycle import create_virtual_disk

from .query import describe_task

__all__ = [
    # 网络查询工具
    "describe_cdp_neighbors",
    # 配置变更工具
    "create_virtual_disk",
    # 任务查询工具
    "describe_task",
]
