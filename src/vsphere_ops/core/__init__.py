# -*- coding: utf-8 -*-
"""
vSphere Ops - 核心操作包导出
"""

from .inventory import resolve_hosts

from .cdp import (
    iter_cdp_neighbors,
    query_cdp_neighbors,
    neighbor_record_from,
)

from .disk import (
    select_controller,
    next_free_unit_number,
    capacity_units,
    build_disk_spec,
    to_device_change,
    add_virtual_disk,
)

__all__ = [
    # 清单解析
    "resolve_hosts",
    # CDP 查询
    "iter_cdp_neighbors",
    "query_cdp_neighbors",
    "neighbor_record_from",
    # 磁盘置备
    "select_controller",
    "next_free_unit_number",
    "capacity_units",
    "build_disk_spec",
    "to_device_change",
    "add_virtual_disk",
]
