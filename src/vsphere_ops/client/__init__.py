# -*- coding: utf-8 -*-
"""
vSphere Ops - 客户端包导出
"""

from .vsphere import (
    VSphereClient,
    get_vsphere_client,
    close_vsphere_client,
    classify_device,
    task_info_from,
)

__all__ = [
    "VSphereClient",
    "get_vsphere_client",
    "close_vsphere_client",
    "classify_device",
    "task_info_from",
]
