# -*- coding: utf-8 -*-
"""
vSphere Ops - 清单解析

把集群名称或主机名称解析为 vim.HostSystem 列表。
"""

import logging
from typing import List, Optional, Sequence

from pyVmomi import vim

from ..utils.errors import HostSelectionError


logger = logging.getLogger(__name__)


def resolve_hosts(
    client,
    cluster_names: Optional[Sequence[str]] = None,
    host_names: Optional[Sequence[str]] = None,
) -> List:
    """
    解析主机列表

    cluster_names 与 host_names 必须且只能提供一种。
    按集群解析时依次展开各集群的成员主机并直接拼接，集群重叠时不去重。
    名称不存在时由 client 抛出 ResourceNotFoundError。
    """
    if cluster_names and host_names:
        raise HostSelectionError("cluster_names 与 host_names 不能同时提供", "cluster_names")
    if not cluster_names and not host_names:
        raise HostSelectionError("必须提供 cluster_names 或 host_names", "cluster_names")

    hosts = []
    if cluster_names:
        for cluster_name in cluster_names:
            cluster = client.get_object_by_name(
                cluster_name, vim.ClusterComputeResource, "cluster_names"
            )
            members = list(cluster.host or [])
            logger.debug(f"集群 {cluster_name} 包含 {len(members)} 台主机")
            hosts.extend(members)
    else:
        for host_name in host_names:
            hosts.append(client.get_object_by_name(host_name, vim.HostSystem, "host_names"))

    return hosts
