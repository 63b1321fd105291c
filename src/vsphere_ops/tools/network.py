# -*- coding: utf-8 -*-
"""
vSphere Ops - 网络查询工具
"""

import logging
from typing import Optional, List

from pydantic import Field

from ..models import MCPResult
from ..client import get_vsphere_client
from ..core import resolve_hosts, query_cdp_neighbors
from ..utils import parse_vsphere_error, validate_host_selection


logger = logging.getLogger(__name__)


async def describe_cdp_neighbors(
    cluster_names: Optional[List[str]] = Field(default=None, description="集群名称列表，与 host_names 二选一"),
    host_names: Optional[List[str]] = Field(default=None, description="ESXi 主机名称列表，与 cluster_names 二选一"),
    adapter_names: Optional[List[str]] = Field(default=None, description="物理网卡名称列表，如 ['vmnic0']，不填则查询全部")
) -> MCPResult:
    """
    查询 ESXi 主机物理网卡的 CDP 邻居 (对端交换机、端口、VLAN 等)

    只返回存在 CDP 邻居的网卡，每个 (主机, 网卡) 一条记录。
    """
    if error := validate_host_selection(cluster_names, host_names):
        return MCPResult.fail(error)

    client, error = get_vsphere_client()
    if error:
        return MCPResult.fail(error)

    try:
        hosts = resolve_hosts(client, cluster_names=cluster_names, host_names=host_names)
        records = query_cdp_neighbors(hosts, adapter_names)
        return MCPResult.ok(records)
    except Exception as e:
        logger.error(f"查询 CDP 邻居失败: {e}")
        return MCPResult.fail(parse_vsphere_error(e, "describe_cdp_neighbors"))
