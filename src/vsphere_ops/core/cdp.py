# -*- coding: utf-8 -*-
"""
vSphere Ops - CDP 邻居查询

对每台主机的物理网卡调用 QueryNetworkHint，收集 Cisco Discovery Protocol
邻居信息。CDP 报文由 ESXi 自身解析，这里只做查询和整形。
"""

import logging
from typing import Iterable, Iterator, List, Optional

from ..models import CdpCapabilities, NeighborRecord


logger = logging.getLogger(__name__)


def _capabilities_from(capability) -> Optional[CdpCapabilities]:
    if capability is None:
        return None
    return CdpCapabilities(
        router=capability.router,
        transparent_bridge=capability.transparentBridge,
        source_route_bridge=capability.sourceRouteBridge,
        network_switch=capability.networkSwitch,
        host=capability.host,
        igmp_enabled=capability.igmpEnabled,
        repeater=capability.repeater,
    )


def neighbor_record_from(host_name: str, device: str, cdp) -> NeighborRecord:
    """把 vim.host.PhysicalNic.CdpInfo 转换为 NeighborRecord"""
    return NeighborRecord(
        host_name=host_name,
        device=device,
        cdp_version=cdp.cdpVersion,
        timeout=cdp.timeout,
        ttl=cdp.ttl,
        samples=cdp.samples,
        dev_id=cdp.devId,
        address=cdp.address,
        port_id=cdp.portId,
        device_capability=_capabilities_from(cdp.deviceCapability),
        software_version=cdp.softwareVersion,
        hardware_platform=cdp.hardwarePlatform,
        ip_prefix=cdp.ipPrefix,
        ip_prefix_len=cdp.ipPrefixLen,
        vlan=cdp.vlan,
        full_duplex=cdp.fullDuplex,
        mtu=cdp.mtu,
        system_name=cdp.systemName,
        system_oid=cdp.systemOID,
        mgmt_addr=cdp.mgmtAddr,
        location=cdp.location,
    )


def iter_cdp_neighbors(hosts: Iterable, adapter_names: Optional[Iterable[str]] = None) -> Iterator[NeighborRecord]:
    """
    逐台主机、逐块网卡产出 CDP 邻居

    adapter_names 为空时查询全部物理网卡，否则只查询设备名精确匹配的网卡，
    不匹配的名称直接忽略。没有 CDP 邻居的网卡不产出记录。
    顺序：主机按传入顺序，网卡按硬件枚举顺序。
    """
    wanted = set(adapter_names) if adapter_names else None

    for host in hosts:
        network_system = host.configManager.networkSystem
        pnics = list(host.config.network.pnic or [])

        if wanted is not None:
            missing = wanted - {pnic.device for pnic in pnics}
            if missing:
                logger.debug(f"主机 {host.name} 上没有网卡: {', '.join(sorted(missing))}")
            pnics = [pnic for pnic in pnics if pnic.device in wanted]

        for pnic in pnics:
            hints = network_system.QueryNetworkHint(device=[pnic.device])
            for hint in hints or []:
                if hint.connectedSwitchPort is None:
                    continue
                yield neighbor_record_from(host.name, pnic.device, hint.connectedSwitchPort)


def query_cdp_neighbors(hosts: Iterable, adapter_names: Optional[Iterable[str]] = None) -> List[NeighborRecord]:
    """查询 CDP 邻居，返回列表"""
    records = list(iter_cdp_neighbors(hosts, adapter_names))
    logger.info(f"共找到 {len(records)} 条 CDP 邻居记录")
    return records
