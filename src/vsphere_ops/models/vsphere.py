# -*- coding: utf-8 -*-
"""
vSphere Ops - vSphere 业务数据模型
"""

from enum import Enum
from datetime import datetime
from typing import Optional

from pydantic import Field, ConfigDict, model_validator

from .base import OpsModel


# 每个 SCSI 控制器最多挂载 16 个设备 (unit number 0-15)
SCSI_CONTROLLER_SLOTS = 16

NEW_DISK_LABEL = "New Hard disk"


# =============================================================================
# 枚举
# =============================================================================
class StorageFormat(str, Enum):
    """虚拟磁盘置备格式"""
    THIN = "Thin"
    THICK = "Thick"
    EAGER_ZEROED_THICK = "EagerZeroedThick"


class DeviceKind(str, Enum):
    """虚拟设备类别，由 API 绑定层判定"""
    SCSI_CONTROLLER = "scsi_controller"
    OTHER = "other"


# =============================================================================
# CDP 邻居模型
# =============================================================================
class CdpCapabilities(OpsModel):
    """CDP 设备能力标志"""
    model_config = ConfigDict(frozen=True)

    router: Optional[bool] = None
    transparent_bridge: Optional[bool] = None
    source_route_bridge: Optional[bool] = None
    network_switch: Optional[bool] = None
    host: Optional[bool] = None
    igmp_enabled: Optional[bool] = None
    repeater: Optional[bool] = None


class NeighborRecord(OpsModel):
    """物理网卡的 CDP 邻居信息，每个 (主机, 网卡) 一条"""
    model_config = ConfigDict(frozen=True)

    host_name: str = Field(description="ESXi 主机名称")
    device: str = Field(description="物理网卡设备名，如 vmnic0")
    cdp_version: Optional[int] = Field(default=None, description="CDP 协议版本")
    timeout: Optional[int] = Field(default=None, description="超时时间 (秒)")
    ttl: Optional[int] = Field(default=None, description="生存时间 (秒)")
    samples: Optional[int] = Field(default=None, description="采样次数")
    dev_id: Optional[str] = Field(default=None, description="对端设备标识")
    address: Optional[str] = Field(default=None, description="对端网络地址")
    port_id: Optional[str] = Field(default=None, description="对端端口标识")
    device_capability: Optional[CdpCapabilities] = Field(default=None, description="对端设备能力")
    software_version: Optional[str] = Field(default=None, description="对端软件版本")
    hardware_platform: Optional[str] = Field(default=None, description="对端硬件平台")
    ip_prefix: Optional[str] = Field(default=None, description="IP 前缀")
    ip_prefix_len: Optional[int] = Field(default=None, description="IP 前缀长度")
    vlan: Optional[int] = Field(default=None, description="Native VLAN ID")
    full_duplex: Optional[bool] = Field(default=None, description="是否全双工")
    mtu: Optional[int] = Field(default=None, description="MTU")
    system_name: Optional[str] = Field(default=None, description="对端系统名称")
    system_oid: Optional[str] = Field(default=None, description="对端系统 OID")
    mgmt_addr: Optional[str] = Field(default=None, description="对端管理地址")
    location: Optional[str] = Field(default=None, description="对端物理位置")


# =============================================================================
# 虚拟磁盘模型
# =============================================================================
class DiskSpec(OpsModel):
    """
    新增虚拟磁盘的设备变更描述

    一次性由校验过的输入构造，构造后不可修改；
    提交前再转换为 pyVmomi 的 VirtualDeviceSpec。
    """
    model_config = ConfigDict(frozen=True)

    capacity_in_bytes: int = Field(gt=0, description="容量 (字节)")
    capacity_in_kb: int = Field(gt=0, description="容量 (KB)")
    file_name: str = Field(default="", description="后端文件名，空字符串表示新建")
    eagerly_scrub: bool = Field(default=False, description="是否置零 (EagerZeroedThick)")
    thin_provisioned: bool = Field(default=True, description="是否精简置备")
    disk_mode: str = Field(default="persistent", description="磁盘模式")
    controller_key: int = Field(description="所属控制器 key")
    unit_number: int = Field(ge=0, lt=SCSI_CONTROLLER_SLOTS, description="控制器上的 unit number")
    key: int = Field(lt=0, description="临时设备 key，负数避免与已有设备冲突")
    label: str = Field(default=NEW_DISK_LABEL, description="设备标签")
    summary: str = Field(default=NEW_DISK_LABEL, description="设备摘要")

    @model_validator(mode="after")
    def _check_capacity_units(self):
        if self.capacity_in_kb * 1024 != self.capacity_in_bytes:
            raise ValueError(
                f"capacity_in_bytes ({self.capacity_in_bytes}) 与 "
                f"capacity_in_kb ({self.capacity_in_kb}) 不一致"
            )
        return self


# =============================================================================
# 任务模型
# =============================================================================
class TaskInfo(OpsModel):
    """vSphere 异步任务状态"""
    task_id: str = Field(description="任务 ID，如 task-1234")
    state: Optional[str] = Field(default=None, description="任务状态 (queued/running/success/error)")
    description: Optional[str] = Field(default=None, description="任务描述")
    entity_name: Optional[str] = Field(default=None, description="任务作用对象名称")
    progress: Optional[int] = Field(default=None, description="进度 (%)")
    error: Optional[str] = Field(default=None, description="失败时的错误信息")
    queue_time: Optional[datetime] = Field(default=None, description="排队时间")
    start_time: Optional[datetime] = Field(default=None, description="开始时间")
    complete_time: Optional[datetime] = Field(default=None, description="完成时间")
