# -*- coding: utf-8 -*-
"""
vSphere Ops - vSphere 客户端模块

封装与 vSphere/vCenter 的连接、对象查找和任务查询。
核心操作通过参数接收 VSphereClient，不依赖全局会话。
"""

import os
import logging
from typing import Optional, Tuple

from pyVim.connect import SmartConnect, Disconnect
from pyVmomi import vim

from ..models import (
    ErrorType,
    MCPError,
    DeviceKind,
    TaskInfo,
)
from ..utils.errors import ResourceNotFoundError, VSphereOpsError, parse_vsphere_error


logger = logging.getLogger(__name__)


# 清单类型 -> 错误信息中的对象名称
_KIND_NAMES = {
    "ClusterComputeResource": "集群",
    "HostSystem": "主机",
    "VirtualMachine": "虚拟机",
}


def classify_device(device) -> DeviceKind:
    """判定虚拟设备类别，LsiLogic/ParaVirtual/BusLogic 等均归为 SCSI 控制器"""
    if isinstance(device, vim.vm.device.VirtualSCSIController):
        return DeviceKind.SCSI_CONTROLLER
    return DeviceKind.OTHER


def task_info_from(task) -> TaskInfo:
    """把 vim.Task 的 info 转换为 TaskInfo"""
    info = task.info
    error = None
    if info.error is not None:
        error = getattr(info.error, "localizedMessage", None) or getattr(info.error, "msg", None) \
            or type(info.error).__name__

    return TaskInfo(
        task_id=info.key or task._moId,
        state=str(info.state) if info.state else None,
        description=info.descriptionId,
        entity_name=info.entityName,
        progress=info.progress,
        error=error,
        queue_time=info.queueTime,
        start_time=info.startTime,
        complete_time=info.completeTime,
    )


class VSphereClient:
    """vSphere 客户端封装 - 管理连接和基本操作"""

    def __init__(self, host: str, username: str, password: str, port: int = 443):
        self.host = host
        self.username = username
        self.password = password
        self.port = port
        self._connection = None

    def connect(self) -> Optional[MCPError]:
        """连接到 vSphere"""
        try:
            self._connection = SmartConnect(
                host=self.host,
                user=self.username,
                pwd=self.password,
                port=self.port,
                disableSslCertVerification=True
            )
            logger.info(f"已连接到 vSphere: {self.host}:{self.port}")
            return None

        except Exception as e:
            logger.error(f"连接 vSphere {self.host} 失败: {e}")
            return parse_vsphere_error(e, "connect")

    def disconnect(self):
        """断开连接"""
        if self._connection:
            Disconnect(self._connection)
            self._connection = None

    def is_connected(self) -> bool:
        """检查是否已连接"""
        return self._connection is not None

    def get_content(self):
        """获取 vSphere 内容"""
        if not self._connection:
            return None
        return self._connection.RetrieveContent()

    def find_object_by_name(self, name: str, vim_type):
        """根据名称查找对象，找不到返回 None"""
        content = self.get_content()
        if not content:
            return None

        container = content.viewManager.CreateContainerView(
            content.rootFolder, [vim_type], True
        )
        try:
            for obj in container.view:
                if obj.name == name:
                    return obj
        finally:
            container.Destroy()
        return None

    def get_object_by_name(self, name: str, vim_type, parameter: Optional[str] = None):
        """根据名称查找对象，找不到抛出 ResourceNotFoundError"""
        obj = self.find_object_by_name(name, vim_type)
        if obj is None:
            type_name = getattr(vim_type, "__name__", "").rsplit(".", 1)[-1]
            kind = _KIND_NAMES.get(type_name, "对象")
            raise ResourceNotFoundError(kind, name, parameter)
        return obj

    # =========================================================================
    # 任务查询
    # =========================================================================
    def get_task(self, task_id: str):
        """按任务 ID 构造当前会话上的 vim.Task 引用"""
        if not self._connection:
            raise VSphereOpsError(f"未连接到 vSphere，无法查询任务 {task_id}", "task_id")
        return vim.Task(task_id, self._connection._stub)

    def get_task_info(self, task_id: str) -> TaskInfo:
        """查询任务状态，不等待任务完成"""
        return task_info_from(self.get_task(task_id))


# =============================================================================
# 全局客户端管理
# =============================================================================
_vsphere_client: Optional[VSphereClient] = None


def get_vsphere_client() -> Tuple[Optional[VSphereClient], Optional[MCPError]]:
    """获取全局 vSphere 客户端，自动处理连接"""
    global _vsphere_client

    host = os.getenv("VSPHERE_HOST")
    username = os.getenv("VSPHERE_USERNAME")
    password = os.getenv("VSPHERE_PASSWORD")
    port = int(os.getenv("VSPHERE_PORT", "443"))

    if not host or not username or not password:
        return None, MCPError(
            error_type=ErrorType.MISSING_PARAMETER,
            message="vSphere 连接配置不完整",
            suggestion="请设置环境变量: VSPHERE_HOST, VSPHERE_USERNAME, VSPHERE_PASSWORD"
        )

    # 如果客户端不存在或连接已断开，重新连接
    if _vsphere_client is None or not _vsphere_client.is_connected():
        _vsphere_client = VSphereClient(host, username, password, port)
        error = _vsphere_client.connect()
        if error:
            _vsphere_client = None
            return None, error

    return _vsphere_client, None


def close_vsphere_client():
    """断开全局客户端"""
    global _vsphere_client
    if _vsphere_client is not None:
        _vsphere_client.disconnect()
        _vsphere_client = None
