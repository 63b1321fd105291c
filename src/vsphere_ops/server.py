# -*- coding: utf-8 -*-
"""
vSphere Ops - 服务器入口模块

MCP 服务器的主入口，包含：
- ToolRegistry：工具注册类
- lifespan：生命周期管理
- mcp：FastMCP 实例
- run_server：服务器运行函数
"""

import os
import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .client import close_vsphere_client
from .tools import (
    describe_cdp_neighbors,
    create_virtual_disk,
    describe_task,
)


logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging():
    """按 LOG_LEVEL 环境变量配置日志"""
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level_str, logging.INFO),
        format=LOG_FORMAT
    )
    return log_level_str


# =============================================================================
# 工具注册类
# =============================================================================
class ToolRegistry:
    """工具注册类 - 管理所有 MCP 工具的注册"""

    def __init__(self, mcp_instance: FastMCP):
        self.mcp = mcp_instance

    def register_tools(self) -> FastMCP:
        """注册所有 MCP 工具"""
        self._register_query_tools()
        self._register_lifecycle_tools()
        return self.mcp

    def _register_query_tools(self):
        """注册查询类工具"""
        self.mcp.tool(
            name="describeCdpNeighbors",
            description=(
                "查询 ESXi 主机物理网卡的 CDP 邻居。"
                "cluster_names 与 host_names 二选一，可用 adapter_names 限定网卡"
            ),
            annotations=ToolAnnotations(title="查询 CDP 邻居", readOnlyHint=True)
        )(describe_cdp_neighbors)

        self.mcp.tool(
            name="describeTask",
            description="查询 vSphere 异步任务状态，用于跟踪 createVirtualDisk 提交的任务",
            annotations=ToolAnnotations(title="查询任务状态", readOnlyHint=True)
        )(describe_task)

    def _register_lifecycle_tools(self):
        """注册配置变更工具"""
        self.mcp.tool(
            name="createVirtualDisk",
            description=(
                "为虚拟机新增虚拟磁盘。需要: "
                "1) vm_name - 虚拟机名称; "
                "2) capacity_gb - 容量 (GB); "
                "3) 可选: controller, storage_format (Thin/Thick/EagerZeroedThick), thin_provisioned。"
                "返回任务 ID，不等待任务完成"
            ),
            annotations=ToolAnnotations(title="新增虚拟磁盘", readOnlyHint=False, destructiveHint=False)
        )(create_virtual_disk)


# =============================================================================
# 生命周期管理
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastMCP) -> AsyncGenerator[None, None]:
    """MCP 服务器生命周期管理"""
    logger.info("初始化 vSphere Ops MCP Server...")
    logger.info(f"vSphere 配置: {os.getenv('VSPHERE_HOST')}")

    yield

    close_vsphere_client()
    logger.info("关闭 vSphere Ops MCP Server...")


# =============================================================================
# FastMCP 实例创建
# =============================================================================
mcp = FastMCP(
    "vSphereOpsAssistant",
    lifespan=lifespan,
    instructions=(
        "vSphere 运维助手，提供 CDP 邻居查询和虚拟磁盘置备功能。\n\n"
        "**工具使用指南**:\n"
        "1. 网络排查: 使用 describeCdpNeighbors 查看 ESXi 网卡连接的交换机端口和 VLAN\n"
        "2. 新增磁盘: 使用 createVirtualDisk 为虚拟机添加磁盘，返回任务 ID\n"
        "3. 跟踪任务: 使用 describeTask 查询任务是否完成\n\n"
        "**错误处理**: 所有工具返回统一的 MCPResult 格式，失败时包含错误类型、建议和相关工具推荐。"
    ),
    host=os.getenv("SERVER_HOST", "0.0.0.0"),
    port=int(os.getenv("SERVER_PORT", "8000"))
)

ToolRegistry(mcp).register_tools()


# =============================================================================
# 服务器运行函数
# =============================================================================
def run_server(transport: str = None):
    """运行 MCP 服务器"""
    log_level_str = configure_logging()
    logger.info(f"启动 vSphere Ops MCP 服务器，日志级别: {log_level_str}")

    transport = transport or os.getenv('SERVER_TRANSPORT', 'stdio')
    logger.info(f"使用传输协议: {transport}")

    mcp.run(transport=transport)


if __name__ == "__main__":
    run_server()
