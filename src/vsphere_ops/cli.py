# -*- coding: utf-8 -*-
"""
vSphere Ops - 命令行入口

    vsphere-ops cdp --cluster Cluster01 --adapter vmnic0
    vsphere-ops add-disk web-server-01 --capacity-gb 20 --storage-format Thin
    echo web-server-01 | vsphere-ops add-disk - --capacity-gb 20
    vsphere-ops task task-1234
    vsphere-ops serve
"""

import json
import math
import sys
import logging
from functools import wraps
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .client import VSphereClient
from .core import resolve_hosts, query_cdp_neighbors, add_virtual_disk
from .models import NeighborRecord, StorageFormat, TaskInfo
from .server import configure_logging, run_server
from .utils import VSphereOpsError, parse_vsphere_error


app = typer.Typer(
    name="vsphere-ops",
    help="vSphere 运维命令：CDP 邻居查询、虚拟磁盘置备",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def handle_errors(operation: str):
    """把命令中的异常转换为错误信息和退出码 1"""

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except VSphereOpsError as e:
                err_console.print(f"[red]错误:[/red] {e.message}")
                raise typer.Exit(1)
            except Exception as e:
                logger.debug("命令执行失败", exc_info=True)
                err_console.print(f"[red]{parse_vsphere_error(e, operation)}[/red]")
                raise typer.Exit(1)

        return wrapper

    return decorator


# =============================================================================
# 连接参数
# =============================================================================
ServerOption = typer.Option(..., "--server", envvar="VSPHERE_HOST", help="vCenter/ESXi 地址")
UserOption = typer.Option(..., "--user", envvar="VSPHERE_USERNAME", help="用户名")
PasswordOption = typer.Option(..., "--password", envvar="VSPHERE_PASSWORD", help="密码")
PortOption = typer.Option(443, "--port", envvar="VSPHERE_PORT", help="端口")


def connect(server: str, user: str, password: str, port: int) -> VSphereClient:
    client = VSphereClient(server, user, password, port)
    error = client.connect()
    if error:
        err_console.print(f"[red]{error}[/red]")
        raise typer.Exit(1)
    return client


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志")):
    """vSphere 运维命令"""
    configure_logging()
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


# =============================================================================
# 输出
# =============================================================================
def _print_neighbors(records: List[NeighborRecord]):
    table = Table(title="CDP 邻居")
    for column in ("主机", "网卡", "交换机", "端口", "VLAN", "管理地址", "平台", "MTU"):
        table.add_column(column)
    for r in records:
        table.add_row(
            r.host_name,
            r.device,
            r.system_name or r.dev_id or "",
            r.port_id or "",
            "" if r.vlan is None else str(r.vlan),
            r.mgmt_addr or r.address or "",
            r.hardware_platform or "",
            "" if r.mtu is None else str(r.mtu),
        )
    console.print(table)


def _print_task(task: TaskInfo):
    console.print(f"[bold]任务:[/bold] {task.task_id}")
    console.print(f"  状态: {task.state}")
    if task.entity_name:
        console.print(f"  对象: {task.entity_name}")
    if task.progress is not None:
        console.print(f"  进度: {task.progress}%")
    if task.error:
        console.print(f"  [red]错误: {task.error}[/red]")


def _parse_controller(controller: Optional[str]):
    """纯数字按设备 key 处理，否则按标签处理"""
    if controller is None:
        return None
    return int(controller) if controller.isdigit() else controller


# =============================================================================
# 命令
# =============================================================================
@app.command()
@handle_errors("describe_cdp_neighbors")
def cdp(
    cluster: Optional[List[str]] = typer.Option(None, "--cluster", "-c", help="集群名称，可重复"),
    host: Optional[List[str]] = typer.Option(None, "--host", "-H", help="ESXi 主机名称，可重复"),
    adapter: Optional[List[str]] = typer.Option(None, "--adapter", "-a", help="物理网卡名称，可重复"),
    as_json: bool = typer.Option(False, "--json", help="以 JSON 输出"),
    server: str = ServerOption,
    user: str = UserOption,
    password: str = PasswordOption,
    port: int = PortOption,
):
    """查询 ESXi 物理网卡的 CDP 邻居"""
    if cluster and host:
        err_console.print("[red]错误:[/red] --cluster 与 --host 不能同时使用")
        raise typer.Exit(2)
    if not cluster and not host:
        err_console.print("[red]错误:[/red] 必须提供 --cluster 或 --host")
        raise typer.Exit(2)

    client = connect(server, user, password, port)
    try:
        hosts = resolve_hosts(client, cluster_names=cluster, host_names=host)
        records = query_cdp_neighbors(hosts, adapter)
    finally:
        client.disconnect()

    if as_json:
        typer.echo(json.dumps([r.model_dump(mode="json") for r in records], ensure_ascii=False, indent=2))
    else:
        _print_neighbors(records)


@app.command("add-disk")
@handle_errors("create_virtual_disk")
def add_disk(
    vm_name: str = typer.Argument(..., help="虚拟机名称，'-' 表示从标准输入读取"),
    capacity_gb: float = typer.Option(..., "--capacity-gb", help="磁盘容量 (GB)"),
    controller: Optional[str] = typer.Option(None, "--controller", help="SCSI 控制器 key 或标签"),
    storage_format: StorageFormat = typer.Option(StorageFormat.THIN, "--storage-format", help="置备格式"),
    thin: bool = typer.Option(False, "--thin", help="强制精简置备"),
    as_json: bool = typer.Option(False, "--json", help="以 JSON 输出"),
    server: str = ServerOption,
    user: str = UserOption,
    password: str = PasswordOption,
    port: int = PortOption,
):
    """为虚拟机新增虚拟磁盘，提交任务后立即返回"""
    if vm_name == "-":
        vm_name = next((line.strip() for line in sys.stdin if line.strip()), "")
        if not vm_name:
            err_console.print("[red]错误:[/red] 标准输入中没有虚拟机名称")
            raise typer.Exit(2)

    if not math.isfinite(capacity_gb) or capacity_gb <= 0:
        err_console.print(f"[red]错误:[/red] 磁盘容量必须是大于 0 的有限数值: {capacity_gb}")
        raise typer.Exit(2)

    client = connect(server, user, password, port)
    try:
        task = add_virtual_disk(
            client,
            vm_name,
            capacity_gb,
            controller=_parse_controller(controller),
            storage_format=storage_format,
            thin_provisioned=thin,
        )
    finally:
        client.disconnect()

    if as_json:
        typer.echo(task.model_dump_json())
    else:
        _print_task(task)


@app.command()
@handle_errors("describe_task")
def task(
    task_id: str = typer.Argument(..., help="任务 ID，如 task-1234"),
    as_json: bool = typer.Option(False, "--json", help="以 JSON 输出"),
    server: str = ServerOption,
    user: str = UserOption,
    password: str = PasswordOption,
    port: int = PortOption,
):
    """查询异步任务状态"""
    client = connect(server, user, password, port)
    try:
        info = client.get_task_info(task_id)
    finally:
        client.disconnect()

    if as_json:
        typer.echo(info.model_dump_json())
    else:
        _print_task(info)


@app.command()
def serve(
    transport: Optional[str] = typer.Option(None, "--transport", envvar="SERVER_TRANSPORT", help="stdio/sse/streamable-http"),
):
    """启动 MCP 服务器"""
    run_server(transport)


if __name__ == "__main__":
    app()
