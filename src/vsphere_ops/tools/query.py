# -*- coding: utf-8 -*-
"""
vSphere Ops - 任务查询工具
"""

import logging

from pydantic import Field

from ..models import MCPResult
from ..client import get_vsphere_client
from ..utils import parse_vsphere_error, validate_task_id


logger = logging.getLogger(__name__)


async def describe_task(
    task_id: str = Field(description="任务 ID，如 task-1234")
) -> MCPResult:
    """查询异步任务状态 (queued/running/success/error)"""
    if error := validate_task_id(task_id):
        return MCPResult.fail(error)

    client, error = get_vsphere_client()
    if error:
        return MCPResult.fail(error)

    try:
        info = client.get_task_info(task_id)
        return MCPResult.ok(info, request_id=task_id)
    except Exception as e:
        logger.error(f"查询任务 {task_id} 失败: {e}")
        return MCPResult.fail(parse_vsphere_error(e, "describe_task"))
