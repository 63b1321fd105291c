# -*- coding: utf-8 -*-
"""
vSphere Ops - 响应与错误模型

工具层不向调用方抛异常：成功时返回 MCPResult.ok(...)，
失败时返回 MCPResult.fail(MCPError)，错误里带上出错参数和下一步可调用的工具。
"""

from enum import Enum
from typing import Dict, Any, Optional, List

from pydantic import Field, BaseModel, ConfigDict


# =============================================================================
# 错误类型
# =============================================================================
class ErrorType(str, Enum):
    """错误类型，调用方据此决定是修正参数、换对象还是重试"""
    MISSING_PARAMETER = "MISSING_PARAMETER"          # 未提供集群/主机/虚拟机/任务等必需参数
    INVALID_PARAMETER = "INVALID_PARAMETER"          # 容量非正或非有限值、选择条件冲突
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"        # 清单中找不到集群、主机、虚拟机或控制器
    PERMISSION_DENIED = "PERMISSION_DENIED"          # NoPermission / InvalidLogin
    NO_FREE_SLOT = "NO_FREE_SLOT"                    # SCSI 控制器已没有空闲 unit number
    API_ERROR = "API_ERROR"                          # 其余 vSphere API 故障
    CONNECTION_ERROR = "CONNECTION_ERROR"            # 无法连接 vCenter/ESXi


# =============================================================================
# 基础模型
# =============================================================================
class OpsModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ToolSuggestion(OpsModel):
    """失败后建议调用的工具及示例参数"""
    tool_name: str = Field(description="工具名称，如 describeTask")
    description: str = Field(description="为什么建议调用它")
    example_params: Optional[Dict[str, Any]] = Field(default=None, description="示例参数")


class MCPError(OpsModel):
    """结构化错误：类型、消息、出错参数、建议和相关工具"""
    error_type: ErrorType = Field(description="错误类型")
    message: str = Field(description="错误描述")
    parameter: Optional[str] = Field(default=None, description="出错的参数名，如 capacity_gb")
    suggestion: str = Field(description="修正建议")
    related_tools: Optional[List[ToolSuggestion]] = Field(default=None, description="相关工具")

    def __str__(self) -> str:
        head = f"[{self.error_type.value}] {self.message}"
        if self.parameter:
            head += f" (参数: {self.parameter})"
        parts = [head, f"建议: {self.suggestion}"]
        if self.related_tools:
            parts.append("相关工具: " + ", ".join(t.tool_name for t in self.related_tools))
        return "\n".join(parts)


class MCPResult(OpsModel):
    """所有工具的统一返回值"""
    success: bool = Field(description="操作是否成功")
    data: Optional[Any] = Field(default=None, description="成功时的数据")
    error: Optional[MCPError] = Field(default=None, description="失败时的错误信息")
    request_id: Optional[str] = Field(default=None, description="异步操作的任务 ID，可交给 describeTask 轮询")

    @classmethod
    def ok(cls, data: Any = None, request_id: Optional[str] = None) -> "MCPResult":
        return cls(success=True, data=data, request_id=request_id)

    @classmethod
    def fail(cls, error: MCPError) -> "MCPResult":
        return cls(success=False, error=error)
