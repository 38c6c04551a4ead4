"""
API data models for the quote service.
Pydantic models for response serialization.
"""

from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class HealthStatusEnum(str, Enum):
    """健康状态枚举"""
    HEALTHY = "healthy"
    UNAVAILABLE = "unavailable"


class HealthResponse(BaseModel):
    """健康检查响应模型"""
    status: HealthStatusEnum = Field(..., description="服务状态")
    quotes: int = Field(..., description="当前语录数量", ge=0)
    cache_enabled: bool = Field(..., description="是否启用语录缓存")
    loaded_at: Optional[datetime] = Field(None, description="最近一次成功加载时间")
