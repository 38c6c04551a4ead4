"""
统一异常定义模块
提供项目特定的异常类和错误处理机制
"""

from typing import Optional, Dict, Any


class QuoteServiceError(Exception):
    """语录服务基础异常类"""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ConfigurationError(QuoteServiceError):
    """配置相关错误"""
    pass


class QuoteSourceError(QuoteServiceError):
    """语录源相关错误"""
    pass


class SourceFetchError(QuoteSourceError):
    """远程语录源获取失败（网络错误或非200状态）"""
    pass


class SourceReadError(QuoteSourceError):
    """本地语录文件无法打开或读取"""
    pass


# 错误代码常量
class ErrorCodes:
    """错误代码常量"""

    # 配置错误
    CONFIG_NOT_FOUND = "CONFIG_001"
    CONFIG_INVALID_FORMAT = "CONFIG_002"
    CONFIG_INVALID_VALUE = "CONFIG_003"

    # 语录源错误
    SOURCE_FETCH_FAILED = "SRC_001"
    SOURCE_READ_FAILED = "SRC_002"
    SOURCE_BAD_STATUS = "SRC_003"


def create_error_response(error: QuoteServiceError,
                          include_traceback: bool = False) -> Dict[str, Any]:
    """创建标准化的错误响应"""
    response = {
        "error": True,
        "error_code": error.error_code,
        "message": error.message,
        "context": error.context
    }

    if include_traceback:
        import traceback
        response["traceback"] = traceback.format_exc()

    return response
