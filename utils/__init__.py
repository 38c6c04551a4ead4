"""
工具模块包
提供项目所需的通用工具和功能
"""

# 导出核心工具
from .config_manager import (
    UnifiedConfigManager,
    LoggingConfig,
    ServiceConfig,
    SchedulerConfig,
    ApiConfig
)
from .exceptions import (
    QuoteServiceError,
    ConfigurationError,
    QuoteSourceError,
    SourceFetchError,
    SourceReadError,
    ErrorCodes,
    create_error_response
)
from .logging_manager import (
    LogContext,
    LogConfig,
    LoggingManager,
    logging_manager,
    initialize_logging,
    ModuleLoggers,
    store_logger,
    source_logger,
    scheduler_logger,
    api_logger,
    main_logger,
    config_logger
)
from .duration_utils import parse_duration, format_duration
from .rwlock import ReadWriteLock
from .path_utils import BASE_DIR, CONFIG_DIR, LOG_DIR

# 版本信息
__version__ = "1.0.0"

__all__ = [
    # 配置管理
    "UnifiedConfigManager",
    "LoggingConfig",
    "ServiceConfig",
    "SchedulerConfig",
    "ApiConfig",

    # 异常处理
    "QuoteServiceError",
    "ConfigurationError",
    "QuoteSourceError",
    "SourceFetchError",
    "SourceReadError",
    "ErrorCodes",
    "create_error_response",

    # 日志工具
    "LogContext",
    "LogConfig",
    "LoggingManager",
    "logging_manager",
    "initialize_logging",
    "ModuleLoggers",
    "store_logger",
    "source_logger",
    "scheduler_logger",
    "api_logger",
    "main_logger",
    "config_logger",

    # 时长工具
    "parse_duration",
    "format_duration",

    # 并发工具
    "ReadWriteLock",

    # 路径工具
    "BASE_DIR",
    "CONFIG_DIR",
    "LOG_DIR",
]
