"""
语录服务配置管理
config/ 目录下的 JSON 文件按文件名顺序合并，命令行参数覆盖后转换为类型化数据类
"""

import json
import logging
from typing import Any, Callable, Optional, Dict, TypeVar, Union
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ConfigurationError, ErrorCodes
from .duration_utils import parse_duration

# 获取配置专用日志器
config_logger = logging.getLogger("Config")

# 为泛型类型定义一个TypeVar
T = TypeVar('T')

# ============================================================================
# 配置数据类型定义
# ============================================================================

@dataclass
class FileLoggingConfig:
    """文件日志配置"""
    enabled: bool = False
    directory: str = "log"
    filename: str = "quoted.log"
    rotation: Optional[Dict[str, Any]] = None

@dataclass
class ConsoleLoggingConfig:
    """控制台日志配置"""
    enabled: bool = True

@dataclass
class LoggingConfig:
    """完整日志配置"""
    level: str = "INFO"
    format: str = "[%(levelname)s][%(asctime)s][%(name)s] - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_config: FileLoggingConfig = field(default_factory=FileLoggingConfig)
    console_config: ConsoleLoggingConfig = field(default_factory=ConsoleLoggingConfig)

@dataclass
class ServiceConfig:
    """语录服务配置"""
    source: Optional[str] = None
    reload_interval: float = 0.0  # 秒，0 表示不定期重载
    cache_duration: float = 0.0   # 秒，0 表示不缓存选中的语录
    verbose: bool = False
    fetch_timeout: float = 30.0

    @property
    def cache_enabled(self) -> bool:
        return self.cache_duration > 0

@dataclass
class SchedulerConfig:
    """调度器配置"""
    misfire_grace_time: int = 30
    coalesce: bool = True

@dataclass
class ApiConfig:
    """API配置"""
    host: str = "::1"
    port: int = 8080
    shutdown_grace: float = 5.0


# ============================================================================
# 统一配置管理器
# ============================================================================

class UnifiedConfigManager:
    """统一配置管理器 - 整合底层操作和应用层抽象"""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        self._config_dir = Path(config_dir) if config_dir else None
        self._config_data: Dict[str, Any] = {}

        # 类型化配置缓存
        self._typed_cache: Dict[str, Any] = {}

        # 初始化配置
        self._load_config()

    def _load_config(self) -> None:
        """加载配置文件（目录不存在时使用默认配置）"""
        merged_config: Dict[str, Any] = {}

        if self._config_dir is None:
            config_logger.debug("No configuration directory given, using defaults")
        elif not self._config_dir.is_dir():
            config_logger.debug(f"Configuration directory not found: {self._config_dir}, using defaults")
        else:
            config_logger.info(f"Loading configuration from directory: {self._config_dir}")

            # 按文件名排序加载，确保加载顺序一致
            config_files = sorted(self._config_dir.glob('*.json'))
            for config_file in config_files:
                try:
                    with open(config_file, 'r', encoding='utf-8') as f:
                        data = json.load(f)
                except json.JSONDecodeError as e:
                    raise ConfigurationError(
                        f"Invalid JSON in configuration file {config_file.name}: {e}",
                        ErrorCodes.CONFIG_INVALID_FORMAT
                    ) from e
                except OSError as e:
                    raise ConfigurationError(
                        f"Failed to read configuration file {config_file.name}: {e}",
                        ErrorCodes.CONFIG_NOT_FOUND
                    ) from e

                if not isinstance(data, dict):
                    raise ConfigurationError(
                        f"Configuration file {config_file.name} must contain a JSON object",
                        ErrorCodes.CONFIG_INVALID_FORMAT
                    )
                merged_config.update(data)
                config_logger.debug(f"Loaded and merged: {config_file.name}")

            config_logger.info(f"Configuration loaded and merged from {len(config_files)} files.")

        self._config_data = merged_config
        # 清除类型化缓存
        self._typed_cache.clear()

    # ========================================================================
    # 底层访问方法
    # ========================================================================

    def get_nested(self, path: str, default: Optional[T] = None) -> Optional[T]:
        """获取嵌套配置值，支持点分隔路径"""
        current = self._config_data
        for key in path.split('.'):
            if not isinstance(current, dict) or key not in current:
                return default
            current = current[key]
        return current

    def update_from_dict(self, config_dict: Dict[str, Any]) -> None:
        """从字典更新配置（按分区合并）"""
        for section, values in config_dict.items():
            if isinstance(values, dict) and isinstance(self._config_data.get(section), dict):
                self._config_data[section].update(values)
            else:
                self._config_data[section] = values
        self._typed_cache.clear()
        config_logger.debug("Configuration updated from dict")

    # ========================================================================
    # 类型安全访问方法（按配置节缓存，配置变更时失效）
    # ========================================================================

    def _typed(self, section: str, builder: Callable[[Dict[str, Any]], T]) -> T:
        if section not in self._typed_cache:
            self._typed_cache[section] = builder(self.get_nested(section, {}) or {})
        return self._typed_cache[section]

    def get_logging_config(self) -> LoggingConfig:
        return self._typed('logging_config', _build_logging_config)

    def get_service_config(self) -> ServiceConfig:
        return self._typed('service_config', _build_service_config)

    def get_scheduler_config(self) -> SchedulerConfig:
        return self._typed('scheduler_config', _build_scheduler_config)

    def get_api_config(self) -> ApiConfig:
        return self._typed('api_config', _build_api_config)


# ============================================================================
# 配置节 -> 数据类
# ============================================================================

_TRUE_STRINGS = ("true", "yes", "on", "1")
_FALSE_STRINGS = ("false", "no", "off", "0")


def _parse_bool(value: Any, name: str) -> bool:
    """布尔配置项：接受 JSON 布尔值或 "true"/"false" 等字符串，其余视为无效"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}", ErrorCodes.CONFIG_INVALID_VALUE)


def _build_logging_config(data: Dict[str, Any]) -> LoggingConfig:
    defaults = LoggingConfig()
    file_data = {
        k: v for k, v in data.get('file_config', {}).items() if k in FileLoggingConfig.__dataclass_fields__
    }
    if 'enabled' in file_data:
        file_data['enabled'] = _parse_bool(file_data['enabled'], 'file_config.enabled')
    console_data = data.get('console_config', {})

    return LoggingConfig(
        level=data.get('level', defaults.level),
        format=data.get('format', defaults.format),
        date_format=data.get('date_format', defaults.date_format),
        file_config=FileLoggingConfig(**file_data),
        console_config=ConsoleLoggingConfig(
            enabled=_parse_bool(console_data.get('enabled', True), 'console_config.enabled')
        )
    )


def _build_service_config(data: Dict[str, Any]) -> ServiceConfig:
    fetch_timeout = parse_duration(data.get('fetch_timeout', 30))
    if fetch_timeout <= 0:
        raise ConfigurationError(
            "fetch_timeout must be greater than zero",
            ErrorCodes.CONFIG_INVALID_VALUE
        )

    return ServiceConfig(
        source=data.get('source'),
        reload_interval=parse_duration(data.get('reload_interval', 0)),
        cache_duration=parse_duration(data.get('cache_duration', 0)),
        verbose=_parse_bool(data.get('verbose', False), 'verbose'),
        fetch_timeout=fetch_timeout
    )


def _build_scheduler_config(data: Dict[str, Any]) -> SchedulerConfig:
    return SchedulerConfig(
        misfire_grace_time=int(data.get('misfire_grace_time', 30)),
        coalesce=_parse_bool(data.get('coalesce', True), 'coalesce')
    )


def _build_api_config(data: Dict[str, Any]) -> ApiConfig:
    raw_port = data.get('port', 8080)
    try:
        port = int(raw_port)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid port: {raw_port!r}", ErrorCodes.CONFIG_INVALID_VALUE) from e
    if not 0 < port < 65536:
        raise ConfigurationError(f"Port out of range: {port}", ErrorCodes.CONFIG_INVALID_VALUE)

    return ApiConfig(
        host=data.get('host', '::1'),
        port=port,
        shutdown_grace=parse_duration(data.get('shutdown_grace', 5))
    )
