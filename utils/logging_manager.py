"""
语录服务日志管理模块
根日志器负责输出（控制台 / 轮转文件），各服务模块使用具名日志器
"""

import logging
import sys
import time
import traceback
import threading
from pathlib import Path
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Optional, Dict, Any, List
from dataclasses import dataclass

from .config_manager import LoggingConfig
from .path_utils import LOG_DIR

logger = logging.getLogger("LoggingManager")


@dataclass
class LogConfig:
    """解析后的日志输出配置"""
    level: str = "INFO"
    format: str = "[%(levelname)s][%(asctime)s][%(name)s] - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    console: bool = True
    file_path: Optional[Path] = None  # None 表示不写文件
    rotation_type: str = "size"  # "size" 或 "time"
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5


class LoggingManager:
    """进程级日志管理器（单例）"""

    _instance = None
    _lock = threading.Lock()

    # verbose 模式下调整为 DEBUG 的服务日志器
    SERVICE_LOGGERS = ("QuoteStore", "QuoteSource", "Scheduler", "API", "Main", "Config")

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, '_initialized'):
            return

        self._initialized = True
        self._config = LogConfig()
        self._loggers: Dict[str, logging.Logger] = {}

    @property
    def config(self) -> LogConfig:
        return self._config

    def configure(self, config: Optional[LogConfig] = None):
        """用给定配置替换根日志器的全部处理器"""
        if config is not None:
            self._config = config

        root = logging.getLogger()
        root.setLevel(getattr(logging, self._config.level.upper(), logging.INFO))

        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(self._config.format, datefmt=self._config.date_format)
        for handler in self._build_handlers():
            handler.setFormatter(formatter)
            root.addHandler(handler)

    def _build_handlers(self) -> List[logging.Handler]:
        handlers: List[logging.Handler] = []
        if self._config.console:
            handlers.append(logging.StreamHandler(sys.stderr))
        if self._config.file_path is not None:
            handlers.append(self._file_handler(self._config.file_path))
        return handlers

    def _file_handler(self, path: Path) -> logging.Handler:
        path.parent.mkdir(parents=True, exist_ok=True)
        if self._config.rotation_type == "time":
            return TimedRotatingFileHandler(
                filename=path, when="midnight", backupCount=self._config.backup_count, encoding="utf-8"
            )
        return RotatingFileHandler(
            filename=path, maxBytes=self._config.max_bytes, backupCount=self._config.backup_count, encoding="utf-8"
        )

    def configure_from_config(self, logging_config: LoggingConfig, verbose: bool = False) -> LogConfig:
        """根据 logging_config 配置节初始化日志系统"""
        file_config = logging_config.file_config
        rotation = file_config.rotation or {}

        file_path = None
        if file_config.enabled:
            directory = Path(file_config.directory)
            if not directory.is_absolute():
                # 相对目录以 log/ 的上级（项目根目录）为基准
                directory = LOG_DIR.parent / directory
            file_path = directory / file_config.filename

        self.configure(LogConfig(
            level=logging_config.level,
            format=logging_config.format,
            date_format=logging_config.date_format,
            console=logging_config.console_config.enabled,
            file_path=file_path,
            rotation_type=rotation.get('type', 'size'),
            max_bytes=int(rotation.get('max_bytes_mb', 10)) * 1024 * 1024,
            backup_count=int(rotation.get('backup_count', 5))
        ))
        self.set_verbose(verbose)
        return self._config

    def set_verbose(self, verbose: bool):
        """verbose 模式下重载、缓存轮换和访问日志（DEBUG）可见"""
        level = logging.DEBUG if verbose else logging.NOTSET
        for name in self.SERVICE_LOGGERS:
            # 子日志器的记录直接交给根处理器，与根日志器级别无关
            self.get_logger(name).setLevel(level)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        name = name or "quoted"
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)
        return self._loggers[name]


logging_manager = LoggingManager()


class LogContext:
    """记录一次操作的开始、耗时和失败（DEBUG），不吞掉异常

    Example:
        with LogContext("QuoteSource", "load", source=path):
            text = await source.fetch_text()
    """

    def __init__(self, module: str, operation: Optional[str] = None, **context: Any):
        self.logger = logging_manager.get_logger(module)
        self.label = ".".join(
            [module]
            + ([operation] if operation else [])
            + [f"{key}:{value}" for key, value in context.items()]
        )
        self.started: Optional[float] = None

    def __enter__(self):
        self.started = time.monotonic()
        self.logger.debug(f"[{self.label}] Starting operation")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.monotonic() - self.started
        if exc_type is None:
            self.logger.debug(f"[{self.label}] Operation completed in {elapsed:.3f}s")
        else:
            self.logger.debug(f"[{self.label}] Operation failed in {elapsed:.3f}s: {exc_val}")
            self.logger.debug(f"[{self.label}] Traceback: {''.join(traceback.format_tb(exc_tb))}")
        return False


class ModuleLoggers:
    """服务模块日志器"""

    QuoteStore = logging_manager.get_logger("QuoteStore")
    QuoteSource = logging_manager.get_logger("QuoteSource")
    Scheduler = logging_manager.get_logger("Scheduler")
    API = logging_manager.get_logger("API")
    Main = logging_manager.get_logger("Main")
    Config = logging_manager.get_logger("Config")


store_logger = ModuleLoggers.QuoteStore
source_logger = ModuleLoggers.QuoteSource
scheduler_logger = ModuleLoggers.Scheduler
api_logger = ModuleLoggers.API
main_logger = ModuleLoggers.Main
config_logger = ModuleLoggers.Config


def initialize_logging(logging_config: Optional[LoggingConfig] = None, verbose: bool = False) -> LogConfig:
    """初始化日志系统；未提供配置时使用默认的控制台输出"""
    if logging_config is None:
        logging_manager.configure()
        logging_manager.set_verbose(verbose)
        config = logging_manager.config
    else:
        config = logging_manager.configure_from_config(logging_config, verbose=verbose)

    logger.debug("Logging system initialized")
    return config
