"""
Main entry point for the quote service.
Provides command-line interface and daemon lifecycle.
"""

import asyncio
import argparse
import signal
import sys
from typing import Optional, List, Set

import uvicorn

from utils import (
    main_logger, UnifiedConfigManager, QuoteServiceError, ConfigurationError,
    initialize_logging, parse_duration, CONFIG_DIR
)
from store import QuoteStore
from quote_sources import QuoteLoader
from scheduler import RefreshTasks, RefreshScheduler
from api import create_app


class QuoteDaemon:
    """语录服务主类"""

    def __init__(self, config: UnifiedConfigManager):
        self.config = config
        self.service_config = config.get_service_config()
        self.api_config = config.get_api_config()
        self.scheduler_config = config.get_scheduler_config()

        if not self.service_config.source:
            raise ConfigurationError("missing quote source")

        self.store = QuoteStore(cache_enabled=self.service_config.cache_enabled)
        self.loader = QuoteLoader(fetch_timeout=self.service_config.fetch_timeout)
        self.tasks = RefreshTasks(self.store, self.loader, self.service_config.source)
        self.refresh_scheduler = RefreshScheduler(
            self.tasks, self.service_config, self.scheduler_config
        )
        self.app = create_app(self.store, verbose=self.service_config.verbose)
        self.server: Optional[uvicorn.Server] = None
        self._signal_tasks: Set[asyncio.Task] = set()

    async def initialize(self):
        """首次加载语录，失败时抛出异常（进程不进入服务状态）"""
        main_logger.info(f"[Main] Loading quotes from {self.service_config.source}...")
        await self.tasks.load_initial()

    def _create_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            self.app,
            host=self.api_config.host,
            port=self.api_config.port,
            log_config=None,
            log_level="info" if self.service_config.verbose else "warning",
            access_log=False,
            timeout_graceful_shutdown=self.api_config.shutdown_grace
        )
        return uvicorn.Server(config)

    def _on_reload_signal(self):
        main_logger.info("[Main] caught SIGHUP; reloading...")
        task = asyncio.ensure_future(self.tasks.reload_quotes())
        self._signal_tasks.add(task)
        task.add_done_callback(self._on_reload_done)

    def _on_reload_done(self, task: asyncio.Task):
        self._signal_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            # reload_quotes 只处理服务异常，其余异常在此记录
            main_logger.error(
                f"[Main] SIGHUP reload failed, keeping current quotes: {error!r}",
                exc_info=(type(error), error, error.__traceback__)
            )

    def _setup_signal_handlers(self):
        """设置 SIGHUP 重载；SIGINT/SIGTERM 由 uvicorn 处理并优雅关闭"""
        try:
            loop = asyncio.get_running_loop()
            loop.add_signal_handler(signal.SIGHUP, self._on_reload_signal)
        except (AttributeError, NotImplementedError, RuntimeError) as e:
            main_logger.warning(f"[Main] Failed to setup SIGHUP handler: {e}")

    def _remove_signal_handlers(self):
        try:
            asyncio.get_running_loop().remove_signal_handler(signal.SIGHUP)
        except (AttributeError, NotImplementedError, RuntimeError):
            pass

    async def serve(self):
        """启动定时任务和HTTP服务，直到收到终止信号"""
        self.server = self._create_server()
        await self.refresh_scheduler.initialize()
        self._setup_signal_handlers()

        main_logger.info(f"[Main] Serving quotes on {self.api_config.host}:{self.api_config.port}")
        try:
            await self.server.serve()
        finally:
            main_logger.info("[Main] Server stopped; shutting down...")
            await self.shutdown()

    async def shutdown(self):
        """关闭系统：定时任务直接放弃，不等待"""
        self._remove_signal_handlers()
        self.refresh_scheduler.shutdown()
        await self.loader.close_all()
        main_logger.info("[Main] Quote service stopped")


def _duration_arg(value: str) -> float:
    try:
        return parse_duration(value)
    except ConfigurationError as e:
        raise argparse.ArgumentTypeError(e.message) from e


def _normalize_host(host: str) -> str:
    # 兼容 "[::1]" 形式的 IPv6 地址
    if host.startswith("[") and host.endswith("]"):
        return host[1:-1]
    return host


def create_parser() -> argparse.ArgumentParser:
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        prog="quoted",
        description="Serve a random quote from a quote file or URL over HTTP.",
        usage="%(prog)s [OPTIONS] (FILE|URL)"
    )
    parser.add_argument('source', metavar='SOURCE', help='quote source: file path or http(s) URL')
    parser.add_argument('--addr', default=None, help='bind to address (default: ::1)')
    parser.add_argument('--port', type=int, default=None, help='bind to port (default: 8080)')
    parser.add_argument('--reload', type=_duration_arg, default=None, metavar='INTERVAL',
                        help='quote source refresh interval, e.g. 10m (0 = no refresh; default 0)')
    parser.add_argument('--cache', type=_duration_arg, default=None, metavar='DURATION',
                        help='duration to cache the selected quote, e.g. 1h (0 = no caching; default 0)')
    parser.add_argument('--verbose', action='store_true', default=None,
                        help='verbose output: reloads / cache selections / access logs')
    parser.add_argument('--config-dir', default=str(CONFIG_DIR),
                        help='directory of JSON configuration files (default: %(default)s)')
    return parser


def build_config(args: argparse.Namespace) -> UnifiedConfigManager:
    """加载配置文件，并用命令行参数覆盖"""
    config = UnifiedConfigManager(args.config_dir)

    overrides = {'service_config': {'source': args.source}, 'api_config': {}}
    if args.reload is not None:
        overrides['service_config']['reload_interval'] = args.reload
    if args.cache is not None:
        overrides['service_config']['cache_duration'] = args.cache
    if args.verbose is not None:
        overrides['service_config']['verbose'] = args.verbose
    if args.addr is not None:
        overrides['api_config']['host'] = _normalize_host(args.addr)
    if args.port is not None:
        overrides['api_config']['port'] = args.port

    config.update_from_dict(overrides)
    return config


async def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
        service_config = config.get_service_config()
        initialize_logging(config.get_logging_config(), verbose=service_config.verbose)
        daemon = QuoteDaemon(config)
    except ConfigurationError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e.message}", file=sys.stderr)
        return 2

    try:
        await daemon.initialize()
    except QuoteServiceError as e:
        main_logger.error(f"[Main] Initial quote load failed: {e}")
        await daemon.loader.close_all()
        return 1

    await daemon.serve()
    return 0


def run():
    """控制台入口"""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    run()
