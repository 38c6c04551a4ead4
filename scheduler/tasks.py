"""
Refresh tasks for the quote service.
Defines the reload routine shared by the timer and the SIGHUP trigger, and the cache rotation task.
"""

import asyncio
from typing import Optional

from utils import scheduler_logger, QuoteServiceError
from store import QuoteStore
from quote_sources import QuoteLoader


class RefreshTasks:
    """刷新任务：重载语录集合、轮换缓存语录"""

    def __init__(self, store: QuoteStore, loader: QuoteLoader, source: str):
        self.store = store
        self.loader = loader
        self.source = source

    async def load_initial(self) -> int:
        """启动时的首次加载，失败直接抛出（由调用方终止进程）"""
        quotes = await self.loader.load(self.source)
        await self._install(quotes)
        scheduler_logger.info(f"[Scheduler] Loaded {len(quotes)} quotes from {self.source}")
        return len(quotes)

    async def reload_quotes(self) -> bool:
        """尝试重载语录

        获取失败时仅记录错误，保留现有状态，不自动重试。

        Returns:
            bool: 是否成功安装了新的语录集合
        """
        try:
            quotes = await self.loader.load(self.source)
        except QuoteServiceError as e:
            scheduler_logger.error(f"[Scheduler] Quote reload failed, keeping current quotes: {e}")
            return False

        await self._install(quotes)
        return True

    async def _install(self, quotes):
        # 写锁可能需要等待线程池中的读者释放，放到线程池执行以免阻塞事件循环
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.store.reload, quotes)

    def rotate_cache(self) -> Optional[str]:
        """轮换缓存语录（同步执行，由调度器线程池调用）"""
        return self.store.rotate_cache()
