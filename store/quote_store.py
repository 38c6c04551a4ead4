"""
Concurrent quote store for the quote service.
Holds the current quote set and the optional cached selection behind a reader-writer lock.
"""

import random
import time
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from utils import store_logger, ReadWriteLock


QuoteSet = Tuple[str, ...]


@dataclass(frozen=True)
class StoreSnapshot:
    """某一时刻的存储状态（一次读锁内获取）"""
    quotes: QuoteSet
    cached: Optional[str]
    version: int
    loaded_at: Optional[float]


class QuoteStore:
    """语录存储：多读者并发、单写者独占"""

    def __init__(self, cache_enabled: bool = False, rng: Optional[random.Random] = None):
        self._cache_enabled = cache_enabled
        self._rng = rng or random.Random()
        self._lock = ReadWriteLock()

        # 以下状态只能在持有锁时访问
        self._quotes: QuoteSet = ()
        self._cached: Optional[str] = None
        self._version = 0
        self._loaded_at: Optional[float] = None

    @property
    def cache_enabled(self) -> bool:
        return self._cache_enabled

    def _draw(self) -> Optional[str]:
        """均匀随机抽取一条语录，调用方需持有锁"""
        if not self._quotes:
            return None
        return self._quotes[self._rng.randrange(len(self._quotes))]

    def reload(self, quotes: Iterable[str]) -> None:
        """替换整个语录集合；启用缓存时立即重新选择缓存语录

        锁内只做状态交换，不做任何 I/O。
        """
        new_quotes: QuoteSet = tuple(quotes)

        with self._lock.write_locked():
            self._quotes = new_quotes
            self._cached = self._draw() if self._cache_enabled else None
            self._version += 1
            self._loaded_at = time.time()
            version = self._version

        if self._cache_enabled:
            store_logger.debug(f"[QuoteStore] Quotes reloaded ({len(new_quotes)} quotes, v{version}); cached quote reselected")
        else:
            store_logger.debug(f"[QuoteStore] Quotes reloaded ({len(new_quotes)} quotes, v{version})")

    def select(self) -> Optional[str]:
        """返回一条语录；无可用语录时返回 None"""
        with self._lock.read_locked():
            if self._cache_enabled:
                return self._cached
            return self._draw()

    def rotate_cache(self) -> Optional[str]:
        """从当前集合中重新抽取缓存语录"""
        with self._lock.write_locked():
            self._cached = self._draw()
            self._version += 1
            selection = self._cached

        if selection is not None:
            store_logger.debug("[QuoteStore] Cached quote reselected")
        return selection

    def snapshot(self) -> StoreSnapshot:
        with self._lock.read_locked():
            return StoreSnapshot(
                quotes=self._quotes,
                cached=self._cached,
                version=self._version,
                loaded_at=self._loaded_at
            )

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._quotes)

    def has_quotes(self) -> bool:
        return self.count() > 0
