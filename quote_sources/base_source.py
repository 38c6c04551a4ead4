"""
Base quote source class for the quote service.
Every source fetches the raw text of a quote collection; parsing is shared.
"""

from abc import ABC, abstractmethod

from utils import source_logger


class BaseQuoteSource(ABC):
    """语录源基类"""

    def __init__(self, name: str, identifier: str):
        self.name = name
        self.identifier = identifier
        self.is_initialized = False

    async def initialize(self):
        """初始化语录源"""
        if not self.is_initialized:
            source_logger.debug(f"[{self.name}] Initializing quote source: {self.identifier}")
            await self._initialize_impl()
            self.is_initialized = True

    async def _initialize_impl(self):
        """初始化实现（可选）"""
        pass

    async def close(self):
        """关闭语录源持有的资源"""
        self.is_initialized = False
        source_logger.debug(f"[{self.name}] Quote source closed")

    @abstractmethod
    async def fetch_text(self) -> str:
        """获取语录源的完整原始文本

        Raises:
            QuoteSourceError: 获取失败（整体失败，不返回部分数据）
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.identifier!r})"
