"""
Quote source factory and loader for the quote service.
Maps a source identifier to a concrete source and turns its text into a quote set.
"""

from typing import Dict, Tuple

from utils import source_logger, LogContext

from .base_source import BaseQuoteSource
from .file_source import FileQuoteSource
from .url_source import UrlQuoteSource
from .parser import parse_quotes

URL_PREFIXES = ("https://", "http://")


def create_source(identifier: str, fetch_timeout: float = 30.0) -> BaseQuoteSource:
    """根据标识创建语录源：http(s) 地址为远程源，其余视为本地文件路径"""
    if identifier.startswith(URL_PREFIXES):
        return UrlQuoteSource(identifier, timeout=fetch_timeout)
    return FileQuoteSource(identifier)


class QuoteLoader:
    """语录加载器：获取原始文本并解析，要么整体成功，要么抛出异常"""

    def __init__(self, fetch_timeout: float = 30.0):
        self.fetch_timeout = fetch_timeout
        self.sources: Dict[str, BaseQuoteSource] = {}

    def get_source(self, identifier: str) -> BaseQuoteSource:
        """获取（并复用）标识对应的语录源实例"""
        source = self.sources.get(identifier)
        if source is None:
            source = create_source(identifier, self.fetch_timeout)
            self.sources[identifier] = source
            source_logger.debug(f"[QuoteLoader] Created {source!r}")
        return source

    async def load(self, identifier: str) -> Tuple[str, ...]:
        """加载并解析语录

        Raises:
            SourceFetchError: 远程获取失败或返回非200状态
            SourceReadError: 本地文件无法读取
        """
        source = self.get_source(identifier)
        with LogContext("QuoteSource", "load", source=identifier):
            text = await source.fetch_text()
            quotes = parse_quotes(text)

        source_logger.debug(f"[QuoteLoader] Parsed {len(quotes)} quotes from {identifier}")
        return quotes

    async def close_all(self):
        """关闭所有语录源"""
        for source in self.sources.values():
            await source.close()
        self.sources.clear()
