"""
Remote (http/https) quote source.
Uses a shared aiohttp session with an overall request timeout.
"""

import asyncio
from typing import Optional

import aiohttp

from utils import source_logger, SourceFetchError, ErrorCodes

from .base_source import BaseQuoteSource


class UrlQuoteSource(BaseQuoteSource):
    """远程语录源"""

    user_agent = "quoted/1.0"

    def __init__(self, url: str, timeout: float = 30.0):
        super().__init__("UrlQuoteSource", url)
        self.url = url
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

    async def _initialize_impl(self):
        """创建异步HTTP会话"""
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            headers={'User-Agent': self.user_agent}
        )

    async def close(self):
        if self.session:
            await self.session.close()
            self.session = None
        await super().close()

    async def fetch_text(self) -> str:
        await self.initialize()

        try:
            async with self.session.get(self.url) as response:
                if response.status != 200:
                    raise SourceFetchError(
                        f"failed fetching quote source: {response.status}",
                        ErrorCodes.SOURCE_BAD_STATUS,
                        context={"source": self.url, "status": response.status}
                    )
                # 与本地文件一致，按 UTF-8 解码（忽略服务器声明的编码）
                body = await response.read()
        except aiohttp.ClientError as e:
            raise SourceFetchError(
                f"failed fetching quote source {self.url}: {e}",
                ErrorCodes.SOURCE_FETCH_FAILED,
                context={"source": self.url}
            ) from e
        except asyncio.TimeoutError as e:
            raise SourceFetchError(
                f"timed out fetching quote source {self.url} after {self.timeout:g}s",
                ErrorCodes.SOURCE_FETCH_FAILED,
                context={"source": self.url}
            ) from e

        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SourceFetchError(
                f"quote source {self.url} is not valid UTF-8: {e}",
                ErrorCodes.SOURCE_FETCH_FAILED,
                context={"source": self.url}
            ) from e

        source_logger.debug(f"[{self.name}] Fetched {len(body)} bytes from {self.url}")
        return text
