"""
Local file quote source.
"""

import asyncio
from pathlib import Path

from utils import source_logger, SourceReadError, ErrorCodes

from .base_source import BaseQuoteSource


class FileQuoteSource(BaseQuoteSource):
    """本地文件语录源"""

    def __init__(self, path: str, encoding: str = "utf-8"):
        super().__init__("FileQuoteSource", path)
        self.path = Path(path)
        self.encoding = encoding

    def _read(self) -> str:
        with open(self.path, "r", encoding=self.encoding, newline="") as f:
            return f.read()

    async def fetch_text(self) -> str:
        """在线程池中读取文件，避免阻塞事件循环"""
        loop = asyncio.get_running_loop()
        try:
            text = await loop.run_in_executor(None, self._read)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(
                f"failed reading quote source {self.path}: {e}",
                ErrorCodes.SOURCE_READ_FAILED,
                context={"source": str(self.path)}
            ) from e

        source_logger.debug(f"[{self.name}] Read {len(text)} characters from {self.path}")
        return text
