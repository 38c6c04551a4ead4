"""
Quote source module for the quote service.
Loads quote collections from local files or http(s) resources.
"""

from .base_source import BaseQuoteSource
from .file_source import FileQuoteSource
from .url_source import UrlQuoteSource
from .parser import parse_quotes
from .source_factory import QuoteLoader, create_source

__all__ = [
    'BaseQuoteSource',
    'FileQuoteSource',
    'UrlQuoteSource',
    'QuoteLoader',
    'create_source',
    'parse_quotes',
]
