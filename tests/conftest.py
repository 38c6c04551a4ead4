"""
pytest configuration and fixtures for quote service tests
"""

import random
import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from store import QuoteStore


SAMPLE_SOURCE_TEXT = (
    "# quotes for testing\n"
    "The only way out is through.\n"
    "\n"
    "Simplicity is prerequisite\n"
    "for reliability.\n"
    "\n"
    "\\# not a comment\n"
    "\n"
    "first stanza\n"
    "\\\n"
    "second stanza\n"
)

SAMPLE_QUOTES = (
    "The only way out is through.",
    "Simplicity is prerequisite\nfor reliability.",
    "# not a comment",
    "first stanza\n\nsecond stanza",
)


@pytest.fixture
def sample_source_text():
    """Raw quote source text"""
    return SAMPLE_SOURCE_TEXT


@pytest.fixture
def sample_quotes():
    """Quotes parsed from sample_source_text"""
    return SAMPLE_QUOTES


@pytest.fixture
def quote_file(tmp_path, sample_source_text):
    """Quote source file on disk"""
    path = tmp_path / "quotes.txt"
    path.write_text(sample_source_text, encoding="utf-8")
    return path


@pytest.fixture
def rng():
    """Seeded random generator for reproducible selections"""
    return random.Random(20240601)


@pytest.fixture
def store(rng, sample_quotes):
    """Store without caching, preloaded with sample quotes"""
    quote_store = QuoteStore(cache_enabled=False, rng=rng)
    quote_store.reload(sample_quotes)
    return quote_store


@pytest.fixture
def cached_store(rng, sample_quotes):
    """Store with caching enabled, preloaded with sample quotes"""
    quote_store = QuoteStore(cache_enabled=True, rng=rng)
    quote_store.reload(sample_quotes)
    return quote_store


# Pytest configuration
def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
