"""
Basic import tests to verify module structure
"""


def test_basic_imports():
    """Test basic module imports"""
    # Test utils modules
    from utils.config_manager import UnifiedConfigManager
    from utils.logging_manager import LoggingManager
    from utils.rwlock import ReadWriteLock
    from utils.duration_utils import parse_duration

    # Test store modules
    from store import QuoteStore, StoreSnapshot

    # Test quote source modules
    from quote_sources import QuoteLoader, FileQuoteSource, UrlQuoteSource, parse_quotes

    # Test API modules
    from api import create_app

    # Test scheduler modules
    from scheduler import RefreshScheduler, RefreshTasks

    # Test main module
    from main import QuoteDaemon, main

    assert True  # All imports succeeded


def test_version():
    """Test package version is exposed"""
    from utils import __version__

    assert __version__ == "1.0.0"
