"""
Store module for the quote service.
Provides the shared, lock-protected quote state.
"""

from .quote_store import QuoteStore, QuoteSet, StoreSnapshot

__all__ = ['QuoteStore', 'QuoteSet', 'StoreSnapshot']
