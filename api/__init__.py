"""
API module for the quote service.
Provides the FastAPI-based HTTP surface.
"""

from .app import create_app

__all__ = ['create_app']
