"""
Quote Service Test Suite
========================

This package contains tests for the quote service including:
- Unit tests for individual components
- Integration tests for component interactions
"""
