"""
Core module for cross-cutting concerns.

This module provides:
- Structured logging configuration
- Request tracing middleware
- Text normalization utilities
"""

from core.logging import configure_logging, get_logger
from core.utils import fuzzy_contains, normalize_text, unique

__all__ = [
    "configure_logging",
    "get_logger",
    "fuzzy_contains",
    "normalize_text",
    "unique",
]
