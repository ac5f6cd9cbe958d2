"""Logging infrastructure for the workforce rotation engine.

This module provides structured logging with JSON output and context
tracking across concurrent month computations.
"""

from workforce_rotation.logging.filters import ContextFilter
from workforce_rotation.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
]
