"""Structured logging for cardapdu.

This module provides structured JSON or text logging for the cardapdu
logger hierarchy.
"""

from cardapdu.logging.manager import LoggerManager, configure_logging, get_logger
from cardapdu.logging.structured import StructuredFormatter, TextFormatter

__all__ = [
    "LoggerManager",
    "StructuredFormatter",
    "TextFormatter",
    "configure_logging",
    "get_logger",
]
