"""Structured logging module for mediapass.

Provides configurable logging with JSON format support and file rotation.
Includes pass context support for multi-pass encodes.
"""

from mediapass.logging.config import configure_logging
from mediapass.logging.context import (
    PassContextFilter,
    clear_pass_context,
    get_pass_context,
    pass_context,
    set_pass_context,
)
from mediapass.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "PassContextFilter",
    "clear_pass_context",
    "configure_logging",
    "get_pass_context",
    "pass_context",
    "set_pass_context",
]
