"""Structured logging module.

structlog loggers with a Logfire processor in the chain, plus helpers for
request-scoped logging context.
"""

from .base import get_logger
from .context import (
    bind_memory,
    clear_log_context,
    get_log_context,
    set_log_context,
    update_log_context,
)
from .setup import setup_logging

__all__ = [
    "bind_memory",
    "clear_log_context",
    "get_log_context",
    "get_logger",
    "set_log_context",
    "setup_logging",
    "update_log_context",
]
