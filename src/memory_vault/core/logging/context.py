"""Logging context utilities for structured logging.

Values are stored with ``structlog.contextvars`` so the ``merge_contextvars``
processor adds them to every event logged in the same task.
"""

from typing import Any
from uuid import UUID

import structlog


def get_log_context() -> dict[str, Any]:
    """Get a copy of the current logging context."""
    return dict(structlog.contextvars.get_contextvars())


def set_log_context(context: dict[str, Any]) -> None:
    """Replace the logging context."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**context)


def update_log_context(key: str, value: Any) -> None:
    """Update a single key in the logging context."""
    structlog.contextvars.bind_contextvars(**{key: value})


def bind_memory(memory_id: UUID | str) -> None:
    """Tag every following log line in this context with a memory id."""
    update_log_context("memory_id", str(memory_id))


def clear_log_context() -> None:
    """Clear the current logging context."""
    structlog.contextvars.clear_contextvars()
