"""Logger factory shared by every module."""

import structlog
from structlog.typing import FilteringBoundLogger


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Get a structured logger instance.

    Args:
        name: The name of the logger (usually __name__)

    Returns:
        FilteringBoundLogger: A structlog logger. Before ``setup_logging`` runs
        structlog falls back to its default console configuration.
    """
    return structlog.get_logger(name)
