"""Logging setup: structlog events pass through Logfire, then a renderer.

Logfire itself is configured in ``memory_vault.main``; this module only
builds the processor chain and routes standard library records (uvicorn,
fastapi) through it.
"""

import logging
import sys

import logfire
import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder
from structlog.types import EventDict, Processor, WrappedLogger

from memory_vault.core.config import settings


def add_error_type(_logger: WrappedLogger, _method_name: str, event_dict: EventDict) -> EventDict:
    """Name the class of an ``error=`` value so Logfire can group on it."""
    error = event_dict.get("error")
    if isinstance(error, BaseException):
        event_dict.setdefault("error_type", type(error).__name__)
    return event_dict


def shared_processors() -> list[Processor]:
    """Processors applied to both structlog and standard library records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        CallsiteParameterAdder(parameters=[CallsiteParameter.MODULE, CallsiteParameter.FUNC_NAME]),
        add_error_type,
        structlog.processors.StackInfoRenderer(),
    ]


def _renderer(json_logs: bool) -> Processor:
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging(level: str | int | None = None, json_logs: bool | None = None) -> None:
    """Configure structlog and the root logger.

    Args:
        level: Minimum level, defaults to ``settings.log_level``.
        json_logs: Render JSON lines, defaults to ``settings.log_json``.
    """
    level = level if level is not None else settings.log_level
    if isinstance(level, str):
        level = logging.getLevelNamesMapping()[level.upper()]
    json_logs = settings.log_json if json_logs is None else json_logs

    structlog.configure(
        processors=[
            *shared_processors(),
            structlog.dev.set_exc_info,
            logfire.StructlogProcessor(),
            _renderer(json_logs),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=_renderer(json_logs), foreign_pre_chain=shared_processors())
    )
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)
