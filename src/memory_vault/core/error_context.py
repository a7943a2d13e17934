"""Error context management"""

from datetime import datetime
from types import TracebackType
from typing import Any
from uuid import uuid4

from memory_vault.domain.models.utils import utc_now

from .base import ApplicationError
from .logging import get_log_context, get_logger

logger = get_logger(__name__)


class ErrorContext:
    """One error plus what was going on when it happened.

    The trace id and memory id are taken from the bound log context when a
    request or service call has set them, so an error response can be matched
    with the log lines around it.
    """

    def __init__(self, error: Exception, trace_id: str | None = None, **context: Any):
        bound = get_log_context()
        self.error = error
        self.trace_id: str = trace_id or bound.get("trace_id") or uuid4().hex
        self.memory_id: str | None = bound.get("memory_id")
        self.timestamp: datetime = utc_now()
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "error_type": type(self.error).__name__,
            "error_message": str(self.error),
            "trace_id": self.trace_id,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.memory_id:
            result["memory_id"] = self.memory_id
        if isinstance(self.error, ApplicationError):
            result.update(self.error.log_fields())
        result.update({f"context.{key}": value for key, value in self.context.items()})
        return result


class ErrorContextManager:
    """Opens an ErrorContext for ``error``; failures while handling it are logged, not hidden"""

    def __init__(self, error: Exception, **context: Any) -> None:
        self._error = error
        self._context = context

    def __enter__(self) -> ErrorContext:
        return ErrorContext(self._error, **self._context)

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_val is not None:
            logger.error(
                "Exception while handling error",
                original_error=type(self._error).__name__,
                exc_info=(exc_type, exc_val, exc_tb),
            )
