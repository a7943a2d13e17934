"""Translate errors into transport-neutral response payloads"""

from typing import Any

from fastapi import status

from .base import ApplicationError, ErrorCode, ErrorLevel
from .error_context import ErrorContext, ErrorContextManager
from .logging import get_logger

logger = get_logger(__name__)

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
}


class ErrorHandler:
    """Formats errors for callers outside the core"""

    def _format_response(
        self,
        error_context: ErrorContext,
        level: ErrorLevel,
    ) -> dict[str, Any]:
        response: dict[str, Any] = {
            "error": str(error_context.error),
            "error_code": ErrorCode.INTERNAL.value,
            "level": level.value,
            "trace_id": error_context.trace_id,
            "timestamp": error_context.timestamp.isoformat(),
        }
        if error_context.memory_id:
            response["memory_id"] = error_context.memory_id

        if isinstance(error_context.error, ApplicationError):
            response["error_code"] = error_context.error.code.value
            response["details"] = error_context.error.details.model_dump(mode="json")

        return response

    def handle_sync(self, error: Exception, level: ErrorLevel, context: dict[str, Any]) -> dict[str, Any]:
        """Capture a context for ``error`` and return its response payload"""
        with ErrorContextManager(error, **context) as error_context:
            return self._format_response(error_context, level)

    @staticmethod
    def status_code(error: Exception) -> int:
        """HTTP status matching the error's code; unexpected errors are 500"""
        if isinstance(error, ApplicationError):
            return STATUS_BY_CODE.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        return status.HTTP_500_INTERNAL_SERVER_ERROR

    def handle(self, error: Exception, **context: Any) -> tuple[int, dict[str, Any]]:
        """Return ``(status_code, payload)`` for any error"""
        level = error.level if isinstance(error, ApplicationError) else ErrorLevel.ERROR
        status_code = self.status_code(error)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(f"Unhandled error: {error!s}", error=error)
        return status_code, self.handle_sync(error, level, context)
