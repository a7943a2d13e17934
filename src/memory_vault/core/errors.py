"""Specific error types for the Memory Vault application."""

from uuid import UUID

from .base import (
    ApplicationError,
    ErrorCode,
    ErrorDetails,
    ErrorLevel,
    MemoryErrorDetails,
    StateErrorDetails,
    StoreErrorDetails,
    ValidationErrorDetails,
)


class NotFoundError(ApplicationError):
    """Referenced memory does not exist."""

    def __init__(self, message: str, details: MemoryErrorDetails | dict | None = None):
        super().__init__(message=message, code=ErrorCode.NOT_FOUND, level=ErrorLevel.WARNING, details=details)

    @classmethod
    def memory(cls, memory_id: UUID, action: str) -> "NotFoundError":
        return cls(
            f"Memory not found with id: {memory_id}",
            details=MemoryErrorDetails(
                source="memory_service",
                operation=action,
                memory_id=memory_id,
                action=action,
            ),
        )


class InvalidArgumentError(ApplicationError):
    """Caller supplied a blank, empty or oversized value."""

    def __init__(self, message: str, details: ValidationErrorDetails | dict | None = None):
        super().__init__(message=message, code=ErrorCode.INVALID_INPUT, level=ErrorLevel.WARNING, details=details)


class InvalidStateError(ApplicationError):
    """Operation is not legal for the memory's current status."""

    def __init__(self, message: str, details: StateErrorDetails | dict | None = None):
        super().__init__(message=message, code=ErrorCode.INVALID_STATE, level=ErrorLevel.WARNING, details=details)


class ConflictError(ApplicationError):
    """A unique value is already taken in the store."""

    def __init__(self, message: str, details: StoreErrorDetails | dict | None = None):
        super().__init__(message=message, code=ErrorCode.CONFLICT, level=ErrorLevel.ERROR, details=details)


class IntegrityError(ApplicationError):
    """Store refused a write that would break chunk ordering or the status/index pairing."""

    def __init__(self, message: str, details: StoreErrorDetails | ErrorDetails | dict | None = None):
        super().__init__(message=message, code=ErrorCode.STORE_INTEGRITY, level=ErrorLevel.ERROR, details=details)
