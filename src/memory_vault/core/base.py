"""Base error classes and enums"""

import logging
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from logfire.integrations.pydantic import PluginSettings
from pydantic import BaseModel, Field, field_serializer

from memory_vault.domain.models.utils import utc_now


class ErrorLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    def to_logging_level(self) -> int:
        return logging.getLevelNamesMapping()[self.name]

    @property
    def wants_traceback(self) -> bool:
        return self in (ErrorLevel.ERROR, ErrorLevel.CRITICAL)


class ErrorCode(str, Enum):
    """Stable codes returned to callers alongside every error."""

    # Caller errors (1xxx)
    INVALID_INPUT = "1001"
    NOT_FOUND = "1002"

    # Memory lifecycle errors (2xxx)
    INVALID_STATE = "2001"

    # Store errors (3xxx)
    CONFLICT = "3001"
    STORE_INTEGRITY = "3002"

    # Anything not raised on purpose
    INTERNAL = "5000"


class ErrorDetails(BaseModel, plugin_settings=PluginSettings(logfire={"record": "all"})):
    """Structured context attached to an ApplicationError"""

    source: str = Field(description="Component that raised the error")
    operation: str = Field(description="Operation in progress when it was raised")
    timestamp: datetime = Field(default_factory=utc_now)

    @field_serializer("timestamp")
    def serialize_timestamp(self, timestamp: datetime) -> str:
        return timestamp.isoformat()


class ValidationErrorDetails(ErrorDetails):
    field: str | None = Field(None, description="Argument that was rejected")
    actual_value: Any = None
    constraint: str | None = Field(None, description="Rule the argument broke")


class MemoryErrorDetails(ErrorDetails):
    """Details for errors about one memory"""

    memory_id: UUID | None = None
    action: str | None = Field(None, description="What the caller tried to do (build, chat, ...)")


class StateErrorDetails(MemoryErrorDetails):
    current_status: str | None = None
    required_status: str | None = None


class StoreErrorDetails(ErrorDetails):
    """Details for writes the store refused"""

    store: str = "in_memory"
    collection: str = Field(description="memories, chunks or indexes")
    key: str | None = Field(None, description="Offending key or unique value")


class ApplicationError(Exception):
    """Base class for all application errors"""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        level: ErrorLevel = ErrorLevel.ERROR,
        details: ErrorDetails | dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.level = level

        if isinstance(details, dict):
            fields = dict(details)
            self.details = ErrorDetails(
                source=fields.pop("source", "unknown"),
                operation=fields.pop("operation", "unknown"),
                **fields,
            )
        else:
            self.details = details or ErrorDetails(source="unknown", operation="unknown")

        super().__init__(message)

    def log_fields(self) -> dict[str, Any]:
        """Flat key/value view for structured log events"""
        return {
            "error_code": self.code.value,
            "error_level": self.level.value,
            **{f"details.{key}": value for key, value in self.details.model_dump(mode="json").items()},
        }
