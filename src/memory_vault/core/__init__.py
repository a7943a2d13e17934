from .base import ApplicationError, ErrorCode, ErrorLevel
from .errors import (
    ConflictError,
    InvalidArgumentError,
    InvalidStateError,
    IntegrityError,
    NotFoundError,
)
