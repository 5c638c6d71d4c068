"""Error taxonomy for the URL shortener.

Every failure a caller can observe is a ``ShortenerError`` subclass carrying
an ``ErrorKind``. The action layer renders errors by kind, so adding a kind
means adding a rendering rule in ``urlshortener.actions``.
"""

from enum import Enum
from typing import Optional

from .common.validators import InvalidURLReason


class ErrorKind(str, Enum):
    """Closed set of caller-visible failure classifications."""

    INVALID_ARGUMENTS = "InvalidArguments"
    INVALID_URL = "InvalidURL"
    GENERATION_FAILED = "GenerationFailed"
    RETRIES_EXHAUSTED = "RetriesExhausted"
    EMPTY_CODE = "EmptyCode"
    NOT_FOUND = "NotFound"
    INVALID_LIMIT = "InvalidLimit"
    INVALID_OFFSET = "InvalidOffset"
    TIMEOUT = "Timeout"
    STORAGE_ERROR = "StorageError"


class ShortenerError(Exception):
    """Base class for all caller-visible URL shortener errors."""

    kind: ErrorKind = ErrorKind.STORAGE_ERROR


class InvalidArgumentsError(ShortenerError):
    """A required command argument was not supplied."""

    kind = ErrorKind.INVALID_ARGUMENTS

    def __init__(self, received: int = 0, required: int = 1):
        self.received = received
        self.required = required
        super().__init__(f"requires at least {required} arg(s), only received {received}")


class InvalidURLError(ShortenerError):
    """The URL failed validation."""

    kind = ErrorKind.INVALID_URL

    def __init__(self, reason: InvalidURLReason):
        self.reason = reason
        super().__init__(f"invalid URL: {reason.message}")


class GenerationFailedError(ShortenerError):
    """The random source could not produce a short code."""

    kind = ErrorKind.GENERATION_FAILED

    def __init__(self, message: str = "error generating short code"):
        super().__init__(message)


class RetriesExhaustedError(ShortenerError):
    """Every attempt to insert a fresh code hit an existing one."""

    kind = ErrorKind.RETRIES_EXHAUSTED

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"exhausted retries: no unique short code after {attempts} attempt(s)")


class EmptyCodeError(ShortenerError):
    """A lookup or delete was attempted with an empty short code."""

    kind = ErrorKind.EMPTY_CODE

    def __init__(self):
        super().__init__("short code cannot be empty")


class NotFoundError(ShortenerError):
    """No live mapping exists for the short code."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"short URL not found: {code}")


class InvalidLimitError(ShortenerError):
    """List limit outside ``1..max_limit``."""

    kind = ErrorKind.INVALID_LIMIT

    def __init__(self, limit: int, max_limit: int):
        self.limit = limit
        self.max_limit = max_limit
        super().__init__(f"limit must be between 1 and {max_limit}; got {limit}")


class InvalidOffsetError(ShortenerError):
    """Negative list offset."""

    kind = ErrorKind.INVALID_OFFSET

    def __init__(self, offset: int):
        self.offset = offset
        super().__init__(f"offset must be >= 0; got {offset}")


class ActionTimeoutError(ShortenerError):
    """The bounded execution window elapsed before the call finished."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, action: str, timeout_seconds: float):
        self.action = action
        self.timeout_seconds = timeout_seconds
        super().__init__(f"{action} did not complete within {timeout_seconds:g}s")


class StorageError(ShortenerError):
    """Any other failure from the mapping store.

    ``stage`` narrows list failures down to ``"query"``, ``"scan"`` or
    ``"iteration"``; it is ``None`` for the other operations.
    """

    kind = ErrorKind.STORAGE_ERROR

    def __init__(self, message: str, stage: Optional[str] = None):
        self.stage = stage
        super().__init__(message)
