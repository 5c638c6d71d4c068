"""Action layer: runs one service call and writes exactly one JSON record.

Each action enforces a deadline on the whole call, renders success or
failure as a single compact JSON object on ``out``, and re-raises failures
as ``ShortenerError`` so the caller can pick an exit status.
"""

import asyncio
import logging
import sys
from typing import Awaitable, Callable, Optional, Sequence, TextIO, TypeVar

from pydantic import BaseModel

from .exceptions import (
    ActionTimeoutError,
    ErrorKind,
    InvalidArgumentsError,
    InvalidLimitError,
    InvalidOffsetError,
    ShortenerError,
    StorageError,
)
from .schemas import DeleteResponse, ErrorResponse, ListResponse, ResultResponse
from .service import URLShortenerService


DEFAULT_LIST_MAX_LIMIT = 500
DEFAULT_TIMEOUT_SECONDS = 5.0

# Summary used for storage failures, per action
FAILURE_SUMMARIES = {
    "add": "failed to add URL",
    "get": "failed to retrieve original URL",
    "list": "failed to list URLs",
    "delete": "failed to delete URL",
}

T = TypeVar("T", bound=BaseModel)


class Actions:
    """Uniform request/response wrapper around ``URLShortenerService``."""

    def __init__(
        self,
        service: URLShortenerService,
        out: Optional[TextIO] = None,
        list_max_limit: int = DEFAULT_LIST_MAX_LIMIT,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize actions.

        Args:
            service: Shortener service to call
            out: Sink for JSON records (defaults to stdout at write time)
            list_max_limit: Largest page size list accepts
            timeout_seconds: Deadline for each whole action
            logger: Optional logger
        """
        if list_max_limit < 1:
            raise ValueError(f"list_max_limit must be >= 1 (given: {list_max_limit})")

        self.service = service
        self.out = out
        self.list_max_limit = list_max_limit
        self.timeout_seconds = timeout_seconds
        self.logger = logger or logging.getLogger(__name__)

    async def add_action(self, args: Sequence[str]) -> ResultResponse:
        """Shorten ``args[0]``."""

        async def run() -> ResultResponse:
            raw_url = self._first_arg(args)
            code = await self.service.add(raw_url)
            return ResultResponse(short_code=code, raw_url=raw_url)

        return await self._execute("add", run)

    async def get_action(self, args: Sequence[str]) -> ResultResponse:
        """Resolve the short code ``args[0]``."""

        async def run() -> ResultResponse:
            code = self._first_arg(args)
            raw_url = await self.service.get(code)
            return ResultResponse(short_code=code, raw_url=raw_url)

        return await self._execute("get", run)

    async def list_action(self, limit: int, offset: int) -> ListResponse:
        """List one page of mappings.

        Bounds are checked before the service (and so the store) is called.
        """

        async def run() -> ListResponse:
            if limit < 1 or limit > self.list_max_limit:
                raise InvalidLimitError(limit, self.list_max_limit)
            if offset < 0:
                raise InvalidOffsetError(offset)

            mappings = await self.service.list(limit, offset)
            items = [ResultResponse(short_code=m.short_code, raw_url=m.original_url) for m in mappings]
            return ListResponse(items=items, count=len(items), limit=limit, offset=offset)

        return await self._execute("list", run)

    async def delete_action(self, args: Sequence[str]) -> DeleteResponse:
        """Delete the mapping for ``args[0]``."""

        async def run() -> DeleteResponse:
            code = self._first_arg(args)
            deleted = await self.service.delete(code)
            return DeleteResponse(deleted=deleted, short_code=code)

        return await self._execute("delete", run)

    async def _execute(self, action: str, run: Callable[[], Awaitable[T]]) -> T:
        try:
            result = await asyncio.wait_for(run(), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            error = ActionTimeoutError(action, self.timeout_seconds)
            self._write_error(action, error)
            raise error from e
        except ShortenerError as e:
            self._write_error(action, e)
            raise
        except Exception as e:
            self.logger.exception(f"Unexpected error during {action}")
            error = StorageError(f"unexpected error: {e}")
            self._write_error(action, error)
            raise error from e

        self._write(result)
        return result

    def _write_error(self, action: str, error: ShortenerError) -> None:
        self.logger.warning(f"{action} failed ({error.kind.value}): {error}")
        self._write(render_error(action, error))

    def _write(self, record: BaseModel) -> None:
        out = self.out or sys.stdout
        out.write(record.model_dump_json(by_alias=True, exclude_none=True) + "\n")
        out.flush()

    @staticmethod
    def _first_arg(args: Sequence[str]) -> str:
        if not args:
            raise InvalidArgumentsError(received=len(args))
        return args[0]


def render_error(action: str, error: ShortenerError) -> ErrorResponse:
    """Build the error record for ``error`` raised while running ``action``.

    Args:
        action: Action name (add, get, list, delete)
        error: The classified failure

    Returns:
        The error record to write
    """
    kind = error.kind
    message = str(error)

    if kind in (ErrorKind.INVALID_ARGUMENTS, ErrorKind.EMPTY_CODE):
        return ErrorResponse(error=message)
    if kind is ErrorKind.INVALID_URL:
        return ErrorResponse(error="invalid URL format", details=error.reason.message)
    if kind in (ErrorKind.GENERATION_FAILED, ErrorKind.RETRIES_EXHAUSTED):
        return ErrorResponse(error=FAILURE_SUMMARIES["add"], details=message)
    if kind is ErrorKind.NOT_FOUND:
        return ErrorResponse(error=f"not found: {error.code}", details=message)
    if kind is ErrorKind.INVALID_LIMIT:
        return ErrorResponse(error="invalid limit", details=message)
    if kind is ErrorKind.INVALID_OFFSET:
        return ErrorResponse(error="invalid offset", details=message)
    if kind is ErrorKind.TIMEOUT:
        return ErrorResponse(error="operation timed out", details=message)
    if kind is ErrorKind.STORAGE_ERROR:
        return ErrorResponse(error=FAILURE_SUMMARIES.get(action, "unexpected error"), details=message)

    raise ValueError(f"Unhandled error kind: {kind}")
