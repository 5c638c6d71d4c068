"""Business logic service for URL shortener."""

from typing import List, Optional

from .common.validators import validate_url
from .database.base import MappingStoreBase
from .database.exceptions import (
    DataStoreError,
    ListQueryError,
    MappingNotFoundError,
    RowIterationError,
    RowScanError,
    UniqueViolationError,
)
from .database.models import URLMapping
from .exceptions import (
    EmptyCodeError,
    GenerationFailedError,
    InvalidURLError,
    NotFoundError,
    RetriesExhaustedError,
    StorageError,
)
from .shortcode import DEFAULT_LENGTH, GenerationError, ShortCodeGenerator


class URLShortenerService:
    """Service layer for URL shortening business logic.

    The service is stateless between calls and does not log; every failure
    is raised as a ``ShortenerError`` subclass for the action layer to
    render.
    """

    def __init__(
        self,
        store: MappingStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        code_length: int = DEFAULT_LENGTH,
        max_collision_retries: int = 5,
    ):
        """Initialize URL shortener service.

        Args:
            store: Mapping store instance
            short_code_generator: Optional short code generator
            code_length: Length of generated short codes
            max_collision_retries: Insert attempts before giving up on collisions
        """
        if max_collision_retries < 1:
            raise ValueError(f"max_collision_retries must be >= 1 (given: {max_collision_retries})")

        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.code_length = code_length
        self.max_collision_retries = max_collision_retries

    async def add(self, raw_url: str) -> str:
        """Create a new short URL.

        Args:
            raw_url: The original long URL

        Returns:
            The short code that was stored

        Raises:
            InvalidURLError: If the URL fails validation
            GenerationFailedError: If no code could be generated
            StorageError: On a store failure other than a code collision
            RetriesExhaustedError: If every attempt collided
        """
        reason = validate_url(raw_url)
        if reason is not None:
            raise InvalidURLError(reason)

        for _ in range(self.max_collision_retries):
            try:
                code = self.generator.generate(self.code_length)
            except GenerationError as e:
                raise GenerationFailedError() from e

            try:
                await self.store.insert(raw_url, code)
            except UniqueViolationError:
                continue
            except DataStoreError as e:
                raise StorageError(f"failed to add URL: {e}") from e

            return code

        raise RetriesExhaustedError(self.max_collision_retries)

    async def get(self, code: str) -> str:
        """Get the original URL for a short code.

        Raises:
            EmptyCodeError: If code is empty
            NotFoundError: If there is no live mapping
            StorageError: On store failure
        """
        if not code:
            raise EmptyCodeError()

        try:
            return await self.store.lookup_by_code(code)
        except MappingNotFoundError as e:
            raise NotFoundError(code) from e
        except DataStoreError as e:
            raise StorageError(f"failed to retrieve URL: {e}") from e

    async def list(self, limit: int, offset: int) -> List[URLMapping]:
        """List stored mappings, newest first.

        ``limit`` and ``offset`` are expected to be validated already.

        Returns:
            The page of mappings; empty when there are no rows

        Raises:
            StorageError: With ``stage`` set to ``query``, ``scan`` or ``iteration``
        """
        try:
            return await self.store.list_page(limit, offset)
        except ListQueryError as e:
            raise StorageError(
                f"error executing list query (limit={limit}, offset={offset}): {e}",
                stage="query",
            ) from e
        except RowScanError as e:
            raise StorageError(
                f"error scanning rows (limit={limit}, offset={offset}): {e}",
                stage="scan",
            ) from e
        except RowIterationError as e:
            raise StorageError(
                f"row iteration error (limit={limit}, offset={offset}): {e}",
                stage="iteration",
            ) from e
        except DataStoreError as e:
            raise StorageError(f"unknown list error (limit={limit}, offset={offset}): {e}") from e

    async def delete(self, code: str) -> bool:
        """Delete a short URL.

        Returns:
            True once a mapping was removed

        Raises:
            EmptyCodeError: If code is empty
            NotFoundError: If nothing was deleted
            StorageError: On store failure
        """
        if not code:
            raise EmptyCodeError()

        try:
            deleted = await self.store.delete_by_code(code)
        except DataStoreError as e:
            raise StorageError(f"failed to delete short code {code!r}: {e}") from e

        if deleted == 0:
            raise NotFoundError(code)
        return True
