"""Abstract base class for mapping store implementations."""

from abc import ABC, abstractmethod
from typing import List

from .models import URLMapping


class MappingStoreBase(ABC):
    """Narrow persistence interface the shortener service depends on.

    Implementations translate their driver errors into the exceptions in
    ``urlshortener.database.exceptions``. ``asyncio.TimeoutError`` and
    ``asyncio.CancelledError`` must propagate untouched so deadline handling
    stays with the caller.
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def insert(self, original_url: str, short_code: str) -> None:
        """Persist a new mapping.

        Args:
            original_url: The validated original URL
            short_code: The candidate short code

        Raises:
            UniqueViolationError: If the short code is already taken
            DataStoreError: On any other failure
        """
        pass

    @abstractmethod
    async def lookup_by_code(self, short_code: str) -> str:
        """Get the original URL for a live (non-expired) short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The original URL

        Raises:
            MappingNotFoundError: If no live mapping exists
            DataStoreError: On any other failure
        """
        pass

    @abstractmethod
    async def list_page(self, limit: int, offset: int) -> List[URLMapping]:
        """List mappings, newest first.

        Rows are ordered by ``created_at`` descending with insertion order
        breaking ties.

        Args:
            limit: Maximum number of rows (positive)
            offset: Number of rows to skip (non-negative)

        Returns:
            List of mappings, empty if nothing matches

        Raises:
            ListQueryError: If the query cannot be executed
            RowIterationError: If fetching rows fails part way
            RowScanError: If a row cannot be converted
        """
        pass

    @abstractmethod
    async def delete_by_code(self, short_code: str) -> int:
        """Delete the mapping for a short code.

        Args:
            short_code: The short code to delete

        Returns:
            Number of rows deleted

        Raises:
            DataStoreError: On failure
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if database is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close database connections."""
        pass
