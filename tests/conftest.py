"""Pytest configuration and fixtures."""

import io
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest

from urlshortener.actions import Actions
from urlshortener.common.logging_config import setup_logging
from urlshortener.database.base import MappingStoreBase
from urlshortener.database.exceptions import MappingNotFoundError, UniqueViolationError
from urlshortener.database.models import URLMapping
from urlshortener.service import URLShortenerService
from urlshortener.shortcode import ShortCodeGenerator


class InMemoryStore(MappingStoreBase):
    """Mapping store kept in a list, with hooks to inject failures."""

    def __init__(self):
        super().__init__("memory://")
        self.rows: List[URLMapping] = []
        self.calls: List[tuple] = []
        self.insert_errors: List[Exception] = []
        self.errors: Dict[str, Exception] = {}
        self.closed = False
        self._next_id = 1
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def add_row(self, original_url: str, short_code: str, expires_at: Optional[datetime] = None) -> URLMapping:
        # Each row is one second newer than the previous one
        self._clock += timedelta(seconds=1)
        row = URLMapping(
            id=self._next_id,
            original_url=original_url,
            short_code=short_code,
            created_at=self._clock,
            expires_at=expires_at,
        )
        self._next_id += 1
        self.rows.append(row)
        return row

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.errors:
            raise self.errors[operation]

    async def insert(self, original_url: str, short_code: str) -> None:
        self.calls.append(("insert", original_url, short_code))
        if self.insert_errors:
            raise self.insert_errors.pop(0)
        self._maybe_fail("insert")
        if any(row.short_code == short_code for row in self.rows):
            raise UniqueViolationError(short_code)
        self.add_row(original_url, short_code)

    async def lookup_by_code(self, short_code: str) -> str:
        self.calls.append(("lookup_by_code", short_code))
        self._maybe_fail("lookup_by_code")
        now = datetime.now(timezone.utc)
        for row in self.rows:
            if row.short_code == short_code and (row.expires_at is None or row.expires_at > now):
                return row.original_url
        raise MappingNotFoundError(short_code)

    async def list_page(self, limit: int, offset: int) -> List[URLMapping]:
        self.calls.append(("list_page", limit, offset))
        self._maybe_fail("list_page")
        ordered = sorted(self.rows, key=lambda row: (row.created_at, row.id), reverse=True)
        return ordered[offset:offset + limit]

    async def delete_by_code(self, short_code: str) -> int:
        self.calls.append(("delete_by_code", short_code))
        self._maybe_fail("delete_by_code")
        before = len(self.rows)
        self.rows = [row for row in self.rows if row.short_code != short_code]
        return before - len(self.rows)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True


class FixedCodeGenerator(ShortCodeGenerator):
    """Generator that hands out a predetermined sequence of codes."""

    def __init__(self, codes: List[str]):
        super().__init__()
        self.codes = list(codes)

    def generate(self, length: Optional[int] = None) -> str:
        return self.codes.pop(0)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store():
    """Create empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator()


@pytest.fixture
def service(store, short_code_generator):
    """Create service instance."""
    return URLShortenerService(store=store, short_code_generator=short_code_generator)


@pytest.fixture
def out():
    """Capture JSON records written by actions."""
    return io.StringIO()


@pytest.fixture
def actions(service, out, logger):
    """Create actions writing to an in-memory buffer."""
    return Actions(service=service, out=out, list_max_limit=20, logger=logger)


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
