"""Data models for URL shortener."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class URLMapping:
    """Represents a URL mapping in the database."""

    id: int
    original_url: str
    short_code: str
    created_at: datetime
    expires_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "URLMapping":
        """Create from a database record.

        Raises:
            KeyError: If a required column is missing
            TypeError: If a column has the wrong type
        """
        created_at = record["created_at"]
        if not isinstance(created_at, datetime):
            raise TypeError(f"created_at must be a datetime (got {type(created_at).__name__})")

        original_url = record["original_url"]
        short_code = record["short_code"]
        if not isinstance(original_url, str) or not isinstance(short_code, str):
            raise TypeError("original_url and short_code must be strings")

        return cls(
            id=int(record["id"]),
            original_url=original_url,
            short_code=short_code,
            created_at=created_at,
            expires_at=record["expires_at"],
        )
