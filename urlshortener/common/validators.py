"""Validation utilities for URL shortener."""

from enum import Enum
from typing import Optional
from urllib.parse import urlsplit


MAX_URL_LENGTH = 2048
SUPPORTED_SCHEMES = ("http", "https")


class InvalidURLReason(Enum):
    """Why a raw string was rejected as a URL."""

    EMPTY_URL = "URL cannot be empty"
    TOO_LONG = f"URL is too long (max {MAX_URL_LENGTH} characters)"
    PARSE_ERROR = "URL could not be parsed"
    EMPTY_SCHEME = "URL must include a scheme (http/https)"
    EMPTY_HOST = "URL must include a host"
    UNSUPPORTED_SCHEME = "only http/https URLs are supported"

    @property
    def message(self) -> str:
        return self.value


def validate_url(url: str) -> Optional[InvalidURLReason]:
    """Validate a URL.

    Checks run in a fixed order and stop at the first failure, so a given
    malformed input always reports the same reason.

    Args:
        url: The URL to validate

    Returns:
        None if the URL is valid, otherwise the first failing reason
    """
    if not url:
        return InvalidURLReason.EMPTY_URL

    if len(url) > MAX_URL_LENGTH:
        return InvalidURLReason.TOO_LONG

    # urlsplit silently strips or keeps these
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in url):
        return InvalidURLReason.PARSE_ERROR

    try:
        result = urlsplit(url)
        # Port parsing is lazy in urllib; force it so bad ports fail here
        result.port
    except ValueError:
        return InvalidURLReason.PARSE_ERROR

    if any(c.isspace() for c in result.netloc):
        return InvalidURLReason.PARSE_ERROR

    if not result.scheme:
        return InvalidURLReason.EMPTY_SCHEME

    if not result.hostname:
        return InvalidURLReason.EMPTY_HOST

    if result.scheme.lower() not in SUPPORTED_SCHEMES:
        return InvalidURLReason.UNSUPPORTED_SCHEME

    return None
