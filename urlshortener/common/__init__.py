"""Common utilities for URL shortener."""

from .validators import InvalidURLReason, validate_url, MAX_URL_LENGTH
from .logging_config import setup_logging, get_logger

__all__ = [
    "InvalidURLReason",
    "validate_url",
    "MAX_URL_LENGTH",
    "setup_logging",
    "get_logger",
]
