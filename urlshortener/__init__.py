"""Core business logic for URL shortener."""

__version__ = "0.1.0"

from .shortcode import ShortCodeGenerator
from .service import URLShortenerService
from .actions import Actions

__all__ = ["ShortCodeGenerator", "URLShortenerService", "Actions", "__version__"]
