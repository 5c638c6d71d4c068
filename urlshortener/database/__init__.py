"""Database layer for URL shortener."""

from .base import MappingStoreBase
from .postgres import MappingStorePostgres
from .models import URLMapping

__all__ = ["MappingStoreBase", "MappingStorePostgres", "URLMapping"]
