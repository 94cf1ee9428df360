"""Catalog query adapters."""

from search_service.infrastructure.catalog.base import CatalogAdapter
from search_service.infrastructure.catalog.memory import InMemoryCatalog

__all__ = [
    "CatalogAdapter",
    "InMemoryCatalog",
]
