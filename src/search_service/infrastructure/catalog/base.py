"""Catalog query contract consumed by the search engine."""

from typing import Protocol, Sequence

from search_service.infrastructure.catalog.filters import Filter, SortKey
from search_service.schemas import Product


class CatalogAdapter(Protocol):
    """Read-only access to the product catalog.

    Implementations raise ``CatalogError`` (or let their driver errors
    escape) when the store cannot answer; callers decide whether that is
    fatal.
    """

    async def query_products(
        self,
        filters: Filter,
        sort: Sequence[SortKey] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[list[Product], int]:
        """Return one page of matching products and the total match count."""
        ...

    async def count_products(self, filters: Filter) -> int:
        """Return the number of products matching ``filters``."""
        ...
