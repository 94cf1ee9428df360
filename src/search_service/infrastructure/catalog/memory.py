"""In-memory catalog for development, fixtures and tests."""

from typing import Iterable, Sequence

from search_service.infrastructure.catalog.filters import Filter, SortKey
from search_service.schemas import Product


class InMemoryCatalog:
    """Catalog adapter over a list of products.

    Sorting is stable, so products that tie on every sort key keep their
    insertion order.
    """

    def __init__(self, products: Iterable[Product] = ()):
        self._products: list[Product] = list(products)
        self.query_count = 0

    def add(self, product: Product) -> None:
        self._products.append(product)

    async def query_products(
        self,
        filters: Filter,
        sort: Sequence[SortKey] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[list[Product], int]:
        self.query_count += 1
        matched = [p for p in self._products if filters.matches(p)]
        # Apply keys least-significant first; each pass is stable.
        for key in reversed(sort):
            matched.sort(key=lambda p: getattr(p, key.field), reverse=key.descending)
        total = len(matched)
        end = None if limit is None else offset + limit
        return matched[offset:end], total

    async def count_products(self, filters: Filter) -> int:
        self.query_count += 1
        return sum(1 for p in self._products if filters.matches(p))
