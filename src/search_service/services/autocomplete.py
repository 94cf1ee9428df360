"""Autocomplete suggestions merging catalog matches with popular queries."""

import structlog

from search_service.infrastructure.catalog.base import CatalogAdapter
from search_service.infrastructure.catalog.filters import (
    ACTIVE_ONLY,
    Contains,
    Overlaps,
    all_of,
    any_of,
    desc,
)
from search_service.infrastructure.redis import CacheService
from search_service.schemas import Suggestion
from search_service.services.signal_store import SignalStore
from shared.constants import (
    AUTOCOMPLETE_MIN_LENGTH,
    DEFAULT_AUTOCOMPLETE_LIMIT,
    POPULAR_SUGGESTION_LIMIT,
    POPULAR_SUGGESTION_POOL,
)

logger = structlog.get_logger()


class AutocompleteService:
    """Typeahead suggestions: popular queries first, then best-selling products."""

    def __init__(
        self,
        catalog: CatalogAdapter,
        signal_store: SignalStore,
        cache: CacheService | None = None,
        min_length: int = AUTOCOMPLETE_MIN_LENGTH,
        popular_pool: int = POPULAR_SUGGESTION_POOL,
        popular_limit: int = POPULAR_SUGGESTION_LIMIT,
        cache_ttl: int = 0,
    ):
        self.catalog = catalog
        self.signal_store = signal_store
        self.cache = cache or CacheService(None)
        self.min_length = min_length
        self.popular_pool = popular_pool
        self.popular_limit = popular_limit
        self.cache_ttl = cache_ttl

    async def suggest(self, query: str | None, limit: int = DEFAULT_AUTOCOMPLETE_LIMIT) -> list[Suggestion]:
        """Return up to ``limit`` suggestions; short queries return nothing."""
        query = (query or "").strip()
        if len(query) < self.min_length or limit <= 0:
            return []

        products = await self._product_suggestions(query, limit)
        popular = self._popular_suggestions(query)
        return (popular + products)[:limit]

    async def _product_suggestions(self, query: str, limit: int) -> list[Suggestion]:
        key = self.cache.key("autocomplete", query.lower(), limit)
        cached = await self.cache.get(key)
        if cached is not None:
            return [Suggestion.model_validate(s) for s in cached]

        filters = all_of(
            ACTIVE_ONLY,
            any_of([
                Contains("name", query),
                Contains("category", query),
                Overlaps("tags", (query,)),
            ]),
        )
        products, _ = await self.catalog.query_products(filters, (desc("sales_count"),), limit)
        suggestions = [
            Suggestion(
                type="product",
                text=p.name,
                category=p.category,
                image=p.main_image,
                price=p.price,
            )
            for p in products
        ]
        await self.cache.set(
            key, [s.model_dump(mode="json") for s in suggestions], ttl_seconds=self.cache_ttl
        )
        return suggestions

    def _popular_suggestions(self, query: str) -> list[Suggestion]:
        needle = query.lower()
        matches = [
            s for s in self.signal_store.trending_searches(self.popular_pool)
            if needle in s.query.lower()
        ]
        return [
            Suggestion(type="popular", text=s.query, count=s.count)
            for s in matches[: self.popular_limit]
        ]
