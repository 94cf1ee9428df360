"""Recommendation generation from search history, category similarity and trends."""

import asyncio
from typing import Awaitable, Sequence

import structlog

from search_service.infrastructure.catalog.base import CatalogAdapter
from search_service.infrastructure.catalog.filters import (
    ACTIVE_ONLY,
    Contains,
    Equals,
    NotEquals,
    all_of,
    any_of,
    desc,
)
from search_service.infrastructure.redis import CacheService
from search_service.schemas import Product, RankedProduct
from search_service.services.signal_store import SignalStore
from shared.constants import (
    REASON_SEARCH_HISTORY,
    REASON_SIMILAR_TO,
    REASON_TRENDING,
    RECENT_HISTORY_WINDOW,
    RECOMMENDATION_LIMIT,
    RECOMMENDATION_SOURCE_LIMIT,
)

logger = structlog.get_logger()

BY_RATING = (desc("average_rating"),)
BY_POPULARITY = (desc("sales_count"), desc("view_count"))


class RecommendationGenerator:
    """Best-effort recommendations for a user and the page they are viewing.

    Three sources are fetched concurrently and merged in priority order:
    history-based, content-based, then trending. A failing source is logged
    and skipped; the call itself never raises for catalog errors.
    """

    def __init__(
        self,
        catalog: CatalogAdapter,
        signal_store: SignalStore,
        cache: CacheService | None = None,
        limit: int = RECOMMENDATION_LIMIT,
        source_limit: int = RECOMMENDATION_SOURCE_LIMIT,
        history_window: int = RECENT_HISTORY_WINDOW,
        trending_cache_ttl: int = 0,
    ):
        self.catalog = catalog
        self.signal_store = signal_store
        self.cache = cache or CacheService(None)
        self.limit = limit
        self.source_limit = source_limit
        self.history_window = history_window
        self.trending_cache_ttl = trending_cache_ttl

    async def recommend(
        self,
        query: str,
        user_id: str | None,
        current_products: Sequence[Product] = (),
    ) -> list[RankedProduct]:
        """
        Build a deduplicated recommendation list.

        Args:
            query: The search query that triggered the request (may be empty)
            user_id: Optional user ID for history-based recommendations
            current_products: Products on the page being viewed; the first
                one seeds category similarity

        Returns:
            At most ``limit`` products, each tagged with a ``reason``
        """
        recent = self.signal_store.recent_searches(user_id, self.history_window)
        sources: dict[str, Awaitable[list[RankedProduct]]] = {
            "history": self._history_based(recent),
            "content": self._content_based(current_products),
            "trending": self._trending(),
        }
        results = await asyncio.gather(*sources.values(), return_exceptions=True)

        collected: list[RankedProduct] = []
        for source, result in zip(sources, results):
            if isinstance(result, Exception):
                logger.warning(
                    "Recommendation source failed",
                    source=source,
                    user_id=user_id,
                    query=query,
                    error=str(result),
                )
                continue
            if isinstance(result, BaseException):
                raise result
            collected.extend(result)

        recommendations = self._deduplicate(collected)[: self.limit]
        logger.debug(
            "Generated recommendations",
            user_id=user_id,
            query=query,
            count=len(recommendations),
        )
        return recommendations

    # ==========================================================================
    # Sources
    # ==========================================================================

    async def _history_based(self, recent_searches: list[str]) -> list[RankedProduct]:
        if not recent_searches:
            return []
        filters = all_of(
            ACTIVE_ONLY,
            any_of(Contains("name", term) for term in recent_searches),
        )
        products, _ = await self.catalog.query_products(filters, BY_RATING, self.source_limit)
        return [RankedProduct.from_product(p, reason=REASON_SEARCH_HISTORY) for p in products]

    async def _content_based(self, current_products: Sequence[Product]) -> list[RankedProduct]:
        if not current_products:
            return []
        source = current_products[0]
        if not source.category:
            return []
        filters = all_of(
            ACTIVE_ONLY,
            Equals("category", source.category),
            NotEquals("id", source.id),
        )
        products, _ = await self.catalog.query_products(filters, BY_RATING, self.source_limit)
        reason = REASON_SIMILAR_TO.format(name=source.name)
        return [RankedProduct.from_product(p, reason=reason) for p in products]

    async def _trending(self) -> list[RankedProduct]:
        key = self.cache.key("trending_products", self.source_limit)
        cached = await self.cache.get(key)
        if cached is not None:
            products = [Product.model_validate(p) for p in cached]
        else:
            products, _ = await self.catalog.query_products(
                all_of(ACTIVE_ONLY), BY_POPULARITY, self.source_limit
            )
            await self.cache.set(
                key,
                [p.model_dump(mode="json") for p in products],
                ttl_seconds=self.trending_cache_ttl,
            )
        return [RankedProduct.from_product(p, reason=REASON_TRENDING) for p in products]

    @staticmethod
    def _deduplicate(products: list[RankedProduct]) -> list[RankedProduct]:
        seen: set[str] = set()
        unique = []
        for product in products:
            if product.id in seen:
                continue
            seen.add(product.id)
            unique.append(product)
        return unique
