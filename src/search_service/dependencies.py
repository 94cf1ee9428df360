"""Process-wide service wiring for FastAPI dependencies."""

from functools import lru_cache

from search_service.config import Settings, get_settings
from search_service.infrastructure.catalog.base import CatalogAdapter
from search_service.infrastructure.catalog.sql import SqlCatalog
from search_service.infrastructure.database.connection import get_session_factory
from search_service.infrastructure.redis import CacheService, get_redis_client
from search_service.services import (
    AutocompleteService,
    FacetSummarizer,
    QueryEnhancer,
    RecommendationGenerator,
    RelevanceScorer,
    SearchService,
    SignalStore,
)


@lru_cache
def get_signal_store() -> SignalStore:
    """Signal store shared by every request in this process."""
    settings = get_settings()
    return SignalStore(
        history_limit=settings.search_history_limit,
        max_tracked_users=settings.max_tracked_users,
        max_interaction_records=settings.max_interaction_records,
    )


@lru_cache
def get_query_enhancer() -> QueryEnhancer:
    settings = get_settings()
    if settings.query_dictionary_path:
        return QueryEnhancer.from_file(settings.query_dictionary_path)
    return QueryEnhancer()


def build_search_service(
    settings: Settings,
    catalog: CatalogAdapter,
    signal_store: SignalStore,
    cache: CacheService,
    enhancer: QueryEnhancer | None = None,
) -> SearchService:
    """Assemble the orchestrator and its collaborators from settings."""
    return SearchService(
        catalog=catalog,
        signal_store=signal_store,
        enhancer=enhancer or QueryEnhancer(),
        scorer=RelevanceScorer(signal_store),
        recommender=RecommendationGenerator(
            catalog,
            signal_store,
            cache=cache,
            limit=settings.recommendation_limit,
            source_limit=settings.recommendation_source_limit,
            history_window=settings.recent_history_window,
            trending_cache_ttl=settings.trending_products_cache_ttl_seconds,
        ),
        autocompleter=AutocompleteService(
            catalog,
            signal_store,
            cache=cache,
            min_length=settings.autocomplete_min_length,
            popular_pool=settings.popular_suggestion_pool,
            popular_limit=settings.popular_suggestion_limit,
            cache_ttl=settings.autocomplete_cache_ttl_seconds,
        ),
        facets=FacetSummarizer(),
        trending_limit=settings.trending_searches_limit,
    )


async def get_search_service() -> SearchService:
    """Dependency for FastAPI to get the search service."""
    settings = get_settings()
    cache = CacheService(await get_redis_client())
    return build_search_service(
        settings,
        SqlCatalog(get_session_factory()),
        get_signal_store(),
        cache,
        enhancer=get_query_enhancer(),
    )
