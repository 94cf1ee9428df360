"""Search orchestration: enhance, filter, fetch, score and enrich."""

import math

import structlog

from search_service.exceptions import SearchFailedError
from search_service.infrastructure.catalog.base import CatalogAdapter
from search_service.infrastructure.catalog.filters import (
    ACTIVE_ONLY,
    Between,
    Contains,
    Equals,
    Filter,
    GreaterThan,
    InSet,
    Overlaps,
    SortKey,
    all_of,
    any_of,
    asc,
    desc,
)
from search_service.schemas import (
    AppliedFilter,
    InteractionType,
    Pagination,
    RankedProduct,
    SearchMetadata,
    SearchOptions,
    SearchResponse,
    SortMode,
    Suggestion,
    TrendingSearch,
)
from search_service.services.autocomplete import AutocompleteService
from search_service.services.facets import FacetSummarizer
from search_service.services.query_enhancer import QueryEnhancer
from search_service.services.recommendation import RecommendationGenerator
from search_service.services.relevance import RelevanceScorer
from search_service.services.signal_store import SignalStore
from shared.constants import (
    DEFAULT_AUTOCOMPLETE_LIMIT,
    DEFAULT_MAX_PRICE,
    DEFAULT_MIN_PRICE,
    RECOMMENDATION_LIMIT,
    TRENDING_SEARCHES_LIMIT,
)

logger = structlog.get_logger()

# Fields searched by free-text terms
TEXT_FIELDS = ("name", "description", "short_description", "category", "subcategory", "brand")

SORT_ORDERS: dict[SortMode, tuple[SortKey, ...]] = {
    SortMode.PRICE_ASC: (asc("price"),),
    SortMode.PRICE_DESC: (desc("price"),),
    SortMode.NEWEST: (desc("created_at"),),
    SortMode.RATING: (desc("average_rating"), desc("total_reviews")),
    SortMode.POPULAR: (desc("sales_count"), desc("view_count")),
    SortMode.RELEVANCE: (
        desc("is_featured"),
        desc("average_rating"),
        desc("sales_count"),
        desc("created_at"),
    ),
}


def build_filters(options: SearchOptions, terms: list[str]) -> Filter:
    """Combine the free-text OR clause with the structured filters."""
    clauses: list[Filter] = [ACTIVE_ONLY]

    if terms:
        clauses.append(any_of(Contains(field, term) for term in terms for field in TEXT_FIELDS))

    if options.category:
        clauses.append(Equals("category", options.category))
    if options.subcategory:
        clauses.append(Equals("subcategory", options.subcategory))

    clauses.append(Between("price", options.min_price, options.max_price))

    if options.colors:
        clauses.append(Overlaps("colors", tuple(options.colors)))
    if options.sizes:
        clauses.append(Overlaps("sizes", tuple(options.sizes)))
    if options.materials:
        clauses.append(Overlaps("materials", tuple(options.materials)))
    if options.brands:
        clauses.append(InSet("brand", tuple(options.brands)))
    if options.tags:
        clauses.append(Overlaps("tags", tuple(options.tags)))

    if options.gender:
        clauses.append(Equals("gender", options.gender))
    if options.age_group:
        clauses.append(Equals("age_group", options.age_group))
    if options.in_stock:
        clauses.append(GreaterThan("stock_quantity", 0))
    if options.is_new:
        clauses.append(Equals("is_new", True))
    if options.is_sale:
        clauses.append(Equals("is_sale", True))
    if options.is_featured:
        clauses.append(Equals("is_featured", True))

    return all_of(*clauses)


def applied_filters(options: SearchOptions) -> list[AppliedFilter]:
    """Human-readable summary of the structured filters in effect."""
    filters: list[AppliedFilter] = []

    if options.category:
        filters.append(AppliedFilter(type="category", value=options.category))
    if options.subcategory:
        filters.append(AppliedFilter(type="subcategory", value=options.subcategory))
    if options.min_price > DEFAULT_MIN_PRICE or options.max_price < DEFAULT_MAX_PRICE:
        filters.append(AppliedFilter(type="price", value=f"{options.min_price} - {options.max_price}"))
    if options.colors:
        filters.append(AppliedFilter(type="colors", value=options.colors))
    if options.sizes:
        filters.append(AppliedFilter(type="sizes", value=options.sizes))
    if options.materials:
        filters.append(AppliedFilter(type="materials", value=options.materials))
    if options.brands:
        filters.append(AppliedFilter(type="brands", value=options.brands))
    if options.tags:
        filters.append(AppliedFilter(type="tags", value=options.tags))
    if options.gender:
        filters.append(AppliedFilter(type="gender", value=options.gender))
    if options.age_group:
        filters.append(AppliedFilter(type="ageGroup", value=options.age_group))
    if options.in_stock:
        filters.append(AppliedFilter(type="availability", value="In Stock"))
    if options.is_new:
        filters.append(AppliedFilter(type="condition", value="New"))
    if options.is_sale:
        filters.append(AppliedFilter(type="promotion", value="On Sale"))
    if options.is_featured:
        filters.append(AppliedFilter(type="featured", value="Featured"))

    return filters


class SearchService:
    """Entry point for search, autocomplete, trending, tracking and recommendations."""

    def __init__(
        self,
        catalog: CatalogAdapter,
        signal_store: SignalStore,
        enhancer: QueryEnhancer | None = None,
        scorer: RelevanceScorer | None = None,
        recommender: RecommendationGenerator | None = None,
        autocompleter: AutocompleteService | None = None,
        facets: FacetSummarizer | None = None,
        trending_limit: int = TRENDING_SEARCHES_LIMIT,
    ):
        self.catalog = catalog
        self.signal_store = signal_store
        self.enhancer = enhancer or QueryEnhancer()
        self.scorer = scorer or RelevanceScorer(signal_store)
        self.recommender = recommender or RecommendationGenerator(catalog, signal_store)
        self.autocompleter = autocompleter or AutocompleteService(catalog, signal_store)
        self.facets = facets or FacetSummarizer()
        self.trending_limit = trending_limit

    async def search(self, options: SearchOptions) -> SearchResponse:
        """
        Run a search request.

        Args:
            options: Validated search input

        Returns:
            Ranked page of products with pagination and enrichment metadata

        Raises:
            SearchFailedError: If the catalog could not be queried
        """
        enhanced = self.enhancer.enhance(options.query)
        terms = enhanced.terms
        if enhanced.original:
            self._track_search(options.query, options.user_id)

        filters = build_filters(options, terms)
        order = SORT_ORDERS[options.sort_by]

        try:
            products, total = await self.catalog.query_products(
                filters, order, options.limit, options.offset
            )
        except Exception as e:
            logger.error(
                "Search failed",
                query=options.query,
                user_id=options.user_id,
                error=str(e),
            )
            raise SearchFailedError() from e

        if terms:
            results = self.scorer.score(products, terms, options.user_id)
        else:
            results = [RankedProduct.from_product(p) for p in products]

        recommendations = await self.recommender.recommend(options.query, options.user_id, products)

        logger.info(
            "Search completed",
            query=enhanced.original,
            terms=len(terms),
            total=total,
            page=options.page,
            sort_by=options.sort_by.value,
        )

        return SearchResponse(
            success=True,
            data=results,
            pagination=Pagination(
                page=options.page,
                limit=options.limit,
                total=total,
                pages=math.ceil(total / options.limit),
            ),
            metadata=SearchMetadata(
                search_terms=terms,
                applied_filters=applied_filters(options),
                recommendations=recommendations,
                trending_searches=self.signal_store.trending_searches(self.trending_limit),
                suggested_filters=self.facets.suggest_facets(products),
            ),
        )

    async def autocomplete(
        self, query: str | None, limit: int = DEFAULT_AUTOCOMPLETE_LIMIT
    ) -> list[Suggestion]:
        """Suggestions for a partial query; degrades to an empty list on failure."""
        try:
            return await self.autocompleter.suggest(query, limit)
        except Exception as e:
            logger.warning("Autocomplete failed", query=query, error=str(e))
            return []

    def trending(self, limit: int = TRENDING_SEARCHES_LIMIT) -> list[TrendingSearch]:
        return self.signal_store.trending_searches(limit)

    def track_interaction(
        self,
        user_id: str | None,
        product_id: str,
        interaction_type: InteractionType | str = InteractionType.VIEW,
    ) -> None:
        """Record a product interaction. Failures are logged, never raised."""
        try:
            self.signal_store.track_interaction(user_id, product_id, interaction_type)
        except Exception as e:
            logger.warning(
                "Interaction tracking failed",
                user_id=user_id,
                product_id=product_id,
                interaction_type=str(interaction_type),
                error=str(e),
            )

    async def recommend(
        self, query: str, user_id: str | None, limit: int = RECOMMENDATION_LIMIT
    ) -> list[RankedProduct]:
        """Standalone recommendations, independent of a live result page."""
        try:
            recommendations = await self.recommender.recommend(query, user_id, [])
        except Exception as e:
            logger.warning("Recommendations failed", user_id=user_id, error=str(e))
            return []
        return recommendations[: max(0, limit)]

    def _track_search(self, query: str, user_id: str | None) -> None:
        try:
            self.signal_store.track_search(query, user_id)
        except Exception as e:
            logger.warning("Search tracking failed", query=query, user_id=user_id, error=str(e))
