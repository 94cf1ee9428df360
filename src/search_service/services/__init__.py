"""Business logic services."""

from search_service.services.autocomplete import AutocompleteService
from search_service.services.facets import FacetSummarizer
from search_service.services.query_enhancer import EnhancedQuery, QueryEnhancer
from search_service.services.recommendation import RecommendationGenerator
from search_service.services.relevance import RelevanceScorer
from search_service.services.search import SearchService
from search_service.services.signal_store import InteractionRecord, SignalStore

__all__ = [
    "AutocompleteService",
    "EnhancedQuery",
    "FacetSummarizer",
    "InteractionRecord",
    "QueryEnhancer",
    "RecommendationGenerator",
    "RelevanceScorer",
    "SearchService",
    "SignalStore",
]
