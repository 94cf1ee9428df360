"""Shared constants across the application."""

# Pagination
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Price bounds applied when the caller does not narrow them
DEFAULT_MIN_PRICE = 0
DEFAULT_MAX_PRICE = 10_000_000

# Signal store limits
SEARCH_HISTORY_LIMIT = 50
MAX_TRACKED_USERS = 10_000
MAX_INTERACTION_RECORDS = 100_000

# Recommendation limits
RECOMMENDATION_LIMIT = 10
MAX_RECOMMENDATION_LIMIT = 50
RECOMMENDATION_SOURCE_LIMIT = 5
RECENT_HISTORY_WINDOW = 5

# Trending / autocomplete
TRENDING_SEARCHES_LIMIT = 10
MAX_TRENDING_SEARCHES_LIMIT = 100
AUTOCOMPLETE_MIN_LENGTH = 2
DEFAULT_AUTOCOMPLETE_LIMIT = 10
MAX_AUTOCOMPLETE_LIMIT = 50
POPULAR_SUGGESTION_POOL = 20
POPULAR_SUGGESTION_LIMIT = 3

# Facets
PRICE_BUCKET_COUNT = 4

# Recommendation reasons
REASON_SEARCH_HISTORY = "Based on your search history"
REASON_SIMILAR_TO = "Similar to {name}"
REASON_TRENDING = "Trending now"

# Canonical term -> known misspellings
DEFAULT_TYPO_VARIANTS: dict[str, list[str]] = {
    "dress": ["dres", "drees", "drss"],
    "shirt": ["shrt", "shrit"],
    "shoes": ["shose", "shos"],
    "bag": ["abg", "bga"],
    "jacket": ["jaket", "jackt"],
    "pants": ["pant", "pnts"],
    "skirt": ["skrt", "skit"],
}

# Canonical term -> synonyms
DEFAULT_SYNONYMS: dict[str, list[str]] = {
    "dress": ["gown", "frock", "outfit"],
    "shirt": ["blouse", "top", "tee"],
    "bag": ["purse", "handbag", "clutch"],
    "shoes": ["footwear", "sandals", "heels"],
    "cheap": ["affordable", "budget", "economical"],
    "expensive": ["premium", "luxury", "high-end"],
    "new": ["latest", "fresh", "recent"],
    "traditional": ["ethnic", "cultural", "classic"],
}
