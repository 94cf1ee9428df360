"""Domain models shared by the search engine and its API."""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

from shared.constants import (
    DEFAULT_MAX_PRICE,
    DEFAULT_MIN_PRICE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)

Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Enums
# =============================================================================


class SortMode(str, Enum):
    """Result orderings accepted by search."""

    RELEVANCE = "relevance"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NEWEST = "newest"
    RATING = "rating"
    POPULAR = "popular"


class InteractionType(str, Enum):
    """Per-product interactions tracked for personalization."""

    VIEW = "view"
    CLICK = "click"
    CART = "cart"


# =============================================================================
# Catalog Products
# =============================================================================


class Product(CamelModel):
    """A catalog product, read-only to the search engine."""

    id: str
    name: str
    description: str = ""
    short_description: str = ""
    category: str = ""
    subcategory: str = ""
    brand: str = ""
    tags: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)
    materials: list[str] = Field(default_factory=list)
    gender: str = ""
    age_group: str = ""
    price: Money = Field(default=Decimal("0"), ge=0)
    original_price: Money | None = None
    stock_quantity: int = Field(default=0, ge=0)
    is_active: bool = True
    is_featured: bool = False
    is_new: bool = False
    is_sale: bool = False
    average_rating: float = Field(default=0.0, ge=0, le=5)
    total_reviews: int = 0
    sales_count: int = 0
    view_count: int = 0
    main_image: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        return str(v) if v is not None else v

    @field_validator(
        "description", "short_description", "category", "subcategory",
        "brand", "gender", "age_group",
        mode="before",
    )
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("tags", "colors", "sizes", "materials", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("average_rating", "total_reviews", "sales_count", "view_count", mode="before")
    @classmethod
    def none_to_zero(cls, v: Any) -> Any:
        return 0 if v is None else v


class RankedProduct(Product):
    """A product annotated with a relevance score and/or a recommendation reason."""

    relevance_score: float | None = None
    reason: str | None = None

    @classmethod
    def from_product(
        cls,
        product: Product,
        relevance_score: float | None = None,
        reason: str | None = None,
    ) -> "RankedProduct":
        return cls(
            **product.model_dump(exclude={"relevance_score", "reason"}),
            relevance_score=relevance_score,
            reason=reason,
        )


# =============================================================================
# Search Options
# =============================================================================


def _parse_decimal(v: Any, default: Decimal) -> Decimal:
    if v is None or v == "":
        return default
    try:
        value = Decimal(str(v))
    except (InvalidOperation, ValueError):
        return default
    if not value.is_finite():
        return default
    return max(value, Decimal("0"))


def _parse_int(v: Any, default: int) -> int:
    if v is None or v == "":
        return default
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def clamp_limit(v: Any, default: int, maximum: int) -> int:
    """Coerce a raw limit into [1, maximum]; unparseable input means ``default``."""
    return min(maximum, max(1, _parse_int(v, default)))


class SearchOptions(CamelModel):
    """Per-request search input.

    Malformed values are clamped to safe defaults instead of rejected:
    page falls back to 1, page size to [1, MAX_PAGE_SIZE], negative prices
    to 0 and unknown sort modes to relevance. List filters accept either a
    list or a comma-separated string.
    """

    query: str = ""
    category: str = ""
    subcategory: str = ""
    min_price: Decimal = Decimal(DEFAULT_MIN_PRICE)
    max_price: Decimal = Decimal(DEFAULT_MAX_PRICE)
    colors: list[str] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)
    materials: list[str] = Field(default_factory=list)
    brands: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    gender: str = ""
    age_group: str = ""
    in_stock: bool = False
    is_new: bool = False
    is_sale: bool = False
    is_featured: bool = False
    sort_by: SortMode = SortMode.RELEVANCE
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    user_id: str | None = None

    @field_validator("query", "category", "subcategory", "gender", "age_group", mode="before")
    @classmethod
    def clean_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("colors", "sizes", "materials", "brands", "tags", mode="before")
    @classmethod
    def split_list(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return [str(item).strip() for item in v if item is not None and str(item).strip()]

    @field_validator("min_price", mode="before")
    @classmethod
    def clamp_min_price(cls, v: Any) -> Decimal:
        return _parse_decimal(v, Decimal(DEFAULT_MIN_PRICE))

    @field_validator("max_price", mode="before")
    @classmethod
    def clamp_max_price(cls, v: Any) -> Decimal:
        return _parse_decimal(v, Decimal(DEFAULT_MAX_PRICE))

    @field_validator("sort_by", mode="before")
    @classmethod
    def parse_sort(cls, v: Any) -> SortMode:
        if isinstance(v, SortMode):
            return v
        key = str(v or "").strip().lower().replace("-", "_")
        try:
            return SortMode(key)
        except ValueError:
            return SortMode.RELEVANCE

    @field_validator("page", mode="before")
    @classmethod
    def clamp_page(cls, v: Any) -> int:
        return max(1, _parse_int(v, 1))

    @field_validator("limit", mode="before")
    @classmethod
    def clamp_page_size(cls, v: Any) -> int:
        return clamp_limit(v, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)

    @field_validator("user_id", mode="before")
    @classmethod
    def blank_user_is_anonymous(cls, v: Any) -> str | None:
        if v is None or str(v).strip() == "":
            return None
        return str(v)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


# =============================================================================
# Results
# =============================================================================


class TrendingSearch(CamelModel):
    query: str
    count: int


class Suggestion(CamelModel):
    """An autocomplete suggestion: a catalog product or a popular query."""

    type: Literal["product", "popular"]
    text: str
    category: str | None = None
    image: str | None = None
    price: Money | None = None
    count: int | None = None


class AppliedFilter(CamelModel):
    type: str
    value: str | list[str]


class PriceRange(CamelModel):
    min: float
    max: float
    count: int


class FacetSummary(CamelModel):
    categories: list[str] = Field(default_factory=list)
    brands: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)
    price_ranges: list[PriceRange] = Field(default_factory=list)


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class SearchMetadata(CamelModel):
    search_terms: list[str] = Field(default_factory=list)
    applied_filters: list[AppliedFilter] = Field(default_factory=list)
    recommendations: list[RankedProduct] = Field(default_factory=list)
    trending_searches: list[TrendingSearch] = Field(default_factory=list)
    suggested_filters: FacetSummary = Field(default_factory=FacetSummary)


class SearchResponse(CamelModel):
    """Response for a single search request."""

    success: bool = True
    data: list[RankedProduct]
    pagination: Pagination
    metadata: SearchMetadata
