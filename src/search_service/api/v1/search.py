"""Search, autocomplete and trending endpoints."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from search_service.dependencies import get_search_service
from search_service.schemas import (
    CamelModel,
    SearchOptions,
    SearchResponse,
    Suggestion,
    TrendingSearch,
    clamp_limit,
)
from search_service.services import SearchService
from shared.constants import (
    DEFAULT_AUTOCOMPLETE_LIMIT,
    MAX_AUTOCOMPLETE_LIMIT,
    MAX_TRENDING_SEARCHES_LIMIT,
    TRENDING_SEARCHES_LIMIT,
)

logger = structlog.get_logger()

router = APIRouter()


class AutocompleteResponse(BaseModel):
    success: bool = True
    suggestions: list[Suggestion]


class TrendingResponse(CamelModel):
    success: bool = True
    trending: list[TrendingSearch]


@router.get(
    "",
    response_model=SearchResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def search_products(
    q: Annotated[str | None, Query(description="Free-text query")] = None,
    query: Annotated[str | None, Query(description="Alias of q")] = None,
    category: str | None = None,
    subcategory: str | None = None,
    min_price: Annotated[str | None, Query(alias="minPrice")] = None,
    max_price: Annotated[str | None, Query(alias="maxPrice")] = None,
    colors: Annotated[str | None, Query(description="Comma-separated colors")] = None,
    sizes: Annotated[str | None, Query(description="Comma-separated sizes")] = None,
    materials: Annotated[str | None, Query(description="Comma-separated materials")] = None,
    brands: Annotated[str | None, Query(description="Comma-separated brands")] = None,
    tags: Annotated[str | None, Query(description="Comma-separated tags")] = None,
    gender: str | None = None,
    age_group: Annotated[str | None, Query(alias="ageGroup")] = None,
    in_stock: Annotated[bool, Query(alias="inStock")] = False,
    is_new: Annotated[bool, Query(alias="isNew")] = False,
    is_sale: Annotated[bool, Query(alias="isSale")] = False,
    is_featured: Annotated[bool, Query(alias="isFeatured")] = False,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    page: str | None = None,
    limit: str | None = None,
    user_id: Annotated[str | None, Query(alias="userId")] = None,
    service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    """
    Search the catalog.

    Free-text queries are expanded with typo corrections and synonyms and
    the page is re-ranked by relevance. Malformed paging or price values
    are clamped rather than rejected. Responds 503 if the catalog fails.
    """
    options = SearchOptions(
        query=q or query,
        category=category,
        subcategory=subcategory,
        min_price=min_price,
        max_price=max_price,
        colors=colors,
        sizes=sizes,
        materials=materials,
        brands=brands,
        tags=tags,
        gender=gender,
        age_group=age_group,
        in_stock=in_stock,
        is_new=is_new,
        is_sale=is_sale,
        is_featured=is_featured,
        sort_by=sort_by,
        page=page,
        limit=limit,
        user_id=user_id,
    )
    return await service.search(options)


@router.get("/autocomplete", response_model=AutocompleteResponse, response_model_exclude_none=True)
async def autocomplete(
    q: str = "",
    limit: str | None = None,
    service: SearchService = Depends(get_search_service),
) -> AutocompleteResponse:
    """Typeahead suggestions; queries shorter than two characters return none."""
    suggestions = await service.autocomplete(
        q, clamp_limit(limit, DEFAULT_AUTOCOMPLETE_LIMIT, MAX_AUTOCOMPLETE_LIMIT)
    )
    return AutocompleteResponse(suggestions=suggestions)


@router.get("/trending", response_model=TrendingResponse)
async def trending(
    limit: str | None = None,
    service: SearchService = Depends(get_search_service),
) -> TrendingResponse:
    """Most frequently searched queries across all users."""
    return TrendingResponse(
        trending=service.trending(clamp_limit(limit, TRENDING_SEARCHES_LIMIT, MAX_TRENDING_SEARCHES_LIMIT))
    )
