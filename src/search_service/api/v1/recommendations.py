"""Recommendation endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from search_service.dependencies import get_search_service
from search_service.schemas import CamelModel, RankedProduct, clamp_limit
from search_service.services import SearchService
from shared.constants import MAX_RECOMMENDATION_LIMIT, RECOMMENDATION_LIMIT

router = APIRouter()


class RecommendationResponse(CamelModel):
    success: bool = True
    recommendations: list[RankedProduct]


@router.get("", response_model=RecommendationResponse, response_model_exclude_none=True)
async def get_recommendations(
    user_id: Annotated[str | None, Query(alias="userId", description="User ID for personalization")] = None,
    query: str = "",
    limit: str | None = None,
    service: SearchService = Depends(get_search_service),
) -> RecommendationResponse:
    """
    Get recommendations outside of a live search.

    **Sources (in priority order):**
    1. Products matching the user's recent searches
    2. Trending products by sales and views

    Always succeeds; an unavailable catalog yields an empty list.
    """
    limit_value = clamp_limit(limit, RECOMMENDATION_LIMIT, MAX_RECOMMENDATION_LIMIT)
    recommendations = await service.recommend(query, user_id or None, limit_value)
    return RecommendationResponse(recommendations=recommendations)
