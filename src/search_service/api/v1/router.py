"""API v1 router that aggregates all endpoint routers."""

from fastapi import APIRouter

from search_service.api.v1 import (
    health,
    interactions,
    recommendations,
    search,
)

api_router = APIRouter()

api_router.include_router(
    health.router,
    tags=["Health"],
)

api_router.include_router(
    search.router,
    prefix="/search",
    tags=["Search"],
)

api_router.include_router(
    interactions.router,
    prefix="/interactions",
    tags=["Interactions"],
)

api_router.include_router(
    recommendations.router,
    prefix="/recommendations",
    tags=["Recommendations"],
)
