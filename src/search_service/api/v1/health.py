"""Health check endpoints."""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from search_service import __version__
from search_service.config import get_settings
from search_service.dependencies import get_search_service
from search_service.infrastructure.catalog.filters import ACTIVE_ONLY
from search_service.services import SearchService

logger = structlog.get_logger()

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    environment: str
    timestamp: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    ready: bool
    checks: dict[str, bool]


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check used by load balancers."""
    settings = get_settings()

    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.app_env,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(
    service: SearchService = Depends(get_search_service),
) -> ReadinessResponse:
    """
    Readiness check endpoint.

    The catalog must answer a count query. Redis is reported but optional,
    since the cache degrades to a no-op.
    """
    checks: dict[str, bool] = {}

    try:
        await service.catalog.count_products(ACTIVE_ONLY)
        checks["catalog"] = True
    except Exception as e:
        logger.warning("Catalog readiness check failed", error=str(e))
        checks["catalog"] = False

    checks["cache"] = await service.recommender.cache.health_check()

    return ReadinessResponse(ready=checks["catalog"], checks=checks)


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    """Returns 200 whenever the process is serving requests."""
    return {"status": "alive"}
