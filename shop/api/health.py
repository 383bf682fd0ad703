"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shop.api.deps import get_stores
from shop.catalog.stores import CatalogStores
from shop.infrastructure.config import settings

router = APIRouter()
logger = structlog.get_logger()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service="shop-admin",
        version=settings.api_version,
    )


@router.get("/ready")
async def readiness_check(
    stores: Annotated[CatalogStores, Depends(get_stores)],
) -> JSONResponse:
    """Check if the catalog store answers queries.

    Returns:
        Readiness status, 503 if the store is unreachable.
    """
    try:
        await stores.categories.count()
    except Exception as e:
        logger.warning("Readiness check failed", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable"},
        )
    return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "ready"})
