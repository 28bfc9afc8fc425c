"""Health routes - Catalog health and readiness checks."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.api.deps import get_optional_catalog
from app.schemas.api import HealthResponse
from app.services.catalog_service import CoinCatalogService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health(response: Response, catalog: Optional[CoinCatalogService] = Depends(get_optional_catalog)):
    """
    Health check endpoint for load balancer and Docker health checks.

    Reports whether the merged catalog was built and how many coins matched.
    Returns 503 if the upstream listings could not be fetched.
    """
    if catalog is None or not catalog.ready:
        response.status_code = 503
        return HealthResponse(catalog="unavailable")

    stats = catalog.stats()
    return HealthResponse(
        catalog="ready",
        total=stats["total"],
        matched=stats["matched"],
        policy=stats["policy"],
        built_at=stats["built_at"],
    )


@router.get("/ready")
def readiness(response: Response, catalog: Optional[CoinCatalogService] = Depends(get_optional_catalog)):
    """Readiness probe - 200 once the catalog is built, 503 before."""
    timestamp = datetime.now(timezone.utc).isoformat()
    if catalog is None or not catalog.ready:
        response.status_code = 503
        return {"status": "not_ready", "timestamp": timestamp}
    return {"status": "ready", "timestamp": timestamp}
