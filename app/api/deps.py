"""API dependencies"""

from typing import Optional

from fastapi import Depends, HTTPException

from app.services.catalog_service import CoinCatalogService, get_catalog_service


def get_optional_catalog() -> Optional[CoinCatalogService]:
    """Catalog dependency that tolerates a missing catalog (health checks)."""
    return get_catalog_service()


def get_catalog(catalog: Optional[CoinCatalogService] = Depends(get_optional_catalog)) -> CoinCatalogService:
    """Catalog dependency for data routes; 503 until the catalog is built."""
    if catalog is None or not catalog.ready:
        raise HTTPException(status_code=503, detail="Coin data unavailable")
    return catalog
