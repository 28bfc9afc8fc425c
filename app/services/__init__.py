# Services package
from app.services.catalog_service import (
    CoinCatalogService,
    init_catalog_service,
    get_catalog_service,
    shutdown_catalog_service,
)
from app.services.reconcile_service import reconcile
from app.services.search_service import SearchStatus, describe, search
from app.services.search_session import SearchSession

__all__ = [
    "CoinCatalogService",
    "init_catalog_service",
    "get_catalog_service",
    "shutdown_catalog_service",
    "reconcile",
    "search",
    "describe",
    "SearchStatus",
    "SearchSession",
]
