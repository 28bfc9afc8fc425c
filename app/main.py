from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routes import coins, health
from app.core.config import settings
from app.core.exceptions import CatalogError
from app.core.logging import get_logger
from app.services.catalog_service import init_catalog_service, shutdown_catalog_service


log = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info(f"Starting application in {settings.ENV.upper()} mode")
    if settings.is_production:
        log.info("Production mode: Debug disabled, docs disabled, stricter logging")
    else:
        log.info("Development mode: Debug enabled, docs available")

    # Build the merged catalog (fetch CoinMarketCap + CoinGecko, reconcile)
    log.info("Building coin catalog...")
    try:
        catalog = await init_catalog_service()
        stats = catalog.stats()
        log.info(f"Coin catalog ready: {stats['total']} coins, {stats['matched']} matched on CoinGecko")
    except CatalogError as exc:
        log.error(f"Coin catalog unavailable, serving 503 until restart: {exc}")

    yield

    log.info("Shutting down services...")
    shutdown_catalog_service()
    log.info("Application shutdown complete")


app = FastAPI(
    title="Coin ID Finder",
    description="Find CoinMarketCap and CoinGecko coin IDs by name or symbol",
    version="1.0.0",
    lifespan=lifespan,
    # Disable docs in production for security
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.docs_enabled else None,
    debug=settings.debug_enabled,
)


app.include_router(coins.router)
app.include_router(health.router)
