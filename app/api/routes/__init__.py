from app.api.routes.coins import router as coins_router
from app.api.routes.health import router as health_router

__all__ = ["coins_router", "health_router"]
