"""API routes package."""

from .health_routes import router as health_router
from .steam_routes import router as steam_router, get_cache, get_steam_service

__all__ = ["health_router", "steam_router", "get_cache", "get_steam_service"]
