"""API 엔드포인트 패키지 - export only."""

from .routes import health_router, steam_router, get_cache, get_steam_service

__all__ = ["health_router", "steam_router", "get_cache", "get_steam_service"]
