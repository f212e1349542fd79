"""Services implementation package."""

from .cache_service import TTLCache
from .steam_integration_service import SteamIntegrationService

__all__ = ["TTLCache", "SteamIntegrationService"]
