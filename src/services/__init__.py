"""비즈니스 로직 서비스 - export only."""

from .impl import SteamIntegrationService, TTLCache

__all__ = ["SteamIntegrationService", "TTLCache"]
