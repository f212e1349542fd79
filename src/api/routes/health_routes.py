"""헬스 체크 엔드포인트"""
from datetime import datetime

from fastapi import APIRouter, Depends

from src import __version__
from src.api.routes.steam_routes import get_cache
from src.schemas.steam_schema import HealthResponse
from src.services.impl.cache_service import TTLCache

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(cache: TTLCache = Depends(get_cache)):
    """
    헬스 체크 엔드포인트

    - 서버 상태
    - 캐시 크기 (외부 의존성이 없으므로 항상 ok)
    """
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(),
        version=__version__,
        cache_size=cache.stats()["size"],
    )


@router.get("/")
async def root():
    """루트 엔드포인트"""
    return {"service": "steam-catalog", "version": __version__}
