"""Steam Routes - SteamIntegrationService로 위임하는 얇은 HTTP 계층

HTTP Layer는 입력 검증과 응답 변환만 수행합니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from src.core.exceptions import InvalidQueryException
from src.core.logging import logger, sanitize_for_log
from src.schemas.steam_schema import CacheStatsResponse, SteamDetailedReviews, SteamIntegrationResult
from src.services.impl.cache_service import TTLCache
from src.services.impl.steam_integration_service import SteamIntegrationService

router = APIRouter(prefix="/api/steam", tags=["steam"])

# 싱글톤 서비스
_cache: Optional[TTLCache] = None
_steam_service: Optional[SteamIntegrationService] = None


def get_cache() -> TTLCache:
    """TTLCache 싱글톤 (프로세스 수명 동안 유지)"""
    global _cache
    if _cache is None:
        _cache = TTLCache()
    return _cache


def get_steam_service(cache: TTLCache = Depends(get_cache)) -> SteamIntegrationService:
    """SteamIntegrationService 싱글톤"""
    global _steam_service
    if _steam_service is None:
        _steam_service = SteamIntegrationService(cache=cache)
    return _steam_service


def _require_query(value: Optional[str], field: str = "q", min_length: int = 1, max_length: int = 200) -> str:
    if value is None or not value.strip():
        raise InvalidQueryException(f'Query parameter "{field}" is required', field=field)
    cleaned = value.strip()
    if not min_length <= len(cleaned) <= max_length:
        raise InvalidQueryException(f"length must be between {min_length} and {max_length}", field=field)
    return cleaned


def _bad_request(e: InvalidQueryException) -> JSONResponse:
    logger.warning(f"[API] Input validation failed: {e}")
    return JSONResponse(status_code=400, content={"error": e.message, "error_code": e.error_code})


@router.get("/check-game-exists")
async def check_game_exists(
    q: Optional[str] = Query(None),
    service: SteamIntegrationService = Depends(get_steam_service),
):
    """게임이 Steam에 존재하는지 확인"""
    try:
        query = _require_query(q)
    except InvalidQueryException as e:
        return _bad_request(e)

    app_info = await service.find_steam_app(query)
    exists = app_info is not None
    return {
        "exists": exists,
        "steam_app_id": app_info.steam_app_id if exists else None,
        "steam_name": app_info.steam_name if exists else None,
        "query": query,
    }


@router.get("/review-summary")
async def review_summary(
    q: Optional[str] = Query(None),
    service: SteamIntegrationService = Depends(get_steam_service),
):
    """리뷰 요약 (전체/최근)"""
    try:
        query = _require_query(q)
    except InvalidQueryException as e:
        return _bad_request(e)

    logger.info(f"[API] review-summary: '{sanitize_for_log(query, 60)}'")
    result = await service.get_complete_data_by_name(query)
    if not result.success or not result.data.get("steam_app_id"):
        return JSONResponse(
            status_code=404,
            content={
                "message": "No Steam reviews found - game not found on Steam",
                "query": query,
                "result": {
                    "steam_app_id": None,
                    "steam_name": None,
                    "steam_all_review": None,
                    "steam_recent_review": None,
                },
            },
        )

    return {
        "success": True,
        "query": query,
        "result": {
            "steam_app_id": result.data.get("steam_app_id"),
            "steam_name": result.data.get("steam_name"),
            "steam_all_review": result.data.get("steam_all_review"),
            "steam_recent_review": result.data.get("steam_recent_review"),
        },
    }


@router.get("/tags")
async def popular_tags(
    q: Optional[str] = Query(None),
    service: SteamIntegrationService = Depends(get_steam_service),
):
    """인기 태그"""
    try:
        query = _require_query(q)
    except InvalidQueryException as e:
        return _bad_request(e)

    result = await service.get_complete_data_by_name(query)
    if not result.success or not result.data.get("steam_app_id"):
        return JSONResponse(
            status_code=404,
            content={
                "message": "No Steam tags found - game not found on Steam",
                "query": query,
                "result": {"steam_app_id": None, "steam_name": None, "steam_popular_tags": None},
            },
        )

    return {
        "success": True,
        "query": query,
        "result": {
            "steam_app_id": result.data.get("steam_app_id"),
            "steam_name": result.data.get("steam_name"),
            "steam_popular_tags": result.data.get("steam_popular_tags"),
        },
    }


@router.get("/reviews-detail", response_model=SteamDetailedReviews)
async def reviews_detail(
    q: Optional[str] = Query(None),
    limit: int = Query(10, ge=1, le=20),
    service: SteamIntegrationService = Depends(get_steam_service),
):
    """'도움이 됨' 상위 사용자 리뷰"""
    try:
        query = _require_query(q)
    except InvalidQueryException as e:
        return _bad_request(e)

    result = await service.get_detailed_reviews(query, limit)
    if result.steam_app_id is None:
        return JSONResponse(
            status_code=404,
            content={
                "error": "No Steam match found for this game",
                "steam_app_id": None,
                "steam_name": None,
                "reviews": [],
            },
        )
    return result


@router.get("/complete", response_model=SteamIntegrationResult)
async def complete_data(
    q: Optional[str] = Query(None),
    service: SteamIntegrationService = Depends(get_steam_service),
):
    """리뷰/태그/메타데이터 전체"""
    try:
        query = _require_query(q)
    except InvalidQueryException as e:
        return _bad_request(e)

    result = await service.get_complete_data_by_name(query)
    if not result.success:
        return JSONResponse(status_code=404, content=result.model_dump())
    return result


@router.get("/current-players")
async def current_players(
    app_id: Optional[int] = Query(None, ge=1),
    service: SteamIntegrationService = Depends(get_steam_service),
):
    """현재 동시 접속자 수"""
    if app_id is None:
        return JSONResponse(status_code=400, content={"error": "Steam App ID is required"})

    count = await service.get_current_players(app_id)
    if count is None:
        return JSONResponse(
            status_code=404,
            content={"error": "Invalid Steam App ID or data not available"},
        )
    return {"player_count": count.player_count, "steam_app_id": app_id}


@router.get("/sales")
async def sales_data(
    name: Optional[str] = Query(None),
    service: SteamIntegrationService = Depends(get_steam_service),
):
    """SteamSpy 소유자 추정치"""
    try:
        query = _require_query(name, field="name", min_length=2, max_length=100)
    except InvalidQueryException as e:
        return _bad_request(e)

    data = await service.get_sales_data(query)
    if data is None:
        return JSONResponse(
            status_code=404,
            content={
                "error": "Steam game not found",
                "name": query,
                "suggestion": "Check the game name or try a different search term",
            },
        )

    return {
        "source": "SteamSpy",
        "steam_app_id": data.steam_app_id,
        "steam_name": data.steam_name,
        "data": {"owners_lower_bound": data.owners_lower_bound},
    }


@router.get("/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(service: SteamIntegrationService = Depends(get_steam_service)):
    return CacheStatsResponse(**service.get_cache_stats())


@router.delete("/cache", response_model=CacheStatsResponse)
async def clear_cache(service: SteamIntegrationService = Depends(get_steam_service)):
    service.clear_cache()
    logger.info("[API] Cache cleared")
    return CacheStatsResponse(**service.get_cache_stats())
