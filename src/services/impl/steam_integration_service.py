"""Steam 통합 서비스 - 제목 매칭, 상점 페이지 파싱, 캐싱을 조합하는 진입점

Flow:
    1. 캐시 조회
    2. 검색 API (전체 제목 → 상위 키워드 → Δ 표기) + 후보 매칭
    3. 상점 페이지 fetch → 리뷰/태그/메타데이터 추출
    4. 결과 조립 후 캐시에 저장

보조 조회: 사용자 리뷰(appreviews), 동시 접속자 수, SteamSpy 소유자 추정치

공개 메서드는 예상 가능한 실패(미발견, 재시도 소진, 필드 누락)에 대해
예외를 던지지 않고 결과 객체/None으로 알립니다.
"""

from typing import Optional

from src.core.config import settings
from src.core.exceptions import (
    EntryNotFoundException,
    EntryUnavailableException,
    NetworkException,
    SteamCatalogException,
)
from src.core.logging import logger, sanitize_for_log
from src.crawlers.steam.detail_parsing import is_unavailable_page, parse_store_page
from src.crawlers.steam.fetcher import ResilientFetcher
from src.crawlers.steam.reviews import SteamReviewsClient
from src.crawlers.steam.search import SteamSearchClient, build_search_queries
from src.crawlers.steam.stats import SteamStatsClient
from src.schemas.steam_schema import (
    CompleteSteamData,
    SteamAppInfo,
    SteamDetailedReviews,
    SteamIntegrationResult,
    SteamPlayerCount,
    SteamReviewData,
    SteamSpyData,
    SteamTagsData,
)
from src.services.impl.cache_service import TTLCache
from src.utils.text.matching import filter_candidates, select_best_candidate


STORE_PAGE_FETCH_FAILED = "Failed to fetch Steam store page"


def app_cache_key(title: str) -> str:
    return f"steam_app_{title.strip().lower()}"


def complete_data_cache_key(steam_app_id: int) -> str:
    return f"complete_data_{steam_app_id}"


def player_count_cache_key(steam_app_id: int) -> str:
    return f"current_players_{steam_app_id}"


class SteamIntegrationService:
    """Steam 카탈로그 매칭/캐싱 오케스트레이터

    캐시는 호출자가 만들어 주입합니다 (프로세스 시작 시 1회 생성, 테스트에서는 clear()).
    """

    def __init__(
        self,
        cache: TTLCache,
        fetcher: Optional[ResilientFetcher] = None,
        search_client: Optional[SteamSearchClient] = None,
        stats_client: Optional[SteamStatsClient] = None,
        reviews_client: Optional[SteamReviewsClient] = None,
        match_threshold: Optional[float] = None,
    ):
        self.cache = cache
        self.fetcher = fetcher or ResilientFetcher()
        self.search_client = search_client or SteamSearchClient(self.fetcher)
        self.stats_client = stats_client or SteamStatsClient(self.fetcher)
        self.reviews_client = reviews_client or SteamReviewsClient(self.fetcher)
        self.match_threshold = (
            settings.match_threshold if match_threshold is None else match_threshold
        )

    # ------------------------------------------------------------------
    # 제목 → Steam 항목
    # ------------------------------------------------------------------

    async def _resolve_app(self, title: str) -> SteamAppInfo:
        """검색 확장 정책에 따라 검색하고 최적 후보를 고른다.

        Raises:
            EntryNotFoundException: 어떤 검색어로도 적격 후보가 없거나 점수 미달
        """
        for idx, query in enumerate(build_search_queries(title), start=1):
            candidates = filter_candidates(await self.search_client.search(query))
            if not candidates:
                logger.info(f"[STEAM_SERVICE] No eligible candidates for query #{idx}")
                continue

            match = select_best_candidate(title, candidates, threshold=self.match_threshold)
            if match is None:
                logger.info(
                    f"[STEAM_SERVICE] {len(candidates)} candidates below threshold "
                    f"{self.match_threshold} for query #{idx}"
                )
                raise EntryNotFoundException(title)

            logger.info(
                f"[STEAM_SERVICE] Matched app {match.steam_app_id} "
                f"'{sanitize_for_log(match.steam_name, 60)}' (score={match.score:.2f}, query #{idx})"
            )
            return SteamAppInfo(steam_app_id=match.steam_app_id, steam_name=match.steam_name)

        raise EntryNotFoundException(title)

    async def find_steam_app(self, title: str) -> Optional[SteamAppInfo]:
        """
        게임 제목으로 Steam 항목 찾기 (캐시 우선)

        Args:
            title: 게임 제목

        Returns:
            SteamAppInfo 또는 None (미발견/실패 시, 이 경우 캐시하지 않음)
        """
        if not title or not title.strip():
            return None

        key = app_cache_key(title)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            app_info = await self._resolve_app(title)
        except EntryNotFoundException:
            logger.info(f"[STEAM_SERVICE] No Steam app for '{sanitize_for_log(title, 60)}'")
            return None
        except Exception as e:
            logger.error(
                f"[STEAM_SERVICE] Failed to find Steam app for '{sanitize_for_log(title, 60)}': "
                f"{type(e).__name__}: {e}"
            )
            return None

        self.cache.set(key, app_info)
        return app_info

    # ------------------------------------------------------------------
    # Steam 항목 → 상세 데이터
    # ------------------------------------------------------------------

    async def _fetch_store_page(self, steam_app_id: int) -> str:
        url = f"{settings.steam_store_url}{steam_app_id}"
        res = await self.fetcher.fetch_with_retry(url)
        if is_unavailable_page(res.text):
            raise EntryUnavailableException(steam_app_id)
        return res.text

    async def get_complete_data_by_app_id(self, steam_app_id: int) -> SteamIntegrationResult:
        """Steam App ID로 상점 페이지 데이터 전체 조회 (캐시 우선)"""
        key = complete_data_cache_key(steam_app_id)
        cached: Optional[CompleteSteamData] = self.cache.get(key)
        if cached is not None:
            return SteamIntegrationResult(success=True, data=cached.model_dump())

        try:
            html = await self._fetch_store_page(steam_app_id)
        except EntryUnavailableException as e:
            logger.warning(f"[STEAM_SERVICE] {e.message}")
            return SteamIntegrationResult(
                success=False, data={"steam_app_id": steam_app_id}, error=e.message
            )
        except NetworkException as e:
            logger.error(f"[STEAM_SERVICE] Store page fetch failed for {steam_app_id}: {e}")
            return SteamIntegrationResult(
                success=False,
                data={"steam_app_id": steam_app_id},
                error=f"{STORE_PAGE_FETCH_FAILED}: {e.message}",
            )
        except Exception as e:
            logger.error(
                f"[STEAM_SERVICE] Unexpected error for app {steam_app_id}: {type(e).__name__}: {e}"
            )
            return SteamIntegrationResult(
                success=False, data={"steam_app_id": steam_app_id}, error=str(e) or "Unknown error"
            )

        try:
            page = parse_store_page(html)
        except Exception as e:
            logger.error(f"[STEAM_SERVICE] Store page parse failed for {steam_app_id}: {e}")
            return SteamIntegrationResult(
                success=False, data={"steam_app_id": steam_app_id}, error=str(e) or "Unknown error"
            )

        complete = CompleteSteamData(
            steam_app_id=steam_app_id,
            **page.reviews.with_backfill().model_dump(),
            **page.tags.model_dump(),
            **page.metadata.model_dump(),
        )
        self.cache.set(key, complete)
        return SteamIntegrationResult(success=True, data=complete.model_dump())

    async def get_complete_data_by_name(self, title: str) -> SteamIntegrationResult:
        """게임 제목으로 전체 데이터 조회 (find_steam_app → get_complete_data_by_app_id)"""
        try:
            app_info = await self.find_steam_app(title)
            if app_info is None:
                return SteamIntegrationResult(
                    success=False, data={}, error=EntryNotFoundException(title).message
                )

            result = await self.get_complete_data_by_app_id(app_info.steam_app_id)
            if result.success:
                # 캐시된 객체가 아니라 반환용 사본에만 이름을 채움
                result.data["steam_name"] = app_info.steam_name
            return result
        except Exception as e:
            logger.error(
                f"[STEAM_SERVICE] Failed to get Steam data for '{sanitize_for_log(title, 60)}': "
                f"{type(e).__name__}: {e}"
            )
            return SteamIntegrationResult(success=False, data={}, error=str(e) or "Unknown error")

    async def get_reviews_only(self, title: str) -> Optional[SteamReviewData]:
        result = await self.get_complete_data_by_name(title)
        if not result.success:
            return None
        return SteamReviewData(
            steam_all_review=result.data.get("steam_all_review") or None,
            steam_recent_review=result.data.get("steam_recent_review") or None,
        )

    async def get_tags_only(self, title: str) -> Optional[SteamTagsData]:
        result = await self.get_complete_data_by_name(title)
        if not result.success:
            return None
        return SteamTagsData(steam_popular_tags=result.data.get("steam_popular_tags") or None)

    # ------------------------------------------------------------------
    # 보조 통계
    # ------------------------------------------------------------------

    async def get_current_players(self, steam_app_id: int) -> Optional[SteamPlayerCount]:
        """현재 동시 접속자 수 (캐시 우선, 실패 시 None)"""
        key = player_count_cache_key(steam_app_id)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            count = await self.stats_client.get_current_players(steam_app_id)
        except SteamCatalogException as e:
            logger.warning(f"[STEAM_SERVICE] Player count unavailable for {steam_app_id}: {e}")
            return None
        except Exception as e:
            logger.error(
                f"[STEAM_SERVICE] Player count failed for {steam_app_id}: {type(e).__name__}: {e}"
            )
            return None

        self.cache.set(key, count)
        return count

    async def get_sales_data(self, title: str) -> Optional[SteamSpyData]:
        """제목 → Steam 항목 → SteamSpy 소유자 추정치 (실패 시 None)"""
        app_info = await self.find_steam_app(title)
        if app_info is None:
            return None

        try:
            return await self.stats_client.get_steamspy_data(app_info.steam_app_id)
        except SteamCatalogException as e:
            logger.warning(
                f"[STEAM_SERVICE] SteamSpy data unavailable for {app_info.steam_app_id}: {e}"
            )
            return None
        except Exception as e:
            logger.error(
                f"[STEAM_SERVICE] SteamSpy lookup failed for {app_info.steam_app_id}: "
                f"{type(e).__name__}: {e}"
            )
            return None

    async def get_detailed_reviews(self, title: str, limit: Optional[int] = None) -> SteamDetailedReviews:
        """
        제목 → Steam 항목 → '도움이 됨' 상위 사용자 리뷰

        Args:
            title: 게임 제목
            limit: 최대 리뷰 수 (기본값: settings.steam_reviews_limit)

        Returns:
            SteamDetailedReviews (미매칭이면 id/이름 None, 리뷰 조회 실패면 빈 목록)
        """
        app_info = await self.find_steam_app(title)
        if app_info is None:
            return SteamDetailedReviews()

        try:
            reviews = await self.reviews_client.get_helpful_reviews(app_info.steam_app_id, limit)
        except Exception as e:
            logger.warning(
                f"[STEAM_SERVICE] User reviews unavailable for {app_info.steam_app_id}: "
                f"{type(e).__name__}: {e}"
            )
            reviews = []

        return SteamDetailedReviews(
            steam_app_id=app_info.steam_app_id,
            steam_name=app_info.steam_name,
            reviews=reviews,
        )

    # ------------------------------------------------------------------
    # 관리
    # ------------------------------------------------------------------

    def clear_cache(self) -> None:
        self.cache.clear()

    def get_cache_stats(self) -> dict:
        return self.cache.stats()
