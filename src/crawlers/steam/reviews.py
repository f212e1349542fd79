"""Steam 사용자 리뷰 조회 (appreviews API, '도움이 됨' 순)"""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from typing import Any, List, Optional
from urllib.parse import urlencode

from pydantic import ValidationError

from src.core.config import settings
from src.core.logging import logger
from src.schemas.steam_schema import SteamUserReview

from .fetcher import ResilientFetcher


def build_review_id(steam_app_id: int, recommendation_id: str) -> str:
    """앱/추천 ID 조합의 MD5 앞 12자리 (재조회해도 같은 ID)"""
    return hashlib.md5(f"{steam_app_id}-{recommendation_id}".encode()).hexdigest()[:12]


def format_timestamp(timestamp: int) -> str:
    """Unix 초 → '2017-02-24T00:00:00.000Z'"""
    created = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return created.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _votes_up(raw: dict[str, Any]) -> int:
    votes = raw.get("votes_up")
    return votes if isinstance(votes, int) else 0


def parse_helpful_reviews(payload: Any, steam_app_id: int, limit: int) -> List[SteamUserReview]:
    """
    appreviews 응답 → 추천 수 내림차순 상위 limit개

    Args:
        payload: appreviews JSON
        steam_app_id: review_id 생성용 앱 ID
        limit: 최대 개수

    Returns:
        SteamUserReview 목록 (success != 1 이거나 reviews 누락이면 빈 목록)
    """
    if not isinstance(payload, dict) or payload.get("success") != 1:
        return []

    raw_reviews = payload.get("reviews")
    if not isinstance(raw_reviews, list):
        return []

    candidates = [r for r in raw_reviews if isinstance(r, dict)]
    # 정렬은 안정적이므로 추천 수가 같으면 API 순서 유지
    candidates.sort(key=_votes_up, reverse=True)

    reviews: List[SteamUserReview] = []
    for raw in candidates:
        if len(reviews) >= limit:
            break
        recommendation_id = raw.get("recommendationid")
        content = raw.get("review")
        created = raw.get("timestamp_created")
        if not recommendation_id or not isinstance(content, str) or not isinstance(created, int):
            logger.debug(f"[STEAM_REVIEWS] Skipping malformed review: {recommendation_id!r}")
            continue
        try:
            reviews.append(
                SteamUserReview(
                    review_id=build_review_id(steam_app_id, str(recommendation_id)),
                    content=content,
                    original_published_at=format_timestamp(created),
                )
            )
        except (ValidationError, ValueError, OverflowError, OSError) as e:
            logger.debug(f"[STEAM_REVIEWS] Skipping review {recommendation_id!r}: {e}")
    return reviews


class SteamReviewsClient:
    def __init__(self, fetcher: Optional[ResilientFetcher] = None) -> None:
        self.fetcher = fetcher or ResilientFetcher()

    def build_reviews_url(self, steam_app_id: int) -> str:
        query = urlencode(
            {
                "json": "1",
                "filter": "helpful",
                "language": settings.steam_reviews_language,
                "cursor": "*",
                "review_type": "all",
                "purchase_type": "all",
                "num_per_page": str(settings.steam_reviews_per_page),
            }
        )
        return f"{settings.steam_reviews_url}{steam_app_id}?{query}"

    async def get_helpful_reviews(self, steam_app_id: int, limit: Optional[int] = None) -> List[SteamUserReview]:
        """
        추천 수 상위 사용자 리뷰 조회

        Raises:
            NetworkException: 재시도 소진
            ParsingException: JSON 디코딩 실패
            ValueError: limit이 0 이하
        """
        top = settings.steam_reviews_limit if limit is None else limit
        if top <= 0:
            raise ValueError(f"review limit must be positive, got {top}")

        payload = await self.fetcher.fetch_json(self.build_reviews_url(steam_app_id))
        reviews = parse_helpful_reviews(payload, steam_app_id, top)
        logger.info(f"[STEAM_REVIEWS] app {steam_app_id}: {len(reviews)} reviews")
        return reviews
