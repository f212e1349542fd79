"""Steam 상점 검색 API 클라이언트"""

from __future__ import annotations

import re
from typing import List, Optional
from urllib.parse import urlencode

from src.core.config import settings
from src.core.exceptions import NetworkException, ParsingException
from src.core.logging import logger, sanitize_for_log
from src.schemas.steam_schema import SteamSearchItem
from src.utils.text.normalize import build_fallback_query, normalize_title

from .fetcher import ResilientFetcher


_DELTA_WORD = re.compile(r"\bdelta\b", re.IGNORECASE)


def build_search_queries(title: str) -> List[str]:
    """검색 확장 순서대로 검색어 목록을 만든다.

    1. 전체 제목
    2. 상위 키워드 3개 (더 넓은 검색)
    3. 제목에 'delta'가 있으면 'Δ' 표기로 치환한 제목
    """
    base = (title or "").strip()
    if not base:
        return []

    queries = [base]

    fallback = build_fallback_query(base)
    if fallback:
        queries.append(fallback)

    if "delta" in normalize_title(base).split(" "):
        queries.append(_DELTA_WORD.sub("Δ", base))

    # 순서 유지 중복 제거
    seen: set[str] = set()
    out: List[str] = []
    for q in queries:
        key = q.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(q)
    return out


class SteamSearchClient:
    """storesearch API 호출 → SteamSearchItem 목록.

    실패(재시도 소진, 2xx 외, JSON 오류, items 누락)는 모두 '후보 0개'로 취급합니다.
    """

    def __init__(self, fetcher: Optional[ResilientFetcher] = None) -> None:
        self.fetcher = fetcher or ResilientFetcher()
        self.search_url = settings.steam_search_url

    def build_search_url(self, term: str) -> str:
        query = urlencode(
            {
                "term": term.strip(),
                "cc": settings.steam_country_code,
                "l": settings.steam_language,
            }
        )
        return f"{self.search_url}?{query}"

    async def search(self, term: str) -> List[SteamSearchItem]:
        if not term or not term.strip():
            return []

        logger.info(f"[STEAM_SEARCH] term='{sanitize_for_log(term, 60)}'")
        try:
            payload = await self.fetcher.fetch_json(self.build_search_url(term))
        except (NetworkException, ParsingException) as e:
            logger.warning(f"[STEAM_SEARCH] Search failed, treating as no results: {e}")
            return []

        items = payload.get("items") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            logger.info("[STEAM_SEARCH] Response has no items list")
            return []

        results: List[SteamSearchItem] = []
        for raw in items:
            item = SteamSearchItem.from_api(raw)
            if item is not None:
                results.append(item)

        logger.info(f"[STEAM_SEARCH] {len(results)} candidates (raw={len(items)})")
        return results
