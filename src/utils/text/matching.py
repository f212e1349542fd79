"""Candidate filtering and keyword-overlap matching helpers."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from src.core.config import settings
from src.core.logging import logger
from src.schemas.steam_schema import SteamMatchResult, SteamSearchItem

from .normalize import extract_keywords, normalize_title


# 본편이 아닌 항목(데모/사운드트랙/DLC 등). 부분 문자열이 아니라 단어 단위로만 매칭
EXCLUDED_TERMS = (
    "demo",
    "beta",
    "alpha",
    "test",
    "soundtrack",
    "ost",
    "music",
    "dlc",
    "expansion",
    "season pass",
    "pack",
    "bundle",
    "collection",
    "trailer",
    "video",
    "documentary",
    "wallpaper",
    "artbook",
    "comic",
)

_EXCLUSION_PATTERNS = tuple(
    (term, re.compile(rf"(?<!\w){re.escape(term)}(?!\w)")) for term in EXCLUDED_TERMS
)


def find_excluded_term(name: str) -> Optional[str]:
    """상품명에 포함된 제외어를 반환 (없으면 None)"""
    normalized = normalize_title(name)
    for term, pattern in _EXCLUSION_PATTERNS:
        if pattern.search(normalized):
            return term
    return None


def is_valid_candidate(item: SteamSearchItem) -> bool:
    if item.type != "app":
        return False

    excluded = find_excluded_term(item.name)
    if excluded:
        logger.debug(f"[STEAM_MATCH] Excluded candidate '{item.name}' (term: {excluded})")
        return False
    return True


def similarity_score(title: str, candidate_name: str) -> float:
    """두 제목의 키워드 겹침 비율 (0.0 ~ 1.0)

    - 정규화 결과가 같으면 1.0
    - 키워드는 같거나, 한쪽이 다른 쪽을 포함하면 공통으로 봄 (복수형/접미사 차이 흡수)
    - 어느 한쪽이라도 키워드가 없으면 0.0
    """
    normalized_title = normalize_title(title)
    if normalized_title and normalized_title == normalize_title(candidate_name):
        return 1.0

    title_keywords = extract_keywords(title)
    candidate_keywords = extract_keywords(candidate_name)
    if not title_keywords or not candidate_keywords:
        return 0.0

    common = [
        word
        for word in title_keywords
        if any(word == other or other in word or word in other for other in candidate_keywords)
    ]
    return len(common) / max(len(title_keywords), len(candidate_keywords))


def filter_candidates(items: Iterable[SteamSearchItem]) -> list[SteamSearchItem]:
    return [item for item in items if is_valid_candidate(item)]


def find_best_match(
    title: str,
    candidates: Iterable[SteamSearchItem],
    threshold: Optional[float] = None,
) -> Optional[SteamMatchResult]:
    """후보 중 가장 점수가 높은 항목을 선택.

    Args:
        title: 찾으려는 게임 제목
        candidates: 검색 API 후보 목록 (검색 순서 유지)
        threshold: 최소 허용 점수 (기본값: settings.match_threshold)

    Returns:
        SteamMatchResult 또는 None (임계값을 넘는 후보가 없을 때)
    """
    if not title or not title.strip():
        return None
    return select_best_candidate(title, filter_candidates(candidates), threshold)


def select_best_candidate(
    title: str,
    eligible: Iterable[SteamSearchItem],
    threshold: Optional[float] = None,
) -> Optional[SteamMatchResult]:
    """이미 걸러진 후보만 점수화 (제외어 검사는 호출자 책임)"""
    min_score = settings.match_threshold if threshold is None else threshold

    best: Optional[SteamSearchItem] = None
    best_score = 0.0
    for candidate in eligible:
        score = similarity_score(title, candidate.name)
        logger.debug(f"[STEAM_MATCH] '{candidate.name}' (id={candidate.id}) score={score:.2f}")
        # 동점이면 먼저 나온 후보 유지
        if score > best_score:
            best = candidate
            best_score = score
            if score >= 1.0:
                break

    if best is None or best_score < min_score:
        return None

    return SteamMatchResult(steam_app_id=best.id, steam_name=best.name, score=best_score)
