"""Text utilities.

- normalize: 제목 정규화 / 키워드 추출
- matching: 후보 필터링 / 키워드 겹침 점수 / 최적 후보 선택
"""

from .normalize import build_fallback_query, extract_keywords, normalize_title
from .matching import (
    filter_candidates,
    find_best_match,
    find_excluded_term,
    is_valid_candidate,
    select_best_candidate,
    similarity_score,
)

__all__ = [
    # normalize
    "normalize_title",
    "extract_keywords",
    "build_fallback_query",
    # matching
    "find_excluded_term",
    "is_valid_candidate",
    "filter_candidates",
    "similarity_score",
    "find_best_match",
    "select_best_candidate",
]
