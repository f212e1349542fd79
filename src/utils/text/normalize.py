"""Title normalization and keyword extraction."""

from __future__ import annotations

import re


# 상점 표기와 정식 제목이 그리스 문자/단어를 번갈아 쓰는 경우가 있어 단어로 통일
_GREEK_WORDS = {
    "δ": "delta",
    "α": "alpha",
    "β": "beta",
    "γ": "gamma",
}

_TRADEMARK_PATTERN = re.compile(r"[™®©]")
_SEPARATOR_PATTERN = re.compile(r"[:\-–—]")
_NON_WORD_PATTERN = re.compile(r"[^\w\s]")
_WHITESPACE_PATTERN = re.compile(r"\s+")

STOPWORDS = frozenset(
    {
        # 관사/접속사/전치사
        "the",
        "a",
        "an",
        "and",
        "or",
        "but",
        "in",
        "on",
        "at",
        "to",
        "for",
        "of",
        "with",
        "by",
        # 마케팅 수식어
        "edition",
        "game",
        "complete",
        "definitive",
        "ultimate",
        "deluxe",
        "special",
        "standard",
    }
)

MIN_KEYWORD_LENGTH = 3


def normalize_title(text: str) -> str:
    """
    비교용 제목 정규화

    예시:
    - "Hollow Knight™: Voidheart" -> "hollow knight voidheart"
    - "Tom Clancy's Rainbow Six®" -> "tom clancys rainbow six"
    - "Metal Gear Solid Δ: Snake Eater" -> "metal gear solid delta snake eater"

    Args:
        text: 원본 제목

    Returns:
        소문자/기호 제거/공백 정리된 문자열 (여러 번 적용해도 결과 동일)
    """
    if not text:
        return ""

    normalized = text.lower()
    normalized = _TRADEMARK_PATTERN.sub("", normalized)
    normalized = _SEPARATOR_PATTERN.sub(" ", normalized)
    for glyph, word in _GREEK_WORDS.items():
        normalized = normalized.replace(glyph, word)
    normalized = _NON_WORD_PATTERN.sub("", normalized)
    # 기호 제거 후 생긴 이중 공백까지 정리해야 멱등성이 유지됨
    normalized = _WHITESPACE_PATTERN.sub(" ", normalized)

    return normalized.strip()


def extract_keywords(text: str) -> list[str]:
    """매칭용 키워드 추출.

    정규화 후 불용어와 2글자 이하 토큰을 제거합니다. 원래 순서를 유지합니다.
    """
    normalized = normalize_title(text)
    if not normalized:
        return []
    return [
        word
        for word in normalized.split(" ")
        if len(word) >= MIN_KEYWORD_LENGTH and word not in STOPWORDS
    ]


def build_fallback_query(text: str, limit: int = 3) -> str:
    """전체 제목 검색이 실패했을 때 쓰는 넓은 검색어 (상위 키워드만)"""
    return " ".join(extract_keywords(text)[:limit])
