"""Steam 상점 페이지 - HTML 파싱 유틸.

이 모듈은 네트워크(fetch)와 분리된 순수 파싱 로직을 담습니다.
구조적 앵커가 없으면 해당 필드만 None이 되며 예외를 던지지 않습니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, List

from selectolax.lexbor import LexborHTMLParser, LexborNode

from src.schemas.steam_schema import SteamMetadata, SteamReviewData, SteamTagsData


# 리뷰 섹션 컨테이너: 신규 레이아웃 → 구 레이아웃 순으로 시도
REVIEW_CONTAINER_SELECTORS = (
    ".review_score_summaries .review_summary_ctn",
    ".summary_section",
)

RECENT_REVIEWS_LABEL = "Recent Reviews:"
OVERALL_REVIEWS_LABEL = "Overall Reviews:"
ENGLISH_REVIEWS_LABEL = "English Reviews:"

POPULAR_TAGS_SELECTOR = ".glance_tags.popular_tags a"
PRICE_SELECTOR = ".game_purchase_price, .discount_final_price"
DISCOUNT_SELECTOR = ".discount_pct"
RELEASE_DATE_SELECTOR = ".release_date .date"


@dataclass
class StorePageData:
    reviews: SteamReviewData
    tags: SteamTagsData
    metadata: SteamMetadata


def is_unavailable_page(html: str) -> bool:
    """'이용 불가' 안내 페이지 판별 (네트워크 실패와 구분)"""
    if not html:
        return False
    return "error" in html and "not available" in html


def _node_text(node: Optional[LexborNode]) -> Optional[str]:
    if node is None:
        return None
    text = (node.text() or "").strip()
    return text or None


def _find_review_text(parser: LexborHTMLParser, label: str) -> Optional[str]:
    for selector in REVIEW_CONTAINER_SELECTORS:
        for section in parser.css(selector):
            title = _node_text(section.css_first(".title"))
            if title != label:
                continue
            text = _node_text(section.css_first(".game_review_summary"))
            if text:
                return text
    return None


def extract_review_data(parser: LexborHTMLParser) -> SteamReviewData:
    """최근/전체 리뷰 요약 추출 ("Overall" 없으면 "English" 라벨 사용).

    최근 리뷰로 전체 리뷰를 채우는 보정은 여기서 하지 않습니다.
    """
    recent = _find_review_text(parser, RECENT_REVIEWS_LABEL)
    overall = _find_review_text(parser, OVERALL_REVIEWS_LABEL)
    if not overall:
        overall = _find_review_text(parser, ENGLISH_REVIEWS_LABEL)

    return SteamReviewData(steam_all_review=overall, steam_recent_review=recent)


def extract_tags_data(parser: LexborHTMLParser) -> SteamTagsData:
    tags: List[str] = []
    for node in parser.css(POPULAR_TAGS_SELECTOR):
        text = _node_text(node)
        if text:
            tags.append(text)
    return SteamTagsData(steam_popular_tags=tags or None)


def extract_metadata(parser: LexborHTMLParser) -> SteamMetadata:
    return SteamMetadata(
        steam_price=_node_text(parser.css_first(PRICE_SELECTOR)),
        steam_discount=_node_text(parser.css_first(DISCOUNT_SELECTOR)),
        steam_release_date=_node_text(parser.css_first(RELEASE_DATE_SELECTOR)),
    )


def parse_store_page(html: str) -> StorePageData:
    parser = LexborHTMLParser(html or "<html></html>")
    return StorePageData(
        reviews=extract_review_data(parser),
        tags=extract_tags_data(parser),
        metadata=extract_metadata(parser),
    )
