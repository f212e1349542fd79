"""상점 페이지 HTML 파싱 테스트"""
import pytest

from src.crawlers.steam.detail_parsing import is_unavailable_page, parse_store_page
from tests.fixtures import STORE_PAGES


class TestParseStorePage:
    """parse_store_page"""

    def test_full_new_layout(self) -> None:
        page = parse_store_page(STORE_PAGES["full_new_layout"])

        assert page.reviews.steam_recent_review == "Very Positive"
        assert page.reviews.steam_all_review == "Overwhelmingly Positive"
        assert page.tags.steam_popular_tags == ["Metroidvania", "Souls-like", "2D"]
        assert page.metadata.steam_price == "$7.49"
        assert page.metadata.steam_discount == "-50%"
        assert page.metadata.steam_release_date == "24 Feb, 2017"

    def test_old_layout_recent_only(self) -> None:
        page = parse_store_page(STORE_PAGES["old_layout_recent_only"])

        assert page.reviews.steam_recent_review == "Very Positive"
        # 파서는 보정하지 않음
        assert page.reviews.steam_all_review is None
        assert page.metadata.steam_price == "$19.99"
        assert page.metadata.steam_discount is None

    def test_english_reviews_used_as_overall(self) -> None:
        page = parse_store_page(STORE_PAGES["old_layout_english"])

        assert page.reviews.steam_all_review == "Mostly Positive"
        assert page.reviews.steam_recent_review is None

    def test_mixed_layouts(self) -> None:
        page = parse_store_page(STORE_PAGES["mixed_layout"])

        assert page.reviews.steam_recent_review == "Mixed"
        assert page.reviews.steam_all_review == "Mostly Positive"

    @pytest.mark.parametrize("html", [STORE_PAGES["no_anchors"], "", "<html"])
    def test_missing_anchors_yield_none(self, html: str) -> None:
        page = parse_store_page(html)

        assert page.reviews.steam_all_review is None
        assert page.reviews.steam_recent_review is None
        assert page.tags.steam_popular_tags is None
        assert page.metadata.steam_price is None
        assert page.metadata.steam_discount is None
        assert page.metadata.steam_release_date is None


class TestUnavailablePage:
    """is_unavailable_page"""

    def test_unavailable(self) -> None:
        assert is_unavailable_page(STORE_PAGES["unavailable"]) is True

    @pytest.mark.parametrize("key", ["full_new_layout", "old_layout_recent_only", "no_anchors"])
    def test_regular_pages(self, key: str) -> None:
        assert is_unavailable_page(STORE_PAGES[key]) is False

    def test_empty(self) -> None:
        assert is_unavailable_page("") is False
