"""검색어 확장 + 검색 API 클라이언트 테스트"""
import pytest

from src.core.config import settings
from src.crawlers.steam.search import SteamSearchClient, build_search_queries
from tests.fixtures import SEARCH_PAYLOADS, html_reply, json_reply


class TestBuildSearchQueries:
    """검색어 확장 순서"""

    def test_full_title_then_keywords(self) -> None:
        assert build_search_queries("The Legend of Zelda: Breath of the Wild") == [
            "The Legend of Zelda: Breath of the Wild",
            "legend zelda breath",
        ]

    def test_duplicate_keyword_query_dropped(self) -> None:
        # 키워드 검색어가 제목과 대소문자만 다르면 생략
        assert build_search_queries("Hollow Knight") == ["Hollow Knight"]

    def test_delta_variant_added_last(self) -> None:
        assert build_search_queries("Metal Gear Solid Delta: Snake Eater") == [
            "Metal Gear Solid Delta: Snake Eater",
            "metal gear solid",
            "Metal Gear Solid Δ: Snake Eater",
        ]

    def test_delta_inside_word_ignored(self) -> None:
        assert build_search_queries("Deltarune") == ["Deltarune"]

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_blank_title(self, title) -> None:
        assert build_search_queries(title) == []


@pytest.mark.asyncio
class TestSteamSearchClient:
    """SteamSearchClient.search"""

    async def test_build_search_url(self, make_fetcher) -> None:
        _, fetcher = make_fetcher(lambda url: json_reply({}))
        client = SteamSearchClient(fetcher)

        url = client.build_search_url("  Hollow Knight ")

        assert url.startswith(settings.steam_search_url + "?")
        assert "term=Hollow+Knight" in url
        assert "cc=us" in url
        assert "l=en" in url

    async def test_search_returns_items_in_order(self, make_fetcher) -> None:
        _, fetcher = make_fetcher(lambda url: json_reply(SEARCH_PAYLOADS["hollow_knight"]))

        items = await SteamSearchClient(fetcher).search("Hollow Knight")

        assert [i.id for i in items] == [371700, 367520, 1030300]
        assert items[1].name == "Hollow Knight"
        assert items[1].type == "app"
        assert items[1].aux_flags["metascore"] == "87"

    async def test_malformed_items_skipped(self, make_fetcher) -> None:
        _, fetcher = make_fetcher(lambda url: json_reply(SEARCH_PAYLOADS["malformed_items"]))

        items = await SteamSearchClient(fetcher).search("Celeste")

        assert [(i.id, i.name) for i in items] == [(504230, "Celeste")]

    async def test_missing_items_list(self, make_fetcher) -> None:
        _, fetcher = make_fetcher(lambda url: json_reply({"total": 0}))
        assert await SteamSearchClient(fetcher).search("Hollow Knight") == []

    async def test_exhausted_retries_treated_as_no_results(self, make_fetcher, sleep_recorder) -> None:
        client, fetcher = make_fetcher(lambda url: html_reply("unavailable", 503))

        items = await SteamSearchClient(fetcher).search("Hollow Knight")

        assert items == []
        assert len(client.calls) == 3
        assert sleep_recorder.delays == [1.0, 2.0]

    async def test_invalid_json_treated_as_no_results(self, make_fetcher) -> None:
        _, fetcher = make_fetcher(lambda url: html_reply("<html></html>"))
        assert await SteamSearchClient(fetcher).search("Hollow Knight") == []

    async def test_blank_term_skips_request(self, make_fetcher) -> None:
        client, fetcher = make_fetcher(lambda url: json_reply(SEARCH_PAYLOADS["hollow_knight"]))

        assert await SteamSearchClient(fetcher).search("  ") == []
        assert client.calls == []
