"""제목 정규화/키워드 추출 테스트"""
import pytest

from src.utils.text.normalize import build_fallback_query, extract_keywords, normalize_title


class TestNormalizeTitle:
    """normalize_title"""

    def test_trademark_and_separators(self) -> None:
        assert normalize_title("Hollow Knight™: Voidheart Edition") == "hollow knight voidheart edition"

    def test_apostrophe_removed(self) -> None:
        assert normalize_title("Tom Clancy's Rainbow Six® Siege") == "tom clancys rainbow six siege"

    def test_dashes_become_spaces(self) -> None:
        assert normalize_title("Half-Life — Alyx") == "half life alyx"

    def test_greek_letters_mapped_to_words(self) -> None:
        assert normalize_title("METAL GEAR SOLID Δ: SNAKE EATER") == "metal gear solid delta snake eater"
        assert normalize_title("Project α") == "project alpha"

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty(self, raw) -> None:
        assert normalize_title(raw) == ""

    @pytest.mark.parametrize(
        "raw",
        [
            "Hollow Knight™: Voidheart Edition",
            "  DOOM  (2016) !! ",
            "A - B : C",
            "Ori and the Will of the Wisps",
            "Pokémon™ Legends: Arceus",
        ],
    )
    def test_idempotent(self, raw: str) -> None:
        once = normalize_title(raw)
        assert normalize_title(once) == once

    def test_no_double_spaces_after_symbol_removal(self) -> None:
        assert normalize_title("DOOM (2016) !! Remake") == "doom 2016 remake"

    def test_unicode_letters_kept(self) -> None:
        assert normalize_title("Pokémon") == "pokémon"


class TestExtractKeywords:
    """extract_keywords"""

    def test_stopwords_and_short_tokens_removed(self) -> None:
        assert extract_keywords("The Legend of Zelda: Breath of the Wild") == [
            "legend",
            "zelda",
            "breath",
            "wild",
        ]

    def test_marketing_qualifiers_removed(self) -> None:
        assert extract_keywords("Hollow Knight Deluxe Edition") == ["hollow", "knight"]

    def test_order_preserved(self) -> None:
        assert extract_keywords("Snake Eater Metal Gear") == ["snake", "eater", "metal", "gear"]

    def test_only_stopwords(self) -> None:
        assert extract_keywords("The Game of an") == []

    def test_fallback_query_top_three(self) -> None:
        assert build_fallback_query("The Legend of Zelda: Breath of the Wild") == "legend zelda breath"

    def test_fallback_query_empty(self) -> None:
        assert build_fallback_query("") == ""
