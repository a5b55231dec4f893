"""
Tests for text normalization and matching helpers.
"""

import pytest

from core.utils import (
    count_token_hits,
    fuzzy_contains,
    join_normalized,
    normalize_text,
    normalize_tokens,
    unique,
)


class TestNormalizeText:

    @pytest.mark.parametrize("raw,expected", [
        ("  F.C. Barcelona (Home) ", "f c barcelona home"),
        ("Atlético Madrid", "atletico madrid"),
        ("Yeezy   DOVE-hoodie", "yeezy dove hoodie"),
        ("", ""),
        (None, ""),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_text(raw) == expected

    def test_normalize_tokens_drops_empty(self):
        assert normalize_tokens(["Nike", "  ", "!!", "Zara"]) == ["nike", "zara"]

    def test_join_normalized_skips_missing(self):
        assert join_normalized("Black Hoodie", None, "", "images/Top_01.jpg") == "black hoodie images top 01 jpg"


class TestMatching:

    def test_fuzzy_contains_both_directions(self):
        assert fuzzy_contains("barcelona", "fc barcelona")
        assert fuzzy_contains("fc barcelona", "barcelona")
        assert not fuzzy_contains("real madrid", "barcelona")

    def test_fuzzy_contains_empty_never_matches(self):
        assert not fuzzy_contains("", "barcelona")
        assert not fuzzy_contains("barcelona", "")

    def test_count_token_hits(self):
        assert count_token_hits("timberland 6 inch boots", ["timberland", "boots", "nike"]) == 2
        assert count_token_hits("", ["anything"]) == 0
        assert count_token_hits("text", ["", "text"]) == 1

    def test_unique_keeps_order(self):
        assert unique(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
