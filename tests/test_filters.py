"""Tests for filters module."""
import pytest

from incremental_search.filters import (
    filter_and_rank,
    generate_suggestions,
    highlight_matches,
    matches_query,
)

USER_FIELDS = ["name", "email", "role"]


class TestFilterAndRank:
    def test_blank_query_passes_through(self, users):
        for query in ("", "   "):
            results = filter_and_rank(users, query, USER_FIELDS)
            assert results == users

    def test_titles_tie_keeps_input_order(self):
        items = [{"title": "Joanna"}, {"title": "John"}, {"title": "Bob"}]
        results = filter_and_rank(items, "jo", ["title"])
        assert [r["title"] for r in results] == ["Joanna", "John"]

    def test_and_semantics(self, users):
        results = filter_and_rank(users, "john customer", USER_FIELDS)
        assert [r["id"] for r in results] == ["u2"]

        assert filter_and_rank(users, "john admin", USER_FIELDS) == []

    def test_tokens_may_match_different_fields(self, users):
        results = filter_and_rank(users, "stone customer", USER_FIELDS)
        assert [r["id"] for r in results] == ["u3"]

    def test_stronger_match_ranks_first(self, products):
        fields = ["title", "category", "subtitle", "description"]
        results = filter_and_rank(products, "classic", fields)
        # Prefix of "Classic Tee" beats a word inside the hoodie description
        assert [r["id"] for r in results] == ["p1", "p4"]

    def test_nested_fields(self, users):
        results = filter_and_rank(users, "austin", ["name", "address.city"])
        assert [r["id"] for r in results] == ["u2"]

    def test_no_match(self, users):
        assert filter_and_rank(users, "xyznonexistent", USER_FIELDS) == []

    def test_does_not_mutate_input(self, users):
        before = [dict(u) for u in users]
        filter_and_rank(users, "example", USER_FIELDS)
        assert users == before

    def test_repeatable(self, products):
        fields = ["title", "description"]
        first = filter_and_rank(products, "co", fields)
        second = filter_and_rank(products, "co", fields)
        assert first == second


class TestGenerateSuggestions:
    def test_blank_query_is_empty(self, users):
        assert generate_suggestions(users, "", USER_FIELDS, 5) == []
        assert generate_suggestions(users, "  ", USER_FIELDS, 5) == []

    def test_truncates(self, users):
        # every user has an example.com email
        results = generate_suggestions(users, "example", USER_FIELDS, 2)
        assert len(results) == 2

    def test_same_order_as_filter(self, users):
        full = filter_and_rank(users, "o", USER_FIELDS)
        assert generate_suggestions(users, "o", USER_FIELDS, 3) == full[:3]

    def test_default_limit_is_five(self):
        items = [{"title": f"item {i}"} for i in range(8)]
        assert len(generate_suggestions(items, "item", ["title"])) == 5


class TestHighlightMatches:
    def test_wraps_each_token(self):
        assert highlight_matches("John Thomas", "john t") == "<mark>John</mark> <mark>T</mark>homas"

    def test_case_insensitive_preserves_original_case(self):
        assert highlight_matches("COFFEE mug", "coffee") == "<mark>COFFEE</mark> mug"

    def test_every_occurrence(self):
        assert highlight_matches("banana", "an") == "b<mark>an</mark><mark>an</mark>a"

    def test_escapes_regex_characters(self):
        assert highlight_matches("Price (USD) $5.00", "(usd) $5.") == "Price <mark>(USD)</mark> <mark>$5.</mark>00"

    @pytest.mark.parametrize("text,query", [("", "john"), ("John", ""), ("John", "   ")])
    def test_nothing_to_do(self, text, query):
        assert highlight_matches(text, query) == text

    def test_custom_tags(self):
        assert highlight_matches("Mug", "mu", "**", "**") == "**Mu**g"


class TestMatchesQuery:
    def test_blank_query_matches(self, users):
        assert matches_query(users[0], "", USER_FIELDS)

    def test_all_tokens_required(self, users):
        assert matches_query(users[1], "john customer", USER_FIELDS)
        assert not matches_query(users[1], "john admin", USER_FIELDS)

    def test_agrees_with_filter(self, users):
        for query in ("jo", "example", "mary admin", "st", "zzz"):
            kept = filter_and_rank(users, query, USER_FIELDS)
            assert [u for u in users if matches_query(u, query, USER_FIELDS)] == [
                u for u in users if u in kept
            ]
