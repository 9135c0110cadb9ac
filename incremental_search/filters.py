"""Pure filter functions for search operations."""
import re
from typing import Any, List, Sequence, TypeVar

from incremental_search.rank import get_top_items, rank_items, score_item
from incremental_search.tokenizer import extract_searchable_values, tokenize

T = TypeVar("T")


def _is_blank(query: str) -> bool:
    return not query or not query.strip()


def filter_and_rank(items: Sequence[T], query: str, fields: Sequence[str]) -> List[T]:
    """Filter items by a search query using AND logic across tokens.

    Args:
        items: Items to filter
        query: Search query string
        fields: Field paths to search across

    Returns:
        Matching items in ranked order. A blank query means no active search,
        so every item is returned in its original order.
    """
    if _is_blank(query):
        return list(items)

    ranked = rank_items(items, query, lambda item: extract_searchable_values(item, fields))
    return [scored.item for scored in ranked]


def generate_suggestions(
    items: Sequence[T],
    query: str,
    fields: Sequence[str],
    max_suggestions: int = 5,
) -> List[T]:
    """Return the top ``max_suggestions`` items for a query.

    Unlike ``filter_and_rank``, a blank query yields no suggestions.
    """
    if _is_blank(query):
        return []

    ranked = rank_items(items, query, lambda item: extract_searchable_values(item, fields))
    return get_top_items(ranked, max_suggestions)


def highlight_matches(
    text: str,
    query: str,
    open_tag: str = "<mark>",
    close_tag: str = "</mark>",
) -> str:
    """Wrap every case-insensitive occurrence of a query token in tags.

    Args:
        text: The text to highlight
        query: The search query
        open_tag: Markup inserted before each match
        close_tag: Markup inserted after each match

    Returns:
        Text with matches wrapped, or the text unchanged if there is nothing to match

    Example:
        highlight_matches("John Thomas", "john t")
        -> "<mark>John</mark> <mark>T</mark>homas"
    """
    if not text or _is_blank(query):
        return text

    tokens = tokenize(query)
    if not tokens:
        return text

    pattern = re.compile("|".join(re.escape(token) for token in tokens), re.IGNORECASE)
    return pattern.sub(lambda m: f"{open_tag}{m.group(0)}{close_tag}", text)


def matches_query(item: Any, query: str, fields: Sequence[str]) -> bool:
    """Check if an item matches every query token in at least one field.

    Shares ``score_item`` with ranking, so membership and ranking always agree.
    """
    if _is_blank(query):
        return True

    return score_item(tokenize(query), extract_searchable_values(item, fields)) > 0
