"""Ranking and scoring utilities for search results."""
from typing import Callable, Iterable, List, Sequence, TypeVar

from incremental_search.search_types import MatchType, ScoredItem
from incremental_search.tokenizer import tokenize

T = TypeVar("T")

SCORE_WEIGHTS = {
    MatchType.STARTS_WITH: 1000,
    MatchType.WORD_START: 500,
    MatchType.SUBSTRING: 100,
    MatchType.NO_MATCH: 0,
}


def get_match_type(token: str, value: str) -> MatchType:
    """Determine the match type for a token against a field value.

    Priority order:
      1. STARTS_WITH: token matches the beginning of the entire value
      2. WORD_START: token matches the beginning of any word in the value
      3. SUBSTRING: token appears anywhere in the value
      4. NO_MATCH

    Args:
        token: The search token (already lowercase)
        value: The field value (already lowercase)

    Returns:
        The match type
    """
    if not token or not value:
        return MatchType.NO_MATCH

    if value.startswith(token):
        return MatchType.STARTS_WITH

    if any(word.startswith(token) for word in value.split()):
        return MatchType.WORD_START

    if token in value:
        return MatchType.SUBSTRING

    return MatchType.NO_MATCH


def get_best_match_type(token: str, field_values: Iterable[str]) -> MatchType:
    """Return the strongest match type for a token across several values."""
    best = MatchType.NO_MATCH

    for value in field_values:
        match_type = get_match_type(token, value)
        if match_type is MatchType.STARTS_WITH:
            return match_type
        if match_type > best:
            best = match_type

    return best


def score_item(tokens: Sequence[str], field_values: Sequence[str]) -> int:
    """Score an item based on how well it matches the query tokens.

    All tokens must match (AND logic). The score is the sum of each token's
    best match weight; a token matching the same value as another token still
    counts in full.

    Args:
        tokens: Search tokens
        field_values: Searchable values extracted from the item

    Returns:
        Score, 0 if there are no tokens or any token doesn't match
    """
    if not tokens:
        return 0

    total = 0
    for token in tokens:
        match_type = get_best_match_type(token, field_values)
        if match_type is MatchType.NO_MATCH:
            return 0
        total += SCORE_WEIGHTS[match_type]

    return total


def rank_items(
    items: Iterable[T],
    query: str,
    get_values: Callable[[T], List[str]],
) -> List[ScoredItem[T]]:
    """Score and rank items against a search query.

    Args:
        items: Items to score
        query: Search query string
        get_values: Extracts the searchable values of an item

    Returns:
        Matching items sorted by score (descending), ties in input order.
        With an empty query every item is returned unscored.
    """
    tokens = tokenize(query)

    if not tokens:
        return [ScoredItem(item=item, score=0, match_type=MatchType.NO_MATCH) for item in items]

    scored = []
    for item in items:
        field_values = get_values(item)
        score = score_item(tokens, field_values)
        if score <= 0:
            continue

        matched_fields = [
            value for value in field_values
            if any(get_match_type(token, value) is not MatchType.NO_MATCH for token in tokens)
        ]
        match_type = max(get_best_match_type(token, field_values) for token in tokens)

        scored.append(ScoredItem(
            item=item,
            score=score,
            match_type=match_type,
            matched_fields=matched_fields,
        ))

    # list.sort is stable, so equal scores keep their input order
    scored.sort(key=lambda s: s.score, reverse=True)

    return scored


def get_top_items(ranked_items: Sequence[ScoredItem[T]], limit: int) -> List[T]:
    """Return the items of the first ``limit`` ranked results."""
    return [scored.item for scored in ranked_items[:max(limit, 0)]]
