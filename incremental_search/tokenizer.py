"""Tokenization utilities for search queries and record fields."""
from typing import Any, List, Mapping, Sequence


def tokenize(query: str) -> List[str]:
    """Tokenize a search query into normalized tokens.

    Args:
        query: The search query string

    Returns:
        List of lowercase tokens, in query order, duplicates kept

    Example:
        tokenize("john t") -> ["john", "t"]
        tokenize("  Mary   Jane  ") -> ["mary", "jane"]
    """
    if not query or not isinstance(query, str):
        return []

    return query.lower().split()


def _resolve(value: Any, part: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(part)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        try:
            return value[int(part)]
        except (ValueError, IndexError):
            return None
    return getattr(value, part, None)


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def get_field_value(item: Any, field: str) -> str:
    """Extract a field value from an item, following nested paths.

    Args:
        item: The record (mapping, sequence or plain object)
        field: The field path (e.g. 'name' or 'user.name')

    Returns:
        The field value as a string, or empty string if not found
    """
    if item is None:
        return ""

    value = item
    for part in field.split("."):
        value = _resolve(value, part)
        if value is None:
            return ""

    return _to_text(value)


def extract_searchable_values(item: Any, fields: Sequence[str]) -> List[str]:
    """Extract all searchable values from an item.

    Args:
        item: The record to extract from
        fields: Field paths to extract

    Returns:
        Lowercase non-empty values, in field order
    """
    values = (get_field_value(item, field) for field in fields)
    return [value.lower() for value in values if value]
