"""Core types for the incremental search engine."""
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from typing import Any, Callable, Generic, List, Optional, Protocol, TypeVar

T = TypeVar("T")


@total_ordering
class MatchType(Enum):
    """How strongly a token matches a field value.

    Members compare by strength: ``STARTS_WITH > WORD_START > SUBSTRING > NO_MATCH``.
    """
    STARTS_WITH = "starts_with"  # "john" matches "John Smith"
    WORD_START = "word_start"    # "smith" matches "John Smith"
    SUBSTRING = "substring"      # "oh" matches "John"
    NO_MATCH = "no_match"

    @property
    def rank(self) -> int:
        return _MATCH_RANK[self]

    def __lt__(self, other: "MatchType") -> bool:
        if not isinstance(other, MatchType):
            return NotImplemented
        return self.rank < other.rank


_MATCH_RANK = {
    MatchType.NO_MATCH: 0,
    MatchType.SUBSTRING: 1,
    MatchType.WORD_START: 2,
    MatchType.STARTS_WITH: 3,
}


@dataclass
class ScoredItem(Generic[T]):
    """A record with the score it earned in one ranking pass."""
    item: T
    score: int
    match_type: MatchType
    matched_fields: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SearchConfig(Generic[T]):
    """Configuration for a search engine instance.

    Args:
        fields: Dot-separated paths to search across (e.g. ``["name", "address.city"]``)
        get_label: Returns the display label used when a suggestion is accepted
        get_key: Returns a unique identifier for list rendering
        debounce_ms: Quiet period before the filtered view follows the query
        max_suggestions: Maximum number of suggestions to show
        enable_suggestions: Enable/disable the suggestion panel

    Raises:
        ValueError: If the configuration can never produce sensible results
    """
    fields: List[str]
    get_label: Callable[[T], str]
    get_key: Callable[[T], str]
    debounce_ms: int = 200
    max_suggestions: int = 5
    enable_suggestions: bool = True

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError("fields must name at least one field path")
        if any(not isinstance(f, str) or not f for f in self.fields):
            raise ValueError(f"fields must be non-empty strings, got {self.fields!r}")
        if not callable(self.get_label) or not callable(self.get_key):
            raise ValueError("get_label and get_key must be callable")
        if isinstance(self.debounce_ms, bool) or not isinstance(self.debounce_ms, int) or self.debounce_ms < 0:
            raise ValueError(f"debounce_ms must be a non-negative integer, got {self.debounce_ms!r}")
        if isinstance(self.max_suggestions, bool) or not isinstance(self.max_suggestions, int) or self.max_suggestions <= 0:
            raise ValueError(f"max_suggestions must be a positive integer, got {self.max_suggestions!r}")
        # Own a copy of the caller's list
        object.__setattr__(self, "fields", list(self.fields))


class SearchEngine(Protocol[T]):
    """Protocol for search engines to allow alternative implementations."""

    def query(self) -> str: ...

    def debounced_query(self) -> str: ...

    def filtered(self) -> List[T]: ...

    def suggestions(self) -> List[T]: ...

    def active_index(self) -> int: ...

    def is_open(self) -> bool: ...

    def set_query(self, value: str) -> None: ...

    def select_suggestion(self, item: T) -> None: ...

    def move_selection(self, delta: int) -> None: ...

    def reset_selection(self) -> None: ...

    def open_suggestions(self) -> None: ...

    def close_suggestions(self) -> None: ...

    def highlight(self, text: str, query_override: Optional[str] = None) -> str: ...

    def destroy(self) -> None: ...


Listener = Callable[[], Any]
