"""Reactive search engine: debounced query state over a live collection.

Example:
    products = Cell([...])
    search = create_search_engine(products, SearchConfig(
        fields=["title", "category", "description"],
        get_label=lambda p: p["title"],
        get_key=lambda p: p["id"],
        debounce_ms=300,
    ))
    search.set_query("blue mug")
    search.suggestions()  # follows every keystroke
    search.filtered()     # follows once typing pauses for 300ms

Without a running event loop no timer fires, so the filtered view follows
only after search.flush().
"""
import asyncio
import sys
from contextlib import contextmanager
from typing import Any, Callable, Generic, Iterator, List, Optional, Sequence, TypeVar, Union

from incremental_search.filters import filter_and_rank, generate_suggestions, highlight_matches
from incremental_search.reactive import Cell, Debouncer
from incremental_search.search_types import Listener, SearchConfig, SearchEngine

T = TypeVar("T")

ItemsSource = Union[Cell, Callable[[], Sequence[Any]]]


class ReactiveSearchEngine(Generic[T]):
    """Search state for one search box.

    ``query`` follows every keystroke and drives the suggestion panel;
    ``debounced_query`` trails it by ``config.debounce_ms`` and drives the
    full filtered list. Derived views are recomputed on every read against
    the current contents of the items source.
    """

    def __init__(
        self,
        items: ItemsSource,
        config: SearchConfig[T],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        if not callable(items):
            raise ValueError("items must be a callable returning the current records")

        self.config = config
        self._items = items

        self._query: Cell[str] = Cell("")
        self._debounced_query: Cell[str] = Cell("")
        self._active_index: Cell[int] = Cell(-1)
        self._is_open: Cell[bool] = Cell(False)

        self._listeners: List[Listener] = []
        self._batch_depth = 0
        self._dirty = False
        self._destroyed = False

        self._debouncer: Debouncer[str] = Debouncer(
            config.debounce_ms, self._debounced_query.set, loop=loop
        )

        self._unsubscribes = [
            cell.subscribe(lambda _value: self._changed())
            for cell in (self._query, self._debounced_query, self._active_index, self._is_open)
        ]
        subscribe = getattr(items, "subscribe", None)
        if callable(subscribe):
            self._unsubscribes.append(subscribe(lambda *_args: self._items_changed()))

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after any state or collection change.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        if self._destroyed:
            return
        if self._batch_depth:
            self._dirty = True
            return
        for listener in list(self._listeners):
            listener()

    def _items_changed(self) -> None:
        if self._destroyed:
            return
        with self._batch():
            self._dirty = True
            self._clamp_active_index()

    def _clamp_active_index(self) -> int:
        # A shrunken suggestion list drops the highlight for good
        index = self._active_index()
        if index >= 0 and index >= len(self.suggestions()):
            self._active_index.set(-1)
            return -1
        return index

    @contextmanager
    def _batch(self) -> Iterator[None]:
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            if not self._batch_depth and self._dirty:
                self._dirty = False
                self._changed()

    def _alive(self, command: str) -> bool:
        if self._destroyed:
            print(f"[SearchEngine] Ignoring {command}() on a destroyed engine", file=sys.stderr)
            return False
        return True

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def items(self) -> List[T]:
        return list(self._items() or [])

    def query(self) -> str:
        return self._query()

    def debounced_query(self) -> str:
        return self._debounced_query()

    def filtered(self) -> List[T]:
        return filter_and_rank(self.items(), self._debounced_query(), self.config.fields)

    def suggestions(self) -> List[T]:
        if not self.config.enable_suggestions:
            return []
        # Suggestions use the immediate query so the panel keeps up with typing
        return generate_suggestions(
            self.items(),
            self._query(),
            self.config.fields,
            self.config.max_suggestions,
        )

    def active_index(self) -> int:
        return self._clamp_active_index()

    def active_suggestion(self) -> Optional[T]:
        """The highlighted suggestion, or None."""
        index = self.active_index()
        if index < 0:
            return None
        suggestions = self.suggestions()
        if index >= len(suggestions):
            return None
        return suggestions[index]

    def is_open(self) -> bool:
        return self._is_open()

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def get_label(self, item: T) -> str:
        return self.config.get_label(item)

    def get_key(self, item: T) -> str:
        return self.config.get_key(item)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_query(self, value: str) -> None:
        """Update the query; the filtered view follows after the debounce delay."""
        if not self._alive("set_query"):
            return

        value = value or ""
        with self._batch():
            self._query.set(value)
            self._active_index.set(-1)
            # Auto-open suggestions if the query is not blank
            self._is_open.set(self.config.enable_suggestions and bool(value.strip()))
        self._debouncer.schedule(value)

    def select_suggestion(self, item: T) -> None:
        """Accept a suggestion, updating both queries without waiting."""
        if not self._alive("select_suggestion"):
            return

        label = self.config.get_label(item)
        self._debouncer.cancel()
        with self._batch():
            self._query.set(label)
            self._debounced_query.set(label)
            self._is_open.set(False)
            self._active_index.set(-1)

    def move_selection(self, delta: int) -> None:
        """Move the highlighted suggestion, wrapping through "nothing highlighted"."""
        if not self._alive("move_selection"):
            return

        count = len(self.suggestions())
        if count == 0:
            return

        next_index = self.active_index() + delta
        if next_index < -1:
            next_index = count - 1
        elif next_index >= count:
            next_index = -1

        self._active_index.set(next_index)

    def reset_selection(self) -> None:
        if not self._alive("reset_selection"):
            return
        self._active_index.set(-1)

    def open_suggestions(self) -> None:
        if not self._alive("open_suggestions"):
            return
        if self.config.enable_suggestions and self._query().strip():
            self._is_open.set(True)

    def close_suggestions(self) -> None:
        if not self._alive("close_suggestions"):
            return
        with self._batch():
            self._is_open.set(False)
            self._active_index.set(-1)

    def flush(self) -> None:
        """Apply a pending debounced query immediately."""
        if not self._alive("flush"):
            return
        self._debouncer.flush()

    def highlight(self, text: str, query_override: Optional[str] = None) -> str:
        query = query_override if query_override is not None else self._query()
        return highlight_matches(text, query)

    def destroy(self) -> None:
        """Cancel the pending debounce timer and drop every subscription."""
        if self._destroyed:
            return
        self._debouncer.close()
        for unsubscribe in self._unsubscribes:
            unsubscribe()
        self._unsubscribes = []
        self._listeners = []
        self._destroyed = True


def create_search_engine(
    items: ItemsSource,
    config: SearchConfig[T],
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> ReactiveSearchEngine[T]:
    """Create a search engine bound to a live items source.

    Args:
        items: Zero-argument callable returning the current records, such as a Cell
        config: Search configuration
        loop: Event loop for the debounce timer (defaults to the running loop)

    Returns:
        Search engine instance
    """
    return ReactiveSearchEngine(items, config, loop=loop)


def handle_search_keyboard(event: Any, search: SearchEngine) -> bool:
    """Handle keyboard navigation for a search input.

    Args:
        event: Key name (e.g. "ArrowDown") or an event object with a ``key`` attribute
        search: Search engine instance

    Returns:
        True if the engine acted on the key, so default handling can be suppressed
    """
    key = event if isinstance(event, str) else getattr(event, "key", None)

    if key == "ArrowDown":
        search.move_selection(1)
        return True

    if key == "ArrowUp":
        search.move_selection(-1)
        return True

    if key == "Enter":
        suggestions = search.suggestions()
        active_index = search.active_index()
        if 0 <= active_index < len(suggestions):
            search.select_suggestion(suggestions[active_index])
            return True
        return False

    if key == "Escape":
        search.close_suggestions()
        return True

    return False
