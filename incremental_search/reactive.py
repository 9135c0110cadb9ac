"""Observable state cells and a trailing-edge debouncer.

A ``Cell`` holds one value and notifies subscribers when it changes. Calling
a cell returns its current value, so a cell can be passed anywhere a
zero-argument getter is expected (for example as the live items source of a
search engine).

The ``Debouncer`` schedules its callback on an asyncio event loop with
``call_later`` and keeps a single timer handle: each new ``schedule`` cancels
the previous timer, so only the last value of a burst is delivered. With no
event loop at all the last value waits for an explicit ``flush()``.
"""
import asyncio
from typing import Any, Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")


class Cell(Generic[T]):
    """A mutable value with change notification."""

    def __init__(self, value: T):
        self._value = value
        self._subscribers: List[Callable[[T], Any]] = []

    def __call__(self) -> T:
        return self._value

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Set the value, notifying subscribers if it changed."""
        if value == self._value:
            return
        self._value = value
        for subscriber in list(self._subscribers):
            subscriber(value)

    def update(self, fn: Callable[[T], T]) -> None:
        self.set(fn(self._value))

    def subscribe(self, subscriber: Callable[[T], Any]) -> Callable[[], None]:
        """Register a subscriber.

        Returns:
            A function that removes the subscriber again
        """
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def __repr__(self) -> str:
        return f"Cell({self._value!r})"


class Debouncer(Generic[T]):
    """Delivers the last scheduled value after a quiet period."""

    def __init__(
        self,
        delay_ms: int,
        callback: Callable[[T], Any],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.delay_ms = delay_ms
        self._callback = callback
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending: Optional[T] = None
        self._has_pending = False
        self._closed = False

    @property
    def pending(self) -> bool:
        """True while a value is waiting for its timer."""
        return self._has_pending

    def _get_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        if self._loop is not None and not self._loop.is_closed():
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def schedule(self, value: T) -> None:
        """Cancel any pending delivery and schedule ``value``.

        Without an event loop no timer can fire, so the value stays pending
        until ``flush()``.
        """
        if self._closed:
            return

        self.cancel()
        self._pending = value
        self._has_pending = True

        loop = self._get_loop()
        if loop is not None:
            self._handle = loop.call_later(self.delay_ms / 1000, self._fire)

    def _fire(self) -> None:
        self._handle = None
        if self._closed or not self._has_pending:
            return
        value = self._pending
        self._pending = None
        self._has_pending = False
        self._callback(value)

    def flush(self) -> None:
        """Deliver the pending value now, if there is one."""
        if self._handle is not None:
            self._handle.cancel()
        self._fire()

    def cancel(self) -> None:
        """Drop the pending value without delivering it."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending = None
        self._has_pending = False

    def close(self) -> None:
        """Cancel and refuse any further scheduling."""
        self.cancel()
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed
