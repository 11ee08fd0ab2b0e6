"""Observable value holders for exposing state to UI observers."""

import threading
from typing import Any, Callable, Generic, TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")

# Type alias for subscribers
Subscriber = Callable[[Any], None]
Unsubscribe = Callable[[], None]


class ObservableValue(Generic[T]):
    """Holds the latest value and publishes every change to subscribers.

    New subscribers receive the current value immediately, so late
    subscribers never miss the state they need to render. Writes that do
    not change the value are not published.
    """

    def __init__(self, initial: T, name: str = "value"):
        self.name = name
        self._value = initial
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        """Current value."""
        return self._value

    def set(self, value: T) -> None:
        """Replace the value and notify subscribers if it changed."""
        with self._lock:
            if value == self._value:
                return
            self._value = value
            subscribers = list(self._subscribers)

        for subscriber in subscribers:
            self._safe_call(subscriber, value)

    def subscribe(self, subscriber: Subscriber) -> Unsubscribe:
        """Subscribe to changes. Returns a callable that unsubscribes."""
        with self._lock:
            if subscriber not in self._subscribers:
                self._subscribers.append(subscriber)
                logger.debug("Subscriber added", observable=self.name)
            current = self._value

        self._safe_call(subscriber, current)

        def unsubscribe() -> None:
            self.unsubscribe(subscriber)

        return unsubscribe

    def unsubscribe(self, subscriber: Subscriber) -> None:
        """Remove a subscriber."""
        with self._lock:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)
                logger.debug("Subscriber removed", observable=self.name)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def as_readonly(self) -> "ReadOnlyObservable[T]":
        """Read-only view for consumers."""
        return ReadOnlyObservable(self)

    def clear(self) -> None:
        """Drop all subscribers."""
        with self._lock:
            self._subscribers.clear()

    def _safe_call(self, subscriber: Subscriber, value: T) -> None:
        """Call a subscriber, logging instead of propagating its errors."""
        try:
            subscriber(value)
        except Exception as e:
            logger.error("Subscriber error",
                        observable=self.name,
                        subscriber=getattr(subscriber, "__name__", repr(subscriber)),
                        error=str(e))


class ReadOnlyObservable(Generic[T]):
    """Consumer-side view of an ObservableValue without write access."""

    def __init__(self, source: ObservableValue[T]):
        self._source = source

    @property
    def value(self) -> T:
        return self._source.value

    def subscribe(self, subscriber: Subscriber) -> Unsubscribe:
        return self._source.subscribe(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        self._source.unsubscribe(subscriber)
