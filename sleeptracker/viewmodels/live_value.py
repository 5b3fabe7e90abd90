"""Observable value holders bound by views to viewmodel state.

Call context:
    ``SleepTrackerVM`` owns ``LiveValue`` and ``Signal`` instances and the
    Tk view subscribes to them. Values may be set from the task-runner thread;
    callbacks run on the thread that performs the ``set``.

Ordering:
    Observers are notified while the value's lock is held, so concurrent
    ``set`` calls reach every observer in the order they were stored. When an
    observer sets the same value again, the newer value has already gone to
    everyone and the rest of the outer delivery is dropped.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")
R = TypeVar("R")

Observer = Callable[[T], None]
Unsubscribe = Callable[[], None]

_log = logging.getLogger(__name__)


class LiveValue(Generic[T]):
    """Holds one value and notifies subscribers whenever it is set.

    With ``distinct=True`` setting an equal value is silent; otherwise every
    ``set`` re-notifies so views can re-render on in-place changes.
    """

    def __init__(self, initial: T, *, distinct: bool = False) -> None:
        self._value = initial
        self._distinct = distinct
        self._lock = threading.RLock()
        self._observers: List[Observer] = []
        self._generation = 0

    @property
    def value(self) -> T:
        with self._lock:
            return self._value

    def set(self, value: T) -> None:
        with self._lock:
            if self._distinct and value == self._value:
                return
            self._value = value
            self._generation += 1
            self._deliver(value, self._generation)

    def _deliver(self, value: T, generation: int) -> None:
        # Caller holds ``self._lock``.
        for observer in list(self._observers):
            if generation != self._generation:
                return
            try:
                observer(value)
            except Exception:
                _log.exception("LiveValue observer failed")

    def subscribe(self, observer: Observer, *, emit: bool = True) -> Unsubscribe:
        """Register ``observer``; with ``emit`` it immediately receives the current value."""
        with self._lock:
            self._observers.append(observer)
            if emit:
                observer(self._value)

        def _unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return _unsubscribe

    @property
    def observer_count(self) -> int:
        with self._lock:
            return len(self._observers)

    def map(self, fn: Callable[[T], R], *, distinct: bool = True) -> "DerivedValue[R]":
        """Return a read-only value that tracks ``fn(self.value)``."""
        return DerivedValue(self, fn, distinct=distinct)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class DerivedValue(LiveValue[R]):
    """Read-only ``LiveValue`` recomputed from a source on every change."""

    def __init__(self, source: LiveValue, fn: Callable, *, distinct: bool = True) -> None:
        super().__init__(fn(source.value), distinct=distinct)
        self._fn = fn
        self._detach: Optional[Unsubscribe] = source.subscribe(self._on_source, emit=False)

    def _on_source(self, value) -> None:
        LiveValue.set(self, self._fn(value))

    def set(self, value: R) -> None:
        raise AttributeError("DerivedValue is read-only; set its source instead.")

    def detach(self) -> None:
        """Stop tracking the source."""
        if self._detach is not None:
            self._detach()
            self._detach = None


class Signal(LiveValue[Optional[T]]):
    """One-shot event with an explicit pending/consumed state.

    ``raise_`` publishes a payload, ``take`` hands it to exactly one consumer
    and clears it, ``reset`` clears without reading. A consumed payload is
    never delivered again: once an observer takes it, the observers after it
    receive the empty value only.
    """

    def __init__(self, empty: Optional[T] = None) -> None:
        super().__init__(empty)
        self._empty = empty
        self._pending = False

    @property
    def is_pending(self) -> bool:
        with self._lock:
            return self._pending

    def raise_(self, payload: T) -> None:
        with self._lock:
            self._pending = True
            LiveValue.set(self, payload)

    def take(self) -> Optional[T]:
        """Return the pending payload and clear it; ``empty`` when nothing is pending."""
        with self._lock:
            if not self._pending:
                return self._empty
            payload = self._value
            self._pending = False
            LiveValue.set(self, self._empty)
            return payload

    def reset(self) -> None:
        with self._lock:
            was_pending = self._pending
            self._pending = False
            if was_pending or self._value != self._empty:
                LiveValue.set(self, self._empty)

    def set(self, value: Optional[T]) -> None:
        if value == self._empty:
            self.reset()
        else:
            self.raise_(value)


__all__ = ["DerivedValue", "LiveValue", "Signal"]
