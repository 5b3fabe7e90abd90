"""Per-owner background task runner backed by a thread pool.

Each viewmodel owns one ``TaskRunner``; closing it cancels queued work and
rejects new submissions so nothing outlives the owner's scope.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional, TypeVar

T = TypeVar("T")


class TaskRunner:
    """Run callables off the caller's thread and track them until done."""

    def __init__(self, *, max_workers: int = 1, name: str = "sleeptracker") -> None:
        """Create the executor.

        Args:
            max_workers: Worker thread count; ``1`` runs tasks in submission order.
            name: Thread name prefix, also used in log messages.
        """
        if int(max_workers) < 1:
            raise ValueError("max_workers must be >= 1")
        self._log = logging.getLogger(__name__)
        self._name = name
        self._executor = ThreadPoolExecutor(max_workers=int(max_workers), thread_name_prefix=name)
        self._lock = threading.Lock()
        self._pending: Dict[Future, str] = {}
        self._closed = False

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def submit(self, label: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> "Future[T]":
        """Schedule ``fn`` and return its future.

        Raises:
            RuntimeError: If the runner has been closed.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError(f"TaskRunner {self._name!r} is closed; cannot run {label!r}.")
            future = self._executor.submit(fn, *args, **kwargs)
            self._pending[future] = label
        future.add_done_callback(self._on_done)
        return future

    def close(self, *, wait: bool = False) -> None:
        """Cancel queued tasks and shut the executor down. Idempotent."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            pending = list(self._pending)
        for future in pending:
            future.cancel()
        self._executor.shutdown(wait=wait, cancel_futures=True)
        self._log.debug("TaskRunner %s closed (%d tasks pending)", self._name, len(pending))

    def _on_done(self, future: Future) -> None:
        with self._lock:
            label: Optional[str] = self._pending.pop(future, None)
        if future.cancelled():
            self._log.debug("Task %s cancelled", label)
            return
        try:
            exc = future.exception()
        except CancelledError:
            return
        if exc is not None:
            self._log.debug("Task %s failed: %s", label, exc)

    def __enter__(self) -> "TaskRunner":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close(wait=True)


__all__ = ["TaskRunner"]
