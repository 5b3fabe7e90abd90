"""Session state for the sleep tracker screen.

Call context:
    ``sleeptracker.app.main.App`` builds one
    ``SleepTrackerVM`` per screen and binds its observable values to
    ``SleepTrackerView``. Button callbacks call ``start``/``stop``/``clear``;
    the view acknowledges one-shot signals once it has acted on them.

Dependencies:
    Store access goes through use-case objects; background work runs on a
    ``TaskRunner`` owned by this instance and is cancelled by ``dispose``.
    Operations hold one lock while they run, so a runner with several
    workers still executes them one at a time.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Any, Callable, List, Optional, TypeVar

from ..domain.entities import SleepNight
from ..domain.ports import SleepStorePort, Unsubscribe, UseCaseError
from ..domain.time_utils import now_millis
from ..usecases.clear_nights import ClearNights
from ..usecases.error_mapping import map_store_error
from ..usecases.get_tonight import GetTonight
from ..usecases.load_nights import LoadNights
from ..usecases.start_night import StartNight
from ..usecases.stop_night import StopNight
from ..utils.task_runner import TaskRunner
from .live_value import DerivedValue, LiveValue, Signal
from .night_format import format_nights

T = TypeVar("T")

Dispatch = Callable[[Callable[[], None]], None]
Formatter = Callable[[List[SleepNight]], List[str]]


def _run_inline(fn: Callable[[], None]) -> None:
    fn()


class SleepTrackerVM:
    """Holds tonight's night, the history projection and one-shot UI signals.

    Observable state:
        tonight: Night in progress, or ``None``.
        nights: All nights as returned by the store, refreshed on every store change.
        nights_text: ``nights`` run through the formatter.
        start_button_enabled / stop_button_enabled / clear_button_enabled:
            Derived flags for the three buttons.
        navigation_request: Stopped night awaiting the quality screen.
        notification_request: ``True`` after the history has been cleared.
        operation_failed: Last ``UseCaseError`` raised by a store operation.

    Every store operation returns a ``Future``; failures are also published on
    ``operation_failed`` so views without a handle on the future still see them.
    """

    def __init__(
        self,
        store: SleepStorePort,
        *,
        runner: Optional[TaskRunner] = None,
        dispatch: Optional[Dispatch] = None,
        formatter: Formatter = format_nights,
        clock: Callable[[], int] = now_millis,
        autoload: bool = True,
    ) -> None:
        """Bind the store and start loading state.

        Args:
            store: Record store port.
            runner: Task runner to own; a single-worker runner is created when omitted.
            dispatch: Callable that runs a state update on the UI thread
                (for Tk ``lambda fn: root.after(0, fn)``). Defaults to inline.
            formatter: Maps nights to display strings.
            clock: Epoch-millisecond clock used for start/stop stamps.
            autoload: Schedule ``initialize`` immediately.
        """
        self._log = logging.getLogger(__name__)
        self._store = store
        self._runner = runner or TaskRunner(max_workers=1, name="sleep-tracker")
        self._dispatch: Dispatch = dispatch or _run_inline
        self._disposed = False
        self._operation_lock = threading.Lock()
        self._refresh_lock = threading.Lock()
        # Authoritative copy of tonight, only touched on the runner thread.
        self._current: Optional[SleepNight] = None

        self._get_tonight = GetTonight(store)
        self._load_nights = LoadNights(store)
        self._start_night = StartNight(store, clock=clock)
        self._stop_night = StopNight(store, clock=clock)
        self._clear_nights = ClearNights(store)

        self.tonight: LiveValue[Optional[SleepNight]] = LiveValue(None)
        self.nights: LiveValue[List[SleepNight]] = LiveValue([])
        self.nights_text: DerivedValue[List[str]] = self.nights.map(formatter)

        self.start_button_enabled: DerivedValue[bool] = self.tonight.map(lambda night: night is None)
        self.stop_button_enabled: DerivedValue[bool] = self.tonight.map(lambda night: night is not None)
        self.clear_button_enabled: DerivedValue[bool] = self.nights.map(lambda nights: bool(nights))

        self.navigation_request: Signal[SleepNight] = Signal()
        self.notification_request: Signal[bool] = Signal(False)
        self.operation_failed: Signal[UseCaseError] = Signal()

        self._unsubscribe_store: Optional[Unsubscribe] = store.subscribe(self._on_store_changed)

        if autoload:
            self.initialize()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def initialize(self) -> "Future[Optional[SleepNight]]":
        """Load tonight's night and the history from the store."""
        return self._submit("initialize", self._do_initialize)

    def start(self) -> "Future[Optional[SleepNight]]":
        """Insert a new night, then refresh ``tonight`` from the store."""
        return self._submit("start", self._do_start)

    def stop(self) -> "Future[Optional[SleepNight]]":
        """Stop tonight's night; resolves to ``None`` when nothing is in progress."""
        return self._submit("stop", self._do_stop)

    def clear(self) -> "Future[None]":
        """Delete every night and raise the notification signal."""
        return self._submit("clear", self._do_clear)

    def acknowledge_navigation(self) -> None:
        """Mark the pending navigation as handled."""
        self.navigation_request.reset()

    def acknowledge_notification(self) -> None:
        """Mark the cleared-history notification as shown."""
        self.notification_request.reset()

    def acknowledge_failure(self) -> None:
        """Clear the last reported operation failure."""
        self.operation_failed.reset()

    def dispose(self) -> None:
        """Cancel outstanding work and detach from the store. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        if self._unsubscribe_store is not None:
            self._unsubscribe_store()
            self._unsubscribe_store = None
        self._runner.close()
        for derived in (
            self.nights_text,
            self.start_button_enabled,
            self.stop_button_enabled,
            self.clear_button_enabled,
        ):
            derived.detach()
        self._log.debug("SleepTrackerVM disposed")

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __enter__(self) -> "SleepTrackerVM":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()

    # ------------------------------------------------------------------
    # Task bodies (run on the task runner)
    # ------------------------------------------------------------------
    def _do_initialize(self) -> Optional[SleepNight]:
        self._refresh_history()
        tonight = self._get_tonight()
        self._set_current(tonight)
        return tonight

    def _do_start(self) -> Optional[SleepNight]:
        tonight = self._start_night()
        self._set_current(tonight)
        return tonight

    def _do_stop(self) -> Optional[SleepNight]:
        current = self._current
        if current is None or not current.in_progress:
            self._log.debug("stop ignored: no night in progress")
            return None
        stopped = self._stop_night(current)
        self._set_current(stopped)
        self._emit(lambda: self.navigation_request.raise_(stopped))
        return stopped

    def _do_clear(self) -> None:
        self._clear_nights()
        self._set_current(None)
        self._emit(lambda: self.notification_request.raise_(True))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _submit(self, label: str, body: Callable[[], T]) -> "Future[T]":
        if self._disposed:
            raise RuntimeError(f"SleepTrackerVM is disposed; cannot {label}.")
        return self._runner.submit(label, self._guarded, label, body)

    def _guarded(self, label: str, body: Callable[[], T]) -> T:
        try:
            with self._operation_lock:
                return body()
        except Exception as exc:
            error = map_store_error(exc, default_code=f"{label.upper()}_FAILED")
            self._log.warning("%s failed: [%s] %s", label, error.code, error.message)
            self._emit(lambda: self.operation_failed.raise_(error))
            if error is exc:
                raise
            raise error from exc

    def _set_current(self, night: Optional[SleepNight]) -> None:
        self._current = night
        self._publish(self.tonight, night)

    def _publish(self, target: LiveValue, value: Any) -> None:
        self._emit(lambda: target.set(value))

    def _emit(self, update: Callable[[], None]) -> None:
        """Dispatch ``update`` unless disposed; re-checked when it runs."""
        if self._disposed:
            return

        def _apply() -> None:
            if not self._disposed:
                update()

        self._dispatch(_apply)

    def _refresh_history(self) -> None:
        # Publishes in the order the loads happened.
        with self._refresh_lock:
            self._publish(self.nights, self._load_nights())

    def _on_store_changed(self) -> None:
        if self._disposed:
            return
        try:
            self._refresh_history()
        except UseCaseError as exc:
            self._log.warning("History refresh failed: [%s] %s", exc.code, exc.message)
            self._emit(lambda err=exc: self.operation_failed.raise_(err))


__all__ = ["SleepTrackerVM"]
