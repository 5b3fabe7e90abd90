"""Presenter that binds ``SleepTrackerVM`` observables to a tracker view.

The view is duck-typed (``set_*_enabled``, ``set_history``, ``show_toast``,
``show_error``) so the binding can be exercised without a Tk root.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol

from ..domain.entities import SleepNight
from ..domain.ports import Unsubscribe, UseCaseError
from ..viewmodels.night_format import format_duration
from ..viewmodels.sleep_tracker_vm import SleepTrackerVM


class TrackerView(Protocol):
    def set_start_enabled(self, enabled: bool) -> None: ...
    def set_stop_enabled(self, enabled: bool) -> None: ...
    def set_clear_enabled(self, enabled: bool) -> None: ...
    def set_history(self, blocks: List[str]) -> None: ...
    def show_toast(self, message: str) -> None: ...
    def show_error(self, title: str, message: str) -> None: ...


class TrackerPresenter:
    """Forward VM state to the view and consume one-shot signals.

    ``on_navigate`` receives each stopped night once; without it the presenter
    shows a summary toast and re-initializes the VM so the screen is ready for
    the next night.
    """

    def __init__(
        self,
        vm: SleepTrackerVM,
        view: TrackerView,
        *,
        on_navigate: Optional[Callable[[SleepNight], None]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.vm = vm
        self.view = view
        self._on_navigate = on_navigate
        self._bindings: List[Unsubscribe] = []

    def bind(self) -> None:
        self._bindings = [
            self.vm.start_button_enabled.subscribe(self.view.set_start_enabled),
            self.vm.stop_button_enabled.subscribe(self.view.set_stop_enabled),
            self.vm.clear_button_enabled.subscribe(self.view.set_clear_enabled),
            self.vm.nights_text.subscribe(self.view.set_history),
            self.vm.navigation_request.subscribe(self._handle_navigation),
            self.vm.notification_request.subscribe(self._handle_notification),
            self.vm.operation_failed.subscribe(self._handle_failure),
        ]

    def unbind(self) -> None:
        for unsubscribe in self._bindings:
            unsubscribe()
        self._bindings = []

    # ---- view callbacks ----
    def on_start(self) -> None:
        self.vm.start()

    def on_stop(self) -> None:
        self.vm.stop()

    def on_clear(self) -> None:
        self.vm.clear()

    # ---- signal handlers ----
    def _handle_navigation(self, night: Optional[SleepNight]) -> None:
        if night is None or not self.vm.navigation_request.is_pending:
            return
        stopped = self.vm.navigation_request.take()
        if stopped is None:
            return
        if self._on_navigate is not None:
            self._on_navigate(stopped)
            return
        duration = format_duration(stopped.start_time_milli, stopped.end_time_milli)
        self.view.show_toast(f"Night recorded ({duration}).")
        self.vm.initialize()

    def _handle_notification(self, raised: Optional[bool]) -> None:
        if not raised or not self.vm.notification_request.is_pending:
            return
        self.vm.notification_request.take()
        self.view.show_toast("All your data is gone forever.")

    def _handle_failure(self, error: Optional[UseCaseError]) -> None:
        if error is None or not self.vm.operation_failed.is_pending:
            return
        self.vm.operation_failed.take()
        self._log.error("Operation failed: [%s] %s", error.code, error.message)
        self.view.show_error("Sleep tracker", error.message)


__all__ = ["TrackerPresenter", "TrackerView"]
