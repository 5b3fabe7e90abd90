# sleeptracker/app/main.py
from __future__ import annotations

import argparse
import logging
import tkinter as tk
from typing import Callable, Optional, Sequence

from ..adapters.store_local import StoreLocal
from ..utils.logging import configure_logging
from ..viewmodels.sleep_tracker_vm import SleepTrackerVM
from .config import AppConfig, load_config
from .tracker_presenter import TrackerPresenter
from .views.sleep_tracker_view import SleepTrackerView


class App:
    """Bootstrap: wire config, store, viewmodel, presenter and the Tk view."""

    def __init__(self, config: Optional[AppConfig] = None) -> None:
        self._log = logging.getLogger(__name__)
        self.config = config or load_config()
        self._closed = False

        self.win = tk.Tk()
        self.win.title("Track My Sleep Quality")
        self.win.protocol("WM_DELETE_WINDOW", self.close)

        # ---- Store ----
        self.store = StoreLocal(self.config.store_path)
        self._log.info("Using sleep store at %s", self.store.store_path)

        # ---- ViewModel ----
        self.vm = SleepTrackerVM(self.store, dispatch=self._on_ui_thread)

        # ---- View + presenter ----
        self.presenter: Optional[TrackerPresenter] = None
        self.view = SleepTrackerView(
            self.win,
            on_start=lambda: self.presenter and self.presenter.on_start(),
            on_stop=lambda: self.presenter and self.presenter.on_stop(),
            on_clear=lambda: self.presenter and self.presenter.on_clear(),
        )
        self.view.pack(fill="both", expand=True)
        self.presenter = TrackerPresenter(self.vm, self.view)
        self.presenter.bind()

    def _on_ui_thread(self, fn: Callable[[], None]) -> None:
        if self._closed:
            return
        self.win.after(0, fn)

    def close(self) -> None:
        self._closed = True
        if self.presenter is not None:
            self.presenter.unbind()
        self.vm.dispose()
        self.win.destroy()


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sleeptracker", description="Track your sleep sessions.")
    parser.add_argument("--config", help="Path to a JSON config file.")
    parser.add_argument("--store", help="Path to the nights JSON store (overrides config).")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_arg_parser().parse_args(argv)
    config = load_config(args.config)
    overrides = {}
    if args.store:
        overrides["store_path"] = args.store
    if args.debug:
        overrides["log_level"] = "DEBUG"
    if overrides:
        config = AppConfig.from_dict({**config.to_dict(), **overrides})
    configure_logging(config.log_level)
    app = App(config)
    app.win.mainloop()


if __name__ == "__main__":
    main()
