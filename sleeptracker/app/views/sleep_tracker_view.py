"""
SleepTrackerView
----------------
UI-only Tkinter view for the sleep tracker screen.

Features:
- Start / Stop / Clear buttons whose enabled state is driven from outside.
- Scrollable history text listing formatted nights.
- Status line for short notifications.
"""
from __future__ import annotations
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Callable, Iterable, Optional

OnVoid = Optional[Callable[[], None]]


class SleepTrackerView(ttk.Frame):
    """View with three command buttons, a history list and a status line."""

    def __init__(
        self,
        parent: tk.Misc,
        *,
        on_start: OnVoid = None,
        on_stop: OnVoid = None,
        on_clear: OnVoid = None,
    ) -> None:
        super().__init__(parent)
        self._on_start = on_start
        self._on_stop = on_stop
        self._on_clear = on_clear

        self.rowconfigure(1, weight=1)
        self.columnconfigure(0, weight=1)

        self._build_toolbar()
        self._build_history()
        self._build_statusbar()

    # ------------------------------------------------------------------
    def _build_toolbar(self) -> None:
        bar = ttk.Frame(self)
        bar.grid(row=0, column=0, sticky="ew", padx=6, pady=(6, 4))
        self.btn_start = ttk.Button(bar, text="Start", command=lambda: self._safe(self._on_start))
        self.btn_start.pack(side="left")
        self.btn_stop = ttk.Button(bar, text="Stop", command=lambda: self._safe(self._on_stop))
        self.btn_stop.pack(side="left", padx=6)
        self.btn_clear = ttk.Button(bar, text="Clear", command=lambda: self._safe(self._on_clear))
        self.btn_clear.pack(side="right")

    def _build_history(self) -> None:
        frame = ttk.Frame(self)
        frame.grid(row=1, column=0, sticky="nsew", padx=6, pady=4)
        frame.rowconfigure(0, weight=1)
        frame.columnconfigure(0, weight=1)

        self.history = tk.Text(frame, height=20, width=60, wrap="word", state="disabled")
        self.history.grid(row=0, column=0, sticky="nsew")
        scroll = ttk.Scrollbar(frame, orient="vertical", command=self.history.yview)
        scroll.grid(row=0, column=1, sticky="ns")
        self.history.configure(yscrollcommand=scroll.set)

    def _build_statusbar(self) -> None:
        self.status_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.status_var, anchor="w").grid(
            row=2, column=0, sticky="ew", padx=6, pady=(0, 6)
        )

    # ------------------------------------------------------------------
    # Public API used by the presenter
    # ------------------------------------------------------------------
    def set_start_enabled(self, enabled: bool) -> None:
        self._set_enabled(self.btn_start, enabled)

    def set_stop_enabled(self, enabled: bool) -> None:
        self._set_enabled(self.btn_stop, enabled)

    def set_clear_enabled(self, enabled: bool) -> None:
        self._set_enabled(self.btn_clear, enabled)

    def set_history(self, blocks: Iterable[str]) -> None:
        text = "\n\n".join(blocks)
        self.history.configure(state="normal")
        self.history.delete("1.0", "end")
        self.history.insert("1.0", text)
        self.history.configure(state="disabled")

    def show_toast(self, message: str) -> None:
        self.status_var.set(message)

    def show_error(self, title: str, message: str) -> None:
        messagebox.showerror(title, message, parent=self)

    # ------------------------------------------------------------------
    @staticmethod
    def _set_enabled(button: ttk.Button, enabled: bool) -> None:
        button.state(["!disabled"] if enabled else ["disabled"])

    @staticmethod
    def _safe(fn: OnVoid) -> None:
        if fn:
            fn()
