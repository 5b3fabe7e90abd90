from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Protocol

from .entities import NightId, SleepNight

StoreListener = Callable[[], None]
Unsubscribe = Callable[[], None]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, *, meta: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta or {}

    def __repr__(self) -> str:
        return f"UseCaseError(code={self.code!r}, message={self.message!r})"


# ---- Ports (Hexagonal boundaries) ----
class SleepStorePort(Protocol):
    """Persistence for sleep nights.

    The store does not enforce the single in-progress night rule; callers do.
    Listeners registered via ``subscribe`` fire after every successful mutation.
    """

    def fetch_latest(self) -> Optional[SleepNight]: ...  # most recently inserted
    def fetch_all(self) -> List[SleepNight]: ...  # newest first
    def get(self, night_id: NightId) -> Optional[SleepNight]: ...
    def insert(self, night: SleepNight) -> NightId: ...
    def update(self, night: SleepNight) -> None: ...
    def clear_all(self) -> None: ...
    def subscribe(self, listener: StoreListener) -> Unsubscribe: ...
