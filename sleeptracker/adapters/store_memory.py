"""In-memory sleep store used by tests and as the base of ``StoreLocal``.

Call context:
    ``SleepTrackerVM`` reads and mutates nights through the store from its
    task-runner thread while views may trigger reads from the UI thread, so
    every access goes through one lock. Listeners are invoked outside the lock.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Dict, List, Optional

from sleeptracker.domain.entities import NightId, SleepNight
from sleeptracker.domain.ports import SleepStorePort, StoreListener, Unsubscribe
from .store_errors import RecordNotFoundError, StoreError


class InMemorySleepStore(SleepStorePort):
    """Thread-safe night store with autoincrement keys and change listeners.

    Mutations are staged on a copy and handed to ``_commit_locked`` so a
    subclass that fails to persist leaves the visible state untouched.
    """

    def __init__(self) -> None:
        self._log = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._nights: Dict[NightId, SleepNight] = {}
        self._next_id: NightId = 1
        self._listeners: List[StoreListener] = []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def fetch_latest(self) -> Optional[SleepNight]:
        with self._lock:
            if not self._nights:
                return None
            return replace(self._nights[max(self._nights)])

    def fetch_all(self) -> List[SleepNight]:
        with self._lock:
            return [replace(self._nights[key]) for key in sorted(self._nights, reverse=True)]

    def get(self, night_id: NightId) -> Optional[SleepNight]:
        with self._lock:
            night = self._nights.get(night_id)
            return replace(night) if night is not None else None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def insert(self, night: SleepNight) -> NightId:
        with self._lock:
            if night.night_id is not None and night.night_id in self._nights:
                raise StoreError(
                    f"Night {night.night_id} already exists.",
                    operation="insert",
                    night_id=night.night_id,
                )
            night_id = night.night_id if night.night_id is not None else self._next_id
            staged = dict(self._nights)
            staged[night_id] = night.with_id(night_id)
            self._commit_locked(staged)
            self._next_id = max(self._next_id, night_id + 1)
        self._log.debug("Inserted night %s", night_id)
        self._notify()
        return night_id

    def update(self, night: SleepNight) -> None:
        with self._lock:
            if night.night_id is None or night.night_id not in self._nights:
                raise RecordNotFoundError(night.night_id, operation="update")
            staged = dict(self._nights)
            staged[night.night_id] = replace(night)
            self._commit_locked(staged)
        self._log.debug("Updated night %s", night.night_id)
        self._notify()

    def clear_all(self) -> None:
        with self._lock:
            count = len(self._nights)
            self._commit_locked({})
        self._log.debug("Cleared %d nights", count)
        self._notify()

    def _commit_locked(self, staged: Dict[NightId, SleepNight]) -> None:
        """Replace the visible state; called with the lock held."""
        self._nights = staged

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------
    def subscribe(self, listener: StoreListener) -> Unsubscribe:
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener()


__all__ = ["InMemorySleepStore"]
