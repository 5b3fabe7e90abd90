from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from sleeptracker.domain.entities import NightId, SleepNight
from .store_errors import StoreReadError, StoreWriteError
from .store_memory import InMemorySleepStore


class StoreLocal(InMemorySleepStore):
    """Local filesystem store that keeps all nights in one JSON document.

    The whole document is rewritten after every mutation; nights are loaded
    once on construction. Entries that fail to parse are skipped.
    """

    def __init__(self, store_path: Optional[Union[str, Path]] = None) -> None:
        super().__init__()
        self._log = logging.getLogger(__name__)
        self._store_path = Path(store_path) if store_path else self._default_store_path()
        self.load()

    @property
    def store_path(self) -> Path:
        return self._store_path

    # ---- Persistence helpers ----
    def load(self) -> None:
        """(Re)load nights from disk, replacing the in-memory state."""
        nights: Dict[NightId, SleepNight] = {}
        next_id: NightId = 1
        if self._store_path.exists():
            try:
                data = json.loads(self._store_path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise StoreReadError(
                    f"Cannot read {self._store_path}: {exc}", operation="load"
                ) from exc
            entries = (data.get("nights") or []) if isinstance(data, dict) else None
            if not isinstance(entries, list):
                raise StoreReadError(
                    f"Unexpected document in {self._store_path}.", operation="load"
                )
            try:
                next_id = int(data.get("next_id") or 1)
            except (TypeError, ValueError) as exc:
                raise StoreReadError(
                    f"Invalid next_id in {self._store_path}: {exc}", operation="load"
                ) from exc

            failed = 0
            for payload in entries:
                try:
                    night = SleepNight.from_payload(payload)
                except (KeyError, TypeError, ValueError):
                    failed += 1
                    continue
                if night.night_id is None:
                    failed += 1
                    continue
                nights[night.night_id] = night
            if failed:
                self._log.warning("StoreLocal load skipped %d invalid entries.", failed)
        if nights:
            next_id = max(next_id, max(nights) + 1)

        with self._lock:
            self._nights = nights
            self._next_id = next_id

    def _commit_locked(self, staged: Dict[NightId, SleepNight]) -> None:
        next_id = self._next_id
        if staged:
            next_id = max(next_id, max(staged) + 1)
        payload = {
            "next_id": next_id,
            "nights": [staged[key].to_payload() for key in sorted(staged)],
        }
        try:
            self._store_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._store_path.with_suffix(self._store_path.suffix + ".tmp")
            tmp_path.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
            tmp_path.replace(self._store_path)
        except OSError as exc:
            raise StoreWriteError(
                f"Cannot write {self._store_path}: {exc}", operation="commit"
            ) from exc
        super()._commit_locked(staged)

    @staticmethod
    def _default_store_path() -> Path:
        return Path.home() / ".sleeptracker" / "nights.json"


__all__ = ["StoreLocal"]
