from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..domain.entities import SleepNight
from ..domain.ports import SleepStorePort
from .error_mapping import map_store_error


@dataclass
class GetTonight:
    """Return the latest night if it is still in progress, else ``None``."""

    store: SleepStorePort

    def __call__(self) -> Optional[SleepNight]:
        try:
            night = self.store.fetch_latest()
        except Exception as exc:
            raise map_store_error(exc, default_code="LOAD_TONIGHT_FAILED") from exc
        if night is None or not night.in_progress:
            return None
        return night
