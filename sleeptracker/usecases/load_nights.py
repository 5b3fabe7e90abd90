from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..domain.entities import SleepNight
from ..domain.ports import SleepStorePort
from .error_mapping import map_store_error


@dataclass
class LoadNights:
    store: SleepStorePort

    def __call__(self) -> List[SleepNight]:
        try:
            return list(self.store.fetch_all())
        except Exception as exc:
            raise map_store_error(exc, default_code="LOAD_NIGHTS_FAILED") from exc
