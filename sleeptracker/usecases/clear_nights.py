from __future__ import annotations

from dataclasses import dataclass

from ..domain.ports import SleepStorePort
from .error_mapping import map_store_error


@dataclass
class ClearNights:
    store: SleepStorePort

    def __call__(self) -> None:
        try:
            self.store.clear_all()
        except Exception as exc:
            raise map_store_error(exc, default_code="CLEAR_NIGHTS_FAILED") from exc
