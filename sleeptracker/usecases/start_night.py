from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..domain.entities import SleepNight
from ..domain.ports import SleepStorePort
from ..domain.time_utils import now_millis
from .error_mapping import map_store_error
from .get_tonight import GetTonight


@dataclass
class StartNight:
    """Insert a new in-progress night and return it as re-read from the store.

    When a night is already in progress nothing is inserted and the running
    night is returned, so a repeated start never leaves two open nights.
    """

    store: SleepStorePort
    clock: Callable[[], int] = now_millis
    _log: logging.Logger = field(
        default_factory=lambda: logging.getLogger(__name__), init=False, repr=False
    )

    def __call__(self) -> Optional[SleepNight]:
        get_tonight = GetTonight(self.store)
        running = get_tonight()
        if running is not None:
            self._log.info("Night %s already in progress; start ignored.", running.night_id)
            return running

        night = SleepNight.begin(self.clock())
        try:
            night_id = self.store.insert(night)
        except Exception as exc:
            raise map_store_error(exc, default_code="START_NIGHT_FAILED") from exc
        self._log.info("Started night %s", night_id)
        return get_tonight()
