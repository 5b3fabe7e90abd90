from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from ..domain.entities import SleepNight
from ..domain.ports import SleepStorePort, UseCaseError
from ..domain.time_utils import now_millis
from .error_mapping import map_store_error


@dataclass
class StopNight:
    """Stamp the end time on an in-progress night and persist it."""

    store: SleepStorePort
    clock: Callable[[], int] = now_millis
    _log: logging.Logger = field(
        default_factory=lambda: logging.getLogger(__name__), init=False, repr=False
    )

    def __call__(self, night: SleepNight) -> SleepNight:
        if night.night_id is None:
            raise UseCaseError("NIGHT_NOT_SAVED", "Night has not been stored yet.")
        stopped = night.finished(self.clock())
        try:
            self.store.update(stopped)
        except Exception as exc:
            raise map_store_error(exc, default_code="STOP_NIGHT_FAILED") from exc
        self._log.info(
            "Stopped night %s after %d ms", stopped.night_id, stopped.duration_milli
        )
        return stopped
