"""Domain package exports for sleep records and ports."""

from .entities import NightId, SleepNight, UNRATED_QUALITY
from .ports import SleepStorePort, StoreListener, Unsubscribe, UseCaseError
from .time_utils import millis_to_local, now_millis

__all__ = [
    "NightId",
    "SleepNight",
    "SleepStorePort",
    "StoreListener",
    "UNRATED_QUALITY",
    "Unsubscribe",
    "UseCaseError",
    "millis_to_local",
    "now_millis",
]
