from __future__ import annotations

"""Domain records shared across store adapters, use-cases, and view models."""

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from .time_utils import now_millis

NightId = int

UNRATED_QUALITY = -1


@dataclass
class SleepNight:
    """One sleep session as persisted by the record store.

    A night is *in progress* while ``end_time_milli`` equals
    ``start_time_milli``; stopping it stamps the wall-clock end time.
    """

    night_id: Optional[NightId] = None
    """Store-assigned key, ``None`` until the record has been inserted."""
    start_time_milli: int = 0
    end_time_milli: int = 0
    sleep_quality: int = UNRATED_QUALITY

    def __post_init__(self) -> None:
        if self.night_id is not None and not isinstance(self.night_id, int):
            raise TypeError("SleepNight.night_id must be an int or None.")
        if self.start_time_milli < 0 or self.end_time_milli < 0:
            raise ValueError("SleepNight timestamps must be non-negative.")

    @classmethod
    def begin(cls, at_milli: Optional[int] = None) -> "SleepNight":
        """Create a fresh in-progress night starting at ``at_milli`` (default: now)."""
        start = now_millis() if at_milli is None else int(at_milli)
        return cls(start_time_milli=start, end_time_milli=start)

    @property
    def in_progress(self) -> bool:
        return self.end_time_milli == self.start_time_milli

    @property
    def duration_milli(self) -> int:
        return max(0, self.end_time_milli - self.start_time_milli)

    def finished(self, at_milli: Optional[int] = None) -> "SleepNight":
        """Return a copy with the end time stamped.

        The end is clamped to one millisecond past the start so a stopped
        night never reads as in progress again.
        """
        end = now_millis() if at_milli is None else int(at_milli)
        end = max(end, self.start_time_milli + 1)
        return replace(self, end_time_milli=end)

    def with_id(self, night_id: NightId) -> "SleepNight":
        return replace(self, night_id=int(night_id))

    def to_payload(self) -> Dict[str, Any]:
        return {
            "night_id": self.night_id,
            "start_time_milli": self.start_time_milli,
            "end_time_milli": self.end_time_milli,
            "sleep_quality": self.sleep_quality,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SleepNight":
        if not isinstance(payload, Mapping):
            raise ValueError("SleepNight payload must be a mapping.")
        raw_id = payload.get("night_id")
        start = int(payload["start_time_milli"])
        end_raw = payload.get("end_time_milli")
        quality_raw = payload.get("sleep_quality")
        return cls(
            night_id=int(raw_id) if raw_id is not None else None,
            start_time_milli=start,
            end_time_milli=int(end_raw) if end_raw is not None else start,
            sleep_quality=int(quality_raw) if quality_raw is not None else UNRATED_QUALITY,
        )


__all__ = ["NightId", "SleepNight", "UNRATED_QUALITY"]
