"""Display formatting for sleep nights.

Call context:
    ``SleepTrackerVM`` maps its ``nights`` value through ``format_nights`` to
    feed the history list in ``SleepTrackerView``. Pure functions, no I/O.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..domain.entities import SleepNight
from ..domain.time_utils import millis_to_local

QUALITY_LABELS = {
    0: "Very bad",
    1: "Poor",
    2: "So-so",
    3: "OK",
    4: "Pretty good",
    5: "Excellent",
}

_TIMESTAMP_FORMAT = "%A %b-%d-%Y Time: %H:%M"


def quality_label(quality: Optional[int]) -> str:
    """Map a numeric quality rating to its label; unknown values render ``--``."""
    if quality is None:
        return "--"
    return QUALITY_LABELS.get(int(quality), "--")


def format_timestamp(milli: int) -> str:
    return millis_to_local(milli).strftime(_TIMESTAMP_FORMAT)


def format_duration(start_milli: int, end_milli: int) -> str:
    """Render elapsed time as ``H:MM:SS``; negative spans clamp to zero."""
    total_s = max(0, int(end_milli) - int(start_milli)) // 1000
    hours, rest = divmod(total_s, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}"


def format_night(night: SleepNight) -> str:
    lines = [f"Start: {format_timestamp(night.start_time_milli)}"]
    if night.in_progress:
        lines.append("End: In progress")
    else:
        lines.append(f"End: {format_timestamp(night.end_time_milli)}")
    lines.append(f"Quality: {quality_label(night.sleep_quality)}")
    if not night.in_progress:
        lines.append(
            "Hours:Minutes:Seconds: "
            + format_duration(night.start_time_milli, night.end_time_milli)
        )
    return "\n".join(lines)


def format_nights(nights: Iterable[SleepNight]) -> List[str]:
    """Format each night into one display block, preserving input order."""
    return [format_night(night) for night in nights or []]


__all__ = [
    "QUALITY_LABELS",
    "format_duration",
    "format_night",
    "format_nights",
    "format_timestamp",
    "quality_label",
]
