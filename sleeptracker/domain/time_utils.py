from __future__ import annotations

"""Wall-clock helpers expressed in epoch milliseconds."""

import time
from datetime import datetime


def now_millis() -> int:
    """Return the current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def millis_to_local(value: int) -> datetime:
    """Convert epoch milliseconds into a timezone-aware local datetime."""
    return datetime.fromtimestamp(int(value) / 1000.0).astimezone()


__all__ = ["millis_to_local", "now_millis"]
