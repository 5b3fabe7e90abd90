"""Logging setup for the sleep tracker.

``AppConfig.log_level`` is the only input: ``load_config`` has already folded
the environment into it by the time ``configure_logging`` runs. Records carry
the thread name since store work happens on the viewmodel's task runner.
"""

from __future__ import annotations

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(threadName)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

Level = Union[int, str]


def level_name(value: Level) -> str:
    """Return the standard level name for ``value``; ``ValueError`` if there is none."""
    if isinstance(value, int) and not isinstance(value, bool):
        name = logging.getLevelName(value)
    else:
        name = str(value).strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"Unknown log level {value!r}.")
    return name


def configure_logging(level: Level = "INFO") -> int:
    """Give the root logger a stream handler (once) and set its level.

    Returns the numeric level now in effect.
    """
    effective = logging.getLevelName(level_name(level))
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)
    root.setLevel(effective)
    logging.getLogger(__name__).debug("Logging at %s", logging.getLevelName(effective))
    return effective


__all__ = ["DATE_FORMAT", "LOG_FORMAT", "configure_logging", "level_name"]
