"""Runtime configuration for the sleep tracker app.

Values come from an optional flat JSON file and are then overridden by
environment variables. The log level is resolved here too, so logging setup
only ever reads ``AppConfig.log_level``.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ..utils.logging import level_name

STORE_PATH_ENV = "SLEEPTRACKER_STORE_PATH"
LOG_LEVEL_ENV = "SLEEPTRACKER_LOG_LEVEL"
DEBUG_ENV = "SLEEPTRACKER_DEBUG"


def _default_store_path() -> str:
    return str(Path.home() / ".sleeptracker" / "nights.json")


@dataclass
class AppConfig:
    """Typed runtime settings."""

    store_path: str = field(default_factory=_default_store_path)
    log_level: str = "INFO"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AppConfig":
        """Build a config from a flat mapping, validating keys and types."""
        if not isinstance(payload, Mapping):
            raise ValueError("Config payload must be a mapping of flat keys.")
        unknown = set(payload.keys()) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unsupported config keys: {', '.join(sorted(str(key) for key in unknown))}")

        config = cls()
        if "store_path" in payload:
            config = replace(config, store_path=_coerce_path(payload["store_path"]))
        if "log_level" in payload:
            config = replace(config, log_level=_coerce_level(payload["log_level"]))
        return config


def load_config(
    path: Optional[Union[str, Path]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """Load ``AppConfig`` from ``path`` (if it exists) and apply env overrides.

    ``SLEEPTRACKER_LOG_LEVEL`` wins over ``SLEEPTRACKER_DEBUG``; a truthy debug
    flag alone means ``DEBUG``.
    """
    env = os.environ if environ is None else environ
    config = AppConfig()
    if path is not None:
        config_path = Path(path)
        if config_path.exists():
            try:
                payload = json.loads(config_path.read_text(encoding="utf-8"))
            except ValueError as exc:
                raise ValueError(f"Invalid config file {config_path}: {exc}") from exc
            config = AppConfig.from_dict(payload)

    store_override = (env.get(STORE_PATH_ENV) or "").strip()
    if store_override:
        config = replace(config, store_path=_coerce_path(store_override))
    level_override = (env.get(LOG_LEVEL_ENV) or "").strip()
    if level_override:
        config = replace(config, log_level=_coerce_level(level_override))
    elif _coerce_bool(env.get(DEBUG_ENV, "")):
        config = replace(config, log_level="DEBUG")
    return config


def _coerce_path(value: Any) -> str:
    text = str(value or "").strip()
    if not text:
        raise ValueError("store_path must be a non-empty path.")
    return str(Path(text).expanduser())


def _coerce_level(value: Any) -> str:
    try:
        return level_name(value)
    except ValueError as exc:
        raise ValueError(f"log_level must be a logging level name, got {value!r}.") from exc


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "on"}:
        return True
    if text in {"0", "false", "no", "off", ""}:
        return False
    raise ValueError(f"Expected a boolean, got {value!r}.")


__all__ = ["AppConfig", "DEBUG_ENV", "LOG_LEVEL_ENV", "STORE_PATH_ENV", "load_config"]
