"""Translate store adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Any, Dict, Optional

from sleeptracker.adapters.store_errors import (
    RecordNotFoundError,
    StoreError,
    StoreReadError,
    StoreWriteError,
)
from sleeptracker.domain.ports import UseCaseError


def map_store_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map store exceptions to stable UseCaseError codes.

    Existing ``UseCaseError`` instances pass through unchanged; unknown
    exceptions fall back to ``default_code``.
    """
    if isinstance(exc, UseCaseError):
        return exc
    meta = _store_meta(exc)
    if isinstance(exc, RecordNotFoundError):
        return UseCaseError("RECORD_NOT_FOUND", "Sleep record no longer exists.", meta=meta)
    if isinstance(exc, StoreReadError):
        return UseCaseError(
            "STORE_READ_FAILED",
            _compose_error_message("Could not read sleep data", str(exc)),
            meta=meta,
        )
    if isinstance(exc, StoreWriteError):
        return UseCaseError(
            "STORE_WRITE_FAILED",
            _compose_error_message("Could not save sleep data", str(exc)),
            meta=meta,
        )
    if isinstance(exc, StoreError):
        return UseCaseError("STORE_ERROR", str(exc) or "Store error.", meta=meta)

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    return f"{base}."


def _store_meta(exc: Exception) -> Dict[str, Any]:
    meta: Dict[str, Any] = {}
    operation = getattr(exc, "operation", None)
    if operation:
        meta["operation"] = operation
    night_id = getattr(exc, "night_id", None)
    if night_id is not None:
        meta["night_id"] = night_id
    return meta


__all__ = ["map_store_error"]
