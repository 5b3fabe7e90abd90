from __future__ import annotations

from typing import Optional


class StoreError(RuntimeError):
    """Base class for record store failures."""

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        night_id: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.night_id = night_id


class StoreReadError(StoreError):
    """Stored data could not be read or decoded."""


class StoreWriteError(StoreError):
    """A mutation could not be persisted."""


class RecordNotFoundError(StoreError):
    """Update or lookup targeted a night that is not in the store."""

    def __init__(self, night_id: Optional[int], *, operation: Optional[str] = None) -> None:
        super().__init__(
            f"Night {night_id} not found.",
            operation=operation,
            night_id=night_id,
        )


__all__ = [
    "RecordNotFoundError",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
]
