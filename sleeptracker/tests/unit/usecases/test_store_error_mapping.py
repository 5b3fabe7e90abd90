import pytest

from sleeptracker.adapters.store_errors import (
    RecordNotFoundError,
    StoreError,
    StoreReadError,
    StoreWriteError,
)
from sleeptracker.domain.ports import UseCaseError
from sleeptracker.usecases.error_mapping import map_store_error


@pytest.mark.parametrize(
    "exc, code",
    [
        (RecordNotFoundError(3, operation="update"), "RECORD_NOT_FOUND"),
        (StoreReadError("bad json", operation="load"), "STORE_READ_FAILED"),
        (StoreWriteError("disk full", operation="commit"), "STORE_WRITE_FAILED"),
        (StoreError("boom"), "STORE_ERROR"),
        (RuntimeError("surprise"), "FALLBACK"),
    ],
)
def test_map_store_error_codes(exc, code):
    err = map_store_error(exc, default_code="FALLBACK")

    assert isinstance(err, UseCaseError)
    assert err.code == code


def test_use_case_error_passes_through():
    original = UseCaseError("NIGHT_NOT_SAVED", "nope")

    assert map_store_error(original, default_code="FALLBACK") is original


def test_write_error_message_includes_hint_and_meta():
    err = map_store_error(StoreWriteError("disk full", operation="insert"), default_code="X")

    assert err.message == "Could not save sleep data: disk full"
    assert err.meta == {"operation": "insert"}


def test_unknown_error_without_text_uses_default_message():
    err = map_store_error(RuntimeError(), default_code="X", default_message="Try again.")

    assert err.message == "Try again."
    assert err.meta == {}
