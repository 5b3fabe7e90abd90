from __future__ import annotations

import itertools
from typing import Callable, Iterator

import pytest

from sleeptracker.adapters.store_errors import StoreReadError, StoreWriteError
from sleeptracker.adapters.store_memory import InMemorySleepStore


class FlakyStore(InMemorySleepStore):
    """In-memory store whose operations can be switched to fail."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_writes = False
        self.fail_reads = False

    def fetch_latest(self):
        if self.fail_reads:
            raise StoreReadError("disk unreadable", operation="fetch_latest")
        return super().fetch_latest()

    def fetch_all(self):
        if self.fail_reads:
            raise StoreReadError("disk unreadable", operation="fetch_all")
        return super().fetch_all()

    def insert(self, night):
        if self.fail_writes:
            raise StoreWriteError("disk full", operation="insert")
        return super().insert(night)

    def update(self, night):
        if self.fail_writes:
            raise StoreWriteError("disk full", operation="update", night_id=night.night_id)
        return super().update(night)

    def clear_all(self):
        if self.fail_writes:
            raise StoreWriteError("disk full", operation="clear_all")
        return super().clear_all()


def stepping_clock(start: int = 1_000, step: int = 1_000) -> Callable[[], int]:
    counter: Iterator[int] = itertools.count(start, step)
    return lambda: next(counter)


@pytest.fixture
def store() -> InMemorySleepStore:
    return InMemorySleepStore()


@pytest.fixture
def flaky_store() -> FlakyStore:
    return FlakyStore()


@pytest.fixture
def clock() -> Callable[[], int]:
    return stepping_clock()
