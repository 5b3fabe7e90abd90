import pytest

from sleeptracker.domain.entities import SleepNight
from sleeptracker.domain.ports import UseCaseError
from sleeptracker.usecases.clear_nights import ClearNights
from sleeptracker.usecases.get_tonight import GetTonight
from sleeptracker.usecases.load_nights import LoadNights
from sleeptracker.usecases.start_night import StartNight
from sleeptracker.usecases.stop_night import StopNight


def test_get_tonight_returns_in_progress_latest(store):
    store.insert(SleepNight(start_time_milli=100, end_time_milli=100))

    tonight = GetTonight(store)()

    assert tonight is not None
    assert tonight.night_id == 1


def test_get_tonight_ignores_completed_latest(store):
    store.insert(SleepNight(start_time_milli=100, end_time_milli=200))

    assert GetTonight(store)() is None


def test_get_tonight_on_empty_store(store):
    assert GetTonight(store)() is None


def test_start_inserts_then_refetches(store, clock):
    tonight = StartNight(store, clock=clock)()

    assert tonight.night_id == 1
    assert tonight.start_time_milli == tonight.end_time_milli == 1_000
    assert len(store.fetch_all()) == 1


def test_start_twice_keeps_single_open_night(store, clock):
    start = StartNight(store, clock=clock)

    first = start()
    second = start()

    assert first == second
    assert len(store.fetch_all()) == 1


def test_stop_persists_end_time(store, clock):
    tonight = StartNight(store, clock=clock)()

    stopped = StopNight(store, clock=clock)(tonight)

    assert stopped.end_time_milli == 2_000
    assert store.get(tonight.night_id).end_time_milli == 2_000
    assert GetTonight(store)() is None


def test_stop_unsaved_night_rejected(store):
    with pytest.raises(UseCaseError) as excinfo:
        StopNight(store)(SleepNight.begin(100))
    assert excinfo.value.code == "NIGHT_NOT_SAVED"


def test_stop_missing_night_maps_not_found(store):
    with pytest.raises(UseCaseError) as excinfo:
        StopNight(store)(SleepNight(night_id=9, start_time_milli=100, end_time_milli=100))
    assert excinfo.value.code == "RECORD_NOT_FOUND"
    assert excinfo.value.meta == {"operation": "update", "night_id": 9}


def test_clear_and_load(store, clock):
    StartNight(store, clock=clock)()
    assert len(LoadNights(store)()) == 1

    ClearNights(store)()

    assert LoadNights(store)() == []


def test_store_failures_become_use_case_errors(flaky_store):
    flaky_store.fail_writes = True
    with pytest.raises(UseCaseError) as write_err:
        ClearNights(flaky_store)()
    assert write_err.value.code == "STORE_WRITE_FAILED"

    flaky_store.fail_reads = True
    with pytest.raises(UseCaseError) as read_err:
        LoadNights(flaky_store)()
    assert read_err.value.code == "STORE_READ_FAILED"
