import pytest

from sleeptracker.domain.entities import SleepNight, UNRATED_QUALITY


def test_begin_creates_in_progress_night():
    night = SleepNight.begin(100)

    assert night.night_id is None
    assert night.start_time_milli == 100
    assert night.end_time_milli == 100
    assert night.sleep_quality == UNRATED_QUALITY
    assert night.in_progress is True
    assert night.duration_milli == 0


def test_finished_stamps_end_and_leaves_original_untouched():
    night = SleepNight(night_id=3, start_time_milli=100, end_time_milli=100)

    stopped = night.finished(250)

    assert stopped.end_time_milli == 250
    assert stopped.night_id == 3
    assert stopped.in_progress is False
    assert stopped.duration_milli == 150
    assert night.in_progress is True


def test_finished_never_reads_as_in_progress():
    night = SleepNight(night_id=1, start_time_milli=500, end_time_milli=500)

    stopped = night.finished(500)

    assert stopped.end_time_milli > stopped.start_time_milli
    assert not stopped.in_progress


def test_payload_round_trip_defaults_missing_fields():
    night = SleepNight.from_payload({"night_id": 7, "start_time_milli": 42})

    assert night.end_time_milli == 42
    assert night.sleep_quality == UNRATED_QUALITY
    assert SleepNight.from_payload(night.to_payload()) == night


@pytest.mark.parametrize(
    "kwargs",
    [
        {"start_time_milli": -1},
        {"end_time_milli": -5},
    ],
)
def test_negative_timestamps_rejected(kwargs):
    with pytest.raises(ValueError):
        SleepNight(**kwargs)


def test_non_int_id_rejected():
    with pytest.raises(TypeError):
        SleepNight(night_id="1")  # type: ignore[arg-type]
