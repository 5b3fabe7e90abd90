import pytest

from sleeptracker.domain.entities import SleepNight
from sleeptracker.domain.time_utils import millis_to_local
from sleeptracker.viewmodels.night_format import (
    format_duration,
    format_night,
    format_nights,
    format_timestamp,
    quality_label,
)


@pytest.mark.parametrize(
    "quality, label",
    [(0, "Very bad"), (1, "Poor"), (2, "So-so"), (3, "OK"), (4, "Pretty good"), (5, "Excellent"), (-1, "--"), (9, "--"), (None, "--")],
)
def test_quality_label(quality, label):
    assert quality_label(quality) == label


def test_format_duration():
    assert format_duration(0, 3_723_000) == "1:02:03"
    assert format_duration(5_000, 1_000) == "0:00:00"


def test_format_timestamp_uses_local_time():
    ts = 1_700_000_000_000
    expected = millis_to_local(ts).strftime("%A %b-%d-%Y Time: %H:%M")

    assert format_timestamp(ts) == expected


def test_completed_night_block():
    night = SleepNight(night_id=1, start_time_milli=0, end_time_milli=3_600_000, sleep_quality=4)

    lines = format_night(night).split("\n")

    assert lines[0].startswith("Start: ")
    assert lines[1] == f"End: {format_timestamp(3_600_000)}"
    assert lines[2] == "Quality: Pretty good"
    assert lines[3] == "Hours:Minutes:Seconds: 1:00:00"


def test_in_progress_night_block():
    night = SleepNight(night_id=1, start_time_milli=10, end_time_milli=10)

    text = format_night(night)

    assert "End: In progress" in text
    assert "Quality: --" in text
    assert "Hours:Minutes:Seconds" not in text


def test_format_nights_preserves_order():
    nights = [
        SleepNight(night_id=2, start_time_milli=0, end_time_milli=1_000, sleep_quality=5),
        SleepNight(night_id=1, start_time_milli=0, end_time_milli=2_000, sleep_quality=0),
    ]

    blocks = format_nights(nights)

    assert len(blocks) == 2
    assert "Excellent" in blocks[0]
    assert "Very bad" in blocks[1]
    assert format_nights([]) == []
