import threading

from sleeptracker.viewmodels.live_value import LiveValue, Signal

import pytest


def test_subscribe_emits_current_value_then_updates():
    seen = []
    value = LiveValue(1)

    value.subscribe(seen.append)
    value.set(2)
    value.set(2)

    assert seen == [1, 2, 2]


def test_distinct_value_skips_equal_sets():
    seen = []
    value = LiveValue("a", distinct=True)
    value.subscribe(seen.append, emit=False)

    value.set("a")
    value.set("b")

    assert seen == ["b"]


def test_unsubscribe_stops_notifications():
    seen = []
    value = LiveValue(0)
    unsubscribe = value.subscribe(seen.append, emit=False)

    unsubscribe()
    value.set(1)

    assert seen == []
    assert value.observer_count == 0


def test_failing_observer_does_not_block_others():
    seen = []
    value = LiveValue(0)

    def broken(_):
        raise RuntimeError("boom")

    value.subscribe(broken, emit=False)
    value.subscribe(seen.append, emit=False)
    value.set(5)

    assert seen == [5]


def test_map_tracks_source_and_is_read_only():
    source = LiveValue([])
    derived = source.map(bool)
    seen = []
    derived.subscribe(seen.append)

    source.set([1])
    source.set([1, 2])
    source.set([])

    assert seen == [False, True, False]
    with pytest.raises(AttributeError):
        derived.set(True)


def test_detached_map_stops_tracking():
    source = LiveValue(1)
    derived = source.map(lambda v: v * 10)

    derived.detach()
    source.set(2)

    assert derived.value == 10


def test_signal_take_consumes_payload_once():
    signal = Signal()
    signal.raise_("night")

    assert signal.is_pending
    assert signal.take() == "night"
    assert not signal.is_pending
    assert signal.value is None
    assert signal.take() is None


def test_signal_reset_notifies_empty_value():
    seen = []
    signal = Signal(False)
    signal.subscribe(seen.append)

    signal.raise_(True)
    signal.reset()
    signal.reset()

    assert seen == [False, True, False]


def test_signal_set_routes_to_raise_and_reset():
    signal = Signal()

    signal.set("x")
    assert signal.is_pending
    signal.set(None)
    assert not signal.is_pending


def test_signal_consumed_by_first_observer_is_not_delivered_to_later_ones():
    signal = Signal()
    taken = []
    later = []
    def consume(_):
        if signal.is_pending:
            taken.append(signal.take())

    signal.subscribe(consume, emit=False)
    signal.subscribe(later.append, emit=False)

    signal.raise_("night")

    assert taken == ["night"]
    assert later == [None]
    assert signal.value is None
    assert not signal.is_pending


def test_nested_set_drops_rest_of_outer_delivery():
    value = LiveValue(0)
    first = []
    second = []

    def bump(v):
        first.append(v)
        if v == 1:
            value.set(2)

    value.subscribe(bump, emit=False)
    value.subscribe(second.append, emit=False)
    value.set(1)

    assert first == [1, 2]
    assert second == [2]


def test_concurrent_sets_reach_observers_in_stored_order():
    value = LiveValue(0)
    seen = []
    value.subscribe(seen.append, emit=False)
    start = threading.Event()

    def writer(offset):
        start.wait()
        for i in range(200):
            value.set(offset + i)

    threads = [threading.Thread(target=writer, args=(n * 1000,)) for n in range(4)]
    for thread in threads:
        thread.start()
    start.set()
    for thread in threads:
        thread.join(timeout=5)

    assert len(seen) == 800
    assert seen[-1] == value.value
    for n in range(4):
        own = [v for v in seen if n * 1000 <= v < (n + 1) * 1000]
        assert own == sorted(own)
