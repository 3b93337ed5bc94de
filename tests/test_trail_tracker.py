import pytest

from flightloop.engine.aggregator import aggregate
from flightloop.engine.trails import TrailTracker
from flightloop.models.state_vector import Dataset, StateVector


def _state(time, icao24="4cc2a1", lat=64.0, lon=-21.0):
    return StateVector(time=time, icao24=icao24, lat=lat, lon=lon)


def _tick(tracker, dataset, t, window_seconds=600):
    records, latest = aggregate(dataset, t, window_seconds)
    tracker.update(records, latest)
    return latest


def test_trail_stabilizes_at_max_points_with_most_recent_positions():
    states = [_state(i * 10, lat=64.0 + i * 0.01) for i in range(35)]
    dataset = Dataset.from_states("2025-12-01", states)
    tracker = TrailTracker(max_trail_points=30)

    for t in range(0, 350, 10):
        _tick(tracker, dataset, t)
        assert len(tracker.buffer("4cc2a1")) <= 30

    samples = tracker.trails()["4cc2a1"]
    assert len(samples) == 30
    assert [s.position for s in samples] == [s.position for s in states[5:]]
    assert [s.time for s in samples] == sorted(s.time for s in samples)


def test_single_tick_over_long_window_keeps_last_points():
    states = [_state(i * 10, lat=64.0 + i * 0.01) for i in range(35)]
    dataset = Dataset.from_states("2025-12-01", states)
    tracker = TrailTracker(max_trail_points=30)

    _tick(tracker, dataset, 340)

    assert tracker.buffer("4cc2a1").coordinates() == [s.position for s in states[5:]]


def test_repeated_positions_are_not_appended():
    dataset = Dataset.from_states(
        "2025-12-01",
        [_state(0, lat=1.0), _state(10, lat=1.0), _state(20, lat=2.0), _state(30, lat=2.0)],
    )
    tracker = TrailTracker()

    _tick(tracker, dataset, 30)

    assert tracker.buffer("4cc2a1").coordinates() == [(-21.0, 1.0), (-21.0, 2.0)]


def test_overlapping_windows_do_not_duplicate_history():
    dataset = Dataset.from_states(
        "2025-12-01", [_state(0, lat=1.0), _state(10, lat=2.0), _state(20, lat=1.0)]
    )
    tracker = TrailTracker()

    _tick(tracker, dataset, 10)
    _tick(tracker, dataset, 15)
    _tick(tracker, dataset, 20)
    _tick(tracker, dataset, 25)

    assert tracker.buffer("4cc2a1").coordinates() == [
        (-21.0, 1.0),
        (-21.0, 2.0),
        (-21.0, 1.0),
    ]


def test_silent_entities_are_evicted():
    dataset = Dataset.from_states(
        "2025-12-01",
        [_state(0, "a"), _state(10, "b"), _state(700, "b", lat=65.0)],
    )
    tracker = TrailTracker()

    _tick(tracker, dataset, 10)
    assert "a" in tracker and "b" in tracker

    latest = _tick(tracker, dataset, 700)

    assert set(latest) == {"b"}
    assert "a" not in tracker
    assert len(tracker) == 1


def test_buffers_only_exist_for_aggregated_entities():
    states = [_state(t, str(t % 4), lat=t / 100) for t in range(0, 2_000, 13)]
    dataset = Dataset.from_states("2025-12-01", states)
    tracker = TrailTracker(max_trail_points=5)

    for t in range(0, 2_200, 50):
        latest = _tick(tracker, dataset, t, window_seconds=60)
        assert set(tracker.trails()) == set(latest)
        assert all(len(samples) <= 5 for samples in tracker.trails().values())


def test_reset_drops_all_buffers():
    dataset = Dataset.from_states("2025-12-01", [_state(0, "a"), _state(5, "b")])
    tracker = TrailTracker()
    _tick(tracker, dataset, 5)

    tracker.reset()

    assert len(tracker) == 0


def test_rejects_zero_capacity():
    with pytest.raises(ValueError):
        TrailTracker(max_trail_points=0)
