import pytest

from flightloop.engine.clock import ReplayClock

MIN_TIME = 1_764_547_200
DURATION = 86_400
PERIOD_MS = 60_000


def _clock():
    return ReplayClock(MIN_TIME, DURATION, animation_duration_ms=PERIOD_MS)


def test_first_reading_starts_at_min_time():
    clock = _clock()

    reading = clock.read(12_345.6)

    assert clock.start_wall_time == 12_345.6
    assert reading.sim_time == MIN_TIME
    assert reading.progress == 0.0
    assert reading.cycle == 0


def test_sim_time_stays_within_dataset_span():
    clock = _clock()
    clock.read(1_000.0)

    samples = [1_000.0 + step * 997.3 for step in range(500)] + [0.0, 59_999.999, 1e9]
    for now in samples:
        sim_time = clock.sim_time(now)
        assert MIN_TIME <= sim_time <= MIN_TIME + DURATION


def test_sim_time_is_monotonic_within_a_period():
    clock = _clock()
    clock.read(0.0)

    previous = clock.sim_time(0.0)
    for now in range(16, PERIOD_MS, 16):
        current = clock.sim_time(float(now))
        assert current >= previous
        previous = current


def test_clock_loops_with_animation_period():
    clock = _clock()
    clock.read(500.0)

    halfway = clock.read(500.0 + PERIOD_MS / 2)
    wrapped = clock.read(500.0 + PERIOD_MS)
    later = clock.read(500.0 + 2 * PERIOD_MS + PERIOD_MS / 2)

    assert halfway.sim_time == pytest.approx(MIN_TIME + DURATION / 2)
    assert wrapped.sim_time == MIN_TIME
    assert wrapped.cycle == 1
    assert later.sim_time == pytest.approx(halfway.sim_time)
    assert later.cycle == 2


def test_zero_duration_dataset_always_shows_min_time():
    clock = ReplayClock(42, 0)

    assert clock.sim_time(0.0) == 42
    assert clock.sim_time(33_000.0) == 42


def test_reset_recaptures_start_time():
    clock = _clock()
    clock.read(0.0)
    clock.reset()

    assert clock.read(30_000.0).sim_time == MIN_TIME


def test_rejects_non_positive_period():
    with pytest.raises(ValueError):
        ReplayClock(0, 10, animation_duration_ms=0)
