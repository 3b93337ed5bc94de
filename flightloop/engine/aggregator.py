"""Select the state vectors visible at a simulated instant.

All functions here are pure: they depend only on the dataset, the simulated
time and the window length. Window bounds are found by binary search on the
dataset's sorted timestamps, so a tick costs O(log n + k) for k records in
the window.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right

from flightloop.models.state_vector import Dataset, StateVector

WindowRecord = tuple[int, StateVector]


def window_bounds(dataset: Dataset, t: float, window_seconds: float) -> tuple[int, int]:
    """Return the slice ``[lo, hi)`` of records with ``time`` in ``[t - window, t]``."""

    lo = bisect_left(dataset.times, t - window_seconds)
    hi = bisect_right(dataset.times, t)
    return lo, max(lo, hi)


def select_window(
    dataset: Dataset, t: float, window_seconds: float
) -> list[WindowRecord]:
    """Return ``(seq, state)`` pairs for every record inside the window.

    ``seq`` is the record's index in the sorted dataset.
    """

    lo, hi = window_bounds(dataset, t, window_seconds)
    return [(seq, dataset.states[seq]) for seq in range(lo, hi)]


def latest_per_entity(records: list[WindowRecord]) -> dict[str, StateVector]:
    """Keep the newest record per entity.

    Equal timestamps keep the record seen first, which is the lowest
    original index because the dataset sort is stable.
    """

    latest: dict[str, StateVector] = {}
    for _, state in records:
        existing = latest.get(state.entity_id)
        if existing is None or state.time > existing.time:
            latest[state.entity_id] = state
    return latest


def aggregate(
    dataset: Dataset, t: float, window_seconds: float
) -> tuple[list[WindowRecord], dict[str, StateVector]]:
    records = select_window(dataset, t, window_seconds)
    return records, latest_per_entity(records)


__all__ = [
    "WindowRecord",
    "aggregate",
    "latest_per_entity",
    "select_window",
    "window_bounds",
]
