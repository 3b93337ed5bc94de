"""Bounded per-aircraft position history used to draw trails."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import logging
from typing import Iterable, Mapping

from flightloop.models.state_vector import StateVector

logger = logging.getLogger("flightloop.engine.trails")

DEFAULT_MAX_TRAIL_POINTS = 30


@dataclass(frozen=True)
class TrailSample:
    position: tuple[float, float]
    time: int
    seq: int


class TrailBuffer:
    """FIFO of recent distinct positions for one entity.

    ``last_seq`` is the dataset index of the newest record consumed, so a
    record is only ever considered once even though consecutive windows
    overlap.
    """

    def __init__(self, max_points: int) -> None:
        self.samples: deque[TrailSample] = deque(maxlen=max_points)
        self.last_seq = -1

    def __len__(self) -> int:
        return len(self.samples)

    def offer(self, seq: int, state: StateVector) -> bool:
        if seq <= self.last_seq:
            return False
        self.last_seq = seq
        if self.samples and self.samples[-1].position == state.position:
            return False
        self.samples.append(TrailSample(state.position, state.time, seq))
        return True

    def coordinates(self) -> list[tuple[float, float]]:
        return [sample.position for sample in self.samples]


class TrailTracker:
    """Keeps one :class:`TrailBuffer` per entity visible in the current window."""

    def __init__(self, max_trail_points: int = DEFAULT_MAX_TRAIL_POINTS) -> None:
        if max_trail_points < 1:
            raise ValueError("max_trail_points must be at least 1")
        self.max_trail_points = max_trail_points
        self._buffers: dict[str, TrailBuffer] = {}

    def __len__(self) -> int:
        return len(self._buffers)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._buffers

    def update(
        self,
        window_records: Iterable[tuple[int, StateVector]],
        latest: Mapping[str, StateVector],
    ) -> None:
        """Fold one tick's window into the buffers, then evict silent entities.

        ``window_records`` must be in ascending ``seq`` order, as produced by
        :func:`flightloop.engine.aggregator.select_window`.
        """

        for seq, state in window_records:
            buffer = self._buffers.get(state.entity_id)
            if buffer is None:
                buffer = TrailBuffer(self.max_trail_points)
                self._buffers[state.entity_id] = buffer
            buffer.offer(seq, state)

        stale = [entity_id for entity_id in self._buffers if entity_id not in latest]
        for entity_id in stale:
            del self._buffers[entity_id]
        if stale:
            logger.debug("Evicted %s trail buffers", len(stale))

    def reset(self) -> None:
        self._buffers.clear()

    def buffer(self, entity_id: str) -> TrailBuffer | None:
        return self._buffers.get(entity_id)

    def trails(self) -> dict[str, list[TrailSample]]:
        return {
            entity_id: list(buffer.samples)
            for entity_id, buffer in self._buffers.items()
        }


__all__ = ["DEFAULT_MAX_TRAIL_POINTS", "TrailBuffer", "TrailSample", "TrailTracker"]
