"""Maps wall-clock time onto a looping position inside the dataset's time span."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClockReading:
    sim_time: float
    progress: float
    cycle: int


class ReplayClock:
    """Compress ``duration`` seconds of recorded time into one animation loop.

    The wall-clock start is captured on the first call to :meth:`read`; every
    later sample is measured against it. Within one loop the simulated time
    rises monotonically from ``min_time`` towards ``min_time + duration``.
    """

    def __init__(
        self,
        min_time: float,
        duration: float,
        animation_duration_ms: float = 60_000,
    ) -> None:
        if animation_duration_ms <= 0:
            raise ValueError("animation_duration_ms must be positive")
        if duration < 0:
            raise ValueError("duration must not be negative")
        self.min_time = min_time
        self.duration = duration
        self.animation_duration_ms = animation_duration_ms
        self.start_wall_time: float | None = None

    def read(self, now_ms: float) -> ClockReading:
        if self.start_wall_time is None:
            self.start_wall_time = now_ms

        offset = now_ms - self.start_wall_time
        elapsed = offset % self.animation_duration_ms
        progress = elapsed / self.animation_duration_ms
        # Float modulo can round up to the period itself.
        if progress >= 1.0:
            progress = 0.0
        cycle = int(offset // self.animation_duration_ms)
        return ClockReading(
            sim_time=self.min_time + progress * self.duration,
            progress=progress,
            cycle=cycle,
        )

    def sim_time(self, now_ms: float) -> float:
        return self.read(now_ms).sim_time

    def reset(self) -> None:
        self.start_wall_time = None


__all__ = ["ClockReading", "ReplayClock"]
