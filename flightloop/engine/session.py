"""Replay session: owns the clock, trail buffers and the self-rescheduling loop."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Sequence

from flightloop.config import DEFAULT_PALETTE, settings
from flightloop.engine.aggregator import aggregate
from flightloop.engine.clock import ClockReading, ReplayClock
from flightloop.engine.frames import FrameEmitter, RenderSurface
from flightloop.engine.scheduler import FrameScheduler, IntervalScheduler
from flightloop.engine.trails import TrailTracker
from flightloop.models.features import Frame
from flightloop.models.replay import ReplayStatus
from flightloop.models.state_vector import Dataset

logger = logging.getLogger("flightloop.engine.session")


class ReplaySession:
    """One independent replay of a dataset onto a rendering surface.

    Lifecycle is ``create -> start -> tick* -> stop``. Ticks run one at a time
    on the event loop, so the trail buffers need no locking.
    """

    def __init__(
        self,
        dataset: Dataset,
        surface: RenderSurface,
        *,
        scheduler: FrameScheduler | None = None,
        window_seconds: float | None = None,
        max_trail_points: int | None = None,
        animation_duration_ms: float | None = None,
        palette: Sequence[str] | None = None,
    ) -> None:
        if not len(dataset):
            raise ValueError("Cannot replay an empty dataset")
        self.dataset = dataset
        self.scheduler = scheduler or IntervalScheduler(settings.frame_rate)
        self.window_seconds = (
            window_seconds if window_seconds is not None else settings.window_seconds
        )
        self.clock = ReplayClock(
            dataset.min_time,
            dataset.duration,
            animation_duration_ms
            if animation_duration_ms is not None
            else settings.animation_duration_ms,
        )
        self.trails = TrailTracker(
            max_trail_points if max_trail_points is not None else settings.max_trail_points
        )
        self.emitter = FrameEmitter(
            surface, palette or settings.palette or DEFAULT_PALETTE
        )
        self.ticks = 0
        self.failed_ticks = 0
        self.last_reading: ClockReading | None = None
        self._cycle = 0
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def tick(self, now_ms: float) -> Frame | None:
        """Advance the replay to wall-clock ``now_ms`` and emit one frame."""

        reading = self.clock.read(now_ms)
        if reading.cycle != self._cycle:
            logger.debug("Replay loop wrapped to cycle %s", reading.cycle)
            self.trails.reset()
            self._cycle = reading.cycle
        return self._advance(reading)

    def tick_at(self, sim_time: float) -> Frame | None:
        """Run the tick pipeline for an explicit simulated time."""

        duration = self.dataset.duration
        progress = (sim_time - self.dataset.min_time) / duration if duration else 0.0
        reading = ClockReading(sim_time=sim_time, progress=progress, cycle=self._cycle)
        return self._advance(reading)

    def _advance(self, reading: ClockReading) -> Frame | None:
        self.ticks += 1
        self.last_reading = reading

        try:
            window_records, latest = aggregate(
                self.dataset, reading.sim_time, self.window_seconds
            )
            self.trails.update(window_records, latest)
            frame = self.emitter.build(reading, latest, self.trails.trails())
            self.emitter.emit(frame)
        except Exception as exc:
            self.failed_ticks += 1
            logger.warning("Replay tick at sim_time=%s failed: %s", reading.sim_time, exc)
            return None
        return frame

    async def run(self) -> None:
        """Tick on every scheduler slot until :meth:`stop` or cancellation."""

        if self._running:
            raise RuntimeError("Replay session is already running")

        self._running = True
        logger.info(
            "Starting replay: %ss of recorded time compressed to %sms",
            self.dataset.duration,
            self.clock.animation_duration_ms,
        )
        try:
            while not self._stop_event.is_set():
                now_ms = await self.scheduler.next_frame()
                if self._stop_event.is_set():
                    break
                self.tick(now_ms)
        except asyncio.CancelledError:
            logger.info("Replay session cancelled")
            raise
        finally:
            self._running = False
            logger.info("Replay stopped after %s ticks", self.ticks)

    def start(self) -> asyncio.Task:
        """Schedule :meth:`run` on the running event loop."""

        if self._task is None or self._task.done():
            self._stop_event.clear()
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        task = self._task
        if task is None:
            return
        if task.done():
            if not task.cancelled() and task.exception() is not None:
                logger.error("Replay loop ended with error: %s", task.exception())
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    def status(self) -> ReplayStatus:
        if self._running:
            state = "running"
        elif self.ticks:
            state = "stopped"
        else:
            state = "idle"
        return ReplayStatus(
            state=state,
            date=self.dataset.date,
            record_count=len(self.dataset),
            skipped_records=self.dataset.skipped_records,
            min_time=self.dataset.min_time,
            max_time=self.dataset.max_time,
            ticks=self.ticks,
            failed_ticks=self.failed_ticks,
            sim_time=self.last_reading.sim_time if self.last_reading else None,
            active_trails=len(self.trails),
        )


__all__ = ["ReplaySession"]
