"""Frame scheduling primitives that drive the replay loop."""

from __future__ import annotations

import asyncio
import time
from typing import Protocol


class FrameScheduler(Protocol):
    async def next_frame(self) -> float:
        """Wait for the next frame slot and return the wall-clock time in ms."""


class IntervalScheduler:
    """Fixed-rate scheduler backed by ``asyncio.sleep`` and a monotonic clock."""

    def __init__(self, fps: float = 30.0) -> None:
        if fps <= 0:
            raise ValueError("fps must be positive")
        self.interval = 1.0 / fps

    async def next_frame(self) -> float:
        await asyncio.sleep(self.interval)
        return time.monotonic() * 1000.0


__all__ = ["FrameScheduler", "IntervalScheduler"]
