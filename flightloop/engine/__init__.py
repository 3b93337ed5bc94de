"""Temporal replay engine: clock, window aggregation, trails and frame output."""

from .aggregator import aggregate, latest_per_entity, select_window, window_bounds
from .clock import ClockReading, ReplayClock
from .frames import FrameEmitter, InMemorySurface, RenderSurface, color_for_entity
from .scheduler import FrameScheduler, IntervalScheduler
from .session import ReplaySession
from .trails import TrailBuffer, TrailSample, TrailTracker

__all__ = [
    "ClockReading",
    "FrameEmitter",
    "FrameScheduler",
    "InMemorySurface",
    "IntervalScheduler",
    "RenderSurface",
    "ReplayClock",
    "ReplaySession",
    "TrailBuffer",
    "TrailSample",
    "TrailTracker",
    "aggregate",
    "color_for_entity",
    "latest_per_entity",
    "select_window",
    "window_bounds",
]
