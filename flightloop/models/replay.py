"""Replay session status models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ReplayStatus(BaseModel):
    """Snapshot of the replay session for status endpoints and logs."""

    state: str = Field(..., description="idle, loading, running, stopped, empty or failed")
    date: Optional[str] = Field(default=None, description="Capture date of the dataset")
    record_count: int = Field(default=0, description="Usable state vectors loaded")
    skipped_records: int = Field(
        default=0, description="Malformed records dropped at load"
    )
    min_time: Optional[int] = None
    max_time: Optional[int] = None
    ticks: int = Field(default=0, description="Ticks executed since start")
    failed_ticks: int = Field(default=0, description="Ticks whose emission failed")
    sim_time: Optional[float] = Field(
        default=None, description="Simulated time of the most recent tick"
    )
    active_trails: int = 0
    detail: Optional[str] = None


__all__ = ["ReplayStatus"]
