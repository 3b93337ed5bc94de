"""Models for recorded aircraft state vectors and the replay dataset."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field


class StateVector(BaseModel):
    """One observation of one aircraft at one instant."""

    time: int = Field(..., description="Observation time in epoch seconds")
    icao24: str = Field(..., description="ICAO 24-bit transponder address")
    lat: float = Field(
        ..., ge=-90, le=90, allow_inf_nan=False, description="Latitude in decimal degrees"
    )
    lon: float = Field(
        ...,
        ge=-180,
        le=180,
        allow_inf_nan=False,
        description="Longitude in decimal degrees",
    )
    velocity: Optional[float] = Field(
        default=None, description="Ground speed in meters per second"
    )
    heading: Optional[float] = Field(
        default=None, description="True track in degrees clockwise from north"
    )
    vertrate: Optional[float] = Field(
        default=None, description="Vertical rate in meters per second"
    )
    callsign: str = Field(default="", description="Callsign, may be blank")
    onground: Optional[bool] = Field(default=None)
    alert: Optional[bool] = Field(default=None)
    spi: Optional[bool] = Field(default=None)
    squawk: Optional[str] = Field(default=None, description="Transponder code")
    baroaltitude: Optional[float] = Field(
        default=None, description="Barometric altitude in meters"
    )
    geoaltitude: Optional[float] = Field(
        default=None, description="Geometric altitude in meters"
    )
    lastposupdate: Optional[float] = Field(default=None)
    lastcontact: Optional[float] = Field(default=None)

    model_config = ConfigDict(extra="allow", frozen=True)

    @property
    def entity_id(self) -> str:
        return self.icao24

    @property
    def position(self) -> tuple[float, float]:
        """Return the (longitude, latitude) pair."""
        return (self.lon, self.lat)

    @property
    def label(self) -> str:
        return (self.callsign or "").strip()

    @property
    def altitude(self) -> Optional[float]:
        return self.geoaltitude if self.geoaltitude is not None else self.baroaltitude


@dataclass(frozen=True)
class Dataset:
    """Immutable, time-ascending sequence of state vectors.

    Build instances with :meth:`from_states`, which performs the one global
    sort. The sort is stable, so records sharing a timestamp keep their
    original relative order.
    """

    date: str
    states: tuple[StateVector, ...]
    times: tuple[int, ...] = field(repr=False)
    skipped_records: int = 0

    @classmethod
    def from_states(
        cls, date: str, states: Iterable[StateVector], skipped_records: int = 0
    ) -> "Dataset":
        ordered = tuple(sorted(states, key=lambda state: state.time))
        return cls(
            date=date,
            states=ordered,
            times=tuple(state.time for state in ordered),
            skipped_records=skipped_records,
        )

    def __len__(self) -> int:
        return len(self.states)

    @property
    def min_time(self) -> int:
        return self.times[0]

    @property
    def max_time(self) -> int:
        return self.times[-1]

    @property
    def duration(self) -> int:
        return self.max_time - self.min_time


__all__ = ["Dataset", "StateVector"]
