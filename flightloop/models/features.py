"""GeoJSON-like models handed to the rendering surface."""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, Field

Coordinate = tuple[float, float]


class PointGeometry(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: Coordinate = Field(..., description="(longitude, latitude)")


class LineStringGeometry(BaseModel):
    type: Literal["LineString"] = "LineString"
    coordinates: list[Coordinate] = Field(
        ..., min_length=2, description="Positions ordered oldest to newest"
    )


class Feature(BaseModel):
    type: Literal["Feature"] = "Feature"
    geometry: Union[PointGeometry, LineStringGeometry] = Field(
        ..., discriminator="type"
    )
    properties: dict[str, Any] = Field(default_factory=dict)


class FeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[Feature] = Field(default_factory=list)


class Frame(BaseModel):
    """Everything the rendering surface receives for a single tick."""

    sim_time: float | None = Field(
        default=None, description="Simulated epoch seconds shown by this frame"
    )
    progress: float = Field(
        default=0.0, description="Position within the current loop, in [0, 1)"
    )
    cycle: int = Field(default=0, description="Number of completed loops")
    positions: FeatureCollection = Field(default_factory=FeatureCollection)
    trails: FeatureCollection = Field(default_factory=FeatureCollection)


__all__ = [
    "Coordinate",
    "Feature",
    "FeatureCollection",
    "Frame",
    "LineStringGeometry",
    "PointGeometry",
]
