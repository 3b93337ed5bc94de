"""Static map view and layer configuration for the rendering surface."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

POSITIONS_SOURCE = "positions"
TRAILS_SOURCE = "trails"


class BoundingBox(BaseModel):
    """Geographic bounding box in decimal degrees."""

    south: float
    west: float
    north: float
    east: float


ICELAND_BBOX = BoundingBox(south=60.0, west=-30.0, north=70.0, east=-10.0)


class LayerDefinition(BaseModel):
    id: str
    type: str
    source: str
    layout: dict[str, Any] = Field(default_factory=dict)
    paint: dict[str, Any] = Field(default_factory=dict)


def default_layers() -> list[LayerDefinition]:
    """Layers drawn on top of the two replay sources, bottom to top."""

    return [
        LayerDefinition(
            id="flight-trails",
            type="line",
            source=TRAILS_SOURCE,
            layout={"line-cap": "round", "line-join": "round"},
            paint={
                "line-color": ["get", "color"],
                "line-width": 2,
                "line-opacity": 0.6,
            },
        ),
        LayerDefinition(
            id="flight-glow",
            type="circle",
            source=POSITIONS_SOURCE,
            paint={
                "circle-radius": 12,
                "circle-color": ["get", "color"],
                "circle-opacity": 0.2,
                "circle-blur": 0.5,
            },
        ),
        LayerDefinition(
            id="flight-points",
            type="circle",
            source=POSITIONS_SOURCE,
            paint={
                "circle-radius": 6,
                "circle-color": ["get", "color"],
                "circle-opacity": 0.9,
                "circle-stroke-width": 1,
                "circle-stroke-color": "#ffffff",
            },
        ),
        LayerDefinition(
            id="flight-labels",
            type="symbol",
            source=POSITIONS_SOURCE,
            layout={
                "text-field": ["get", "label"],
                "text-size": 11,
                "text-offset": [0, 1.5],
                "text-anchor": "top",
            },
            paint={
                "text-color": "#ffffff",
                "text-halo-color": "#000000",
                "text-halo-width": 1,
            },
        ),
    ]


class MapViewConfig(BaseModel):
    """Everything a map client needs to set up its view before the first frame."""

    style: str = Field(default="mapbox://styles/mapbox/dark-v11")
    center: tuple[float, float] = Field(
        default=(-18.5, 65.0), description="(longitude, latitude)"
    )
    zoom: float = 4.5
    pitch: float = 30.0
    bearing: float = 0.0
    bounds: BoundingBox = Field(default_factory=lambda: ICELAND_BBOX.model_copy())
    sources: list[str] = Field(
        default_factory=lambda: [POSITIONS_SOURCE, TRAILS_SOURCE]
    )
    layers: list[LayerDefinition] = Field(default_factory=default_layers)
    access_token: Optional[str] = Field(
        default=None, description="Credential for the map tile provider"
    )


__all__ = [
    "BoundingBox",
    "ICELAND_BBOX",
    "LayerDefinition",
    "MapViewConfig",
    "POSITIONS_SOURCE",
    "TRAILS_SOURCE",
    "default_layers",
]
