"""Build per-tick feature collections and hand them to a rendering surface."""

from __future__ import annotations

import logging
from typing import Mapping, Protocol, Sequence

from flightloop.config import DEFAULT_PALETTE
from flightloop.engine.clock import ClockReading
from flightloop.engine.trails import TrailSample
from flightloop.models.features import (
    Feature,
    FeatureCollection,
    Frame,
    LineStringGeometry,
    PointGeometry,
)
from flightloop.models.map_view import POSITIONS_SOURCE, TRAILS_SOURCE
from flightloop.models.state_vector import StateVector

logger = logging.getLogger("flightloop.engine.frames")


def color_for_entity(entity_id: str, palette: Sequence[str] = DEFAULT_PALETTE) -> str:
    """Pick a stable palette color for an entity identifier."""

    if not palette:
        raise ValueError("palette must contain at least one color")
    value = 0
    for char in entity_id:
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    return palette[value % len(palette)]


class RenderSurface(Protocol):
    def replace(self, frame: Frame) -> None:
        """Replace both sources with the contents of ``frame``."""


class InMemorySurface:
    """Rendering surface that keeps the latest frame for API clients."""

    def __init__(self) -> None:
        self.frame = Frame()
        self.updates = 0

    def replace(self, frame: Frame) -> None:
        self.frame = frame
        self.updates += 1

    def source(self, name: str) -> FeatureCollection:
        if name == POSITIONS_SOURCE:
            return self.frame.positions
        if name == TRAILS_SOURCE:
            return self.frame.trails
        raise KeyError(name)


class FrameEmitter:
    """Convert aggregated states and trails into a :class:`Frame`."""

    def __init__(
        self, surface: RenderSurface, palette: Sequence[str] = DEFAULT_PALETTE
    ) -> None:
        self.surface = surface
        self.palette = tuple(palette)

    def build(
        self,
        reading: ClockReading,
        latest: Mapping[str, StateVector],
        trails: Mapping[str, Sequence[TrailSample]],
    ) -> Frame:
        return Frame(
            sim_time=reading.sim_time,
            progress=reading.progress,
            cycle=reading.cycle,
            positions=self.build_positions(latest),
            trails=self.build_trails(trails),
        )

    def build_positions(self, latest: Mapping[str, StateVector]) -> FeatureCollection:
        features = [
            Feature(
                geometry=PointGeometry(coordinates=state.position),
                properties={
                    "label": state.label,
                    "velocity": state.velocity,
                    "heading": state.heading,
                    "altitude": state.altitude,
                    "entityId": entity_id,
                    "color": color_for_entity(entity_id, self.palette),
                },
            )
            for entity_id, state in latest.items()
        ]
        return FeatureCollection(features=features)

    def build_trails(
        self, trails: Mapping[str, Sequence[TrailSample]]
    ) -> FeatureCollection:
        features = [
            Feature(
                geometry=LineStringGeometry(
                    coordinates=[sample.position for sample in samples]
                ),
                properties={
                    "entityId": entity_id,
                    "color": color_for_entity(entity_id, self.palette),
                },
            )
            for entity_id, samples in trails.items()
            if len(samples) >= 2
        ]
        return FeatureCollection(features=features)

    def emit(self, frame: Frame) -> None:
        self.surface.replace(frame)
        logger.debug(
            "Emitted frame sim_time=%s positions=%s trails=%s",
            frame.sim_time,
            len(frame.positions.features),
            len(frame.trails.features),
        )


__all__ = ["FrameEmitter", "InMemorySurface", "RenderSurface", "color_for_entity"]
