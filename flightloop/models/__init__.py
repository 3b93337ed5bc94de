"""Pydantic models for the flightloop replay service."""

from .features import Feature, FeatureCollection, Frame, LineStringGeometry, PointGeometry
from .map_view import BoundingBox, LayerDefinition, MapViewConfig
from .replay import ReplayStatus
from .state_vector import Dataset, StateVector

__all__ = [
    "BoundingBox",
    "Dataset",
    "Feature",
    "FeatureCollection",
    "Frame",
    "LayerDefinition",
    "LineStringGeometry",
    "MapViewConfig",
    "PointGeometry",
    "ReplayStatus",
    "StateVector",
]
