"""Map view configuration endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from flightloop.config import get_map_access_token
from flightloop.models.map_view import MapViewConfig

router = APIRouter(prefix="/api/v1", tags=["map"])

logger = logging.getLogger("flightloop.api.map")


@router.get("/map", response_model=MapViewConfig, summary="Map view and layer setup")
def get_map_config() -> MapViewConfig:
    """Return the static map view, layer paint definitions and access token."""

    try:
        token = get_map_access_token()
    except RuntimeError as exc:
        logger.warning("Map access token unavailable: %s", exc)
        token = None
    return MapViewConfig(access_token=token)
