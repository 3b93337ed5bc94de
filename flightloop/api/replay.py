"""Replay frame and status endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, status

from flightloop.engine.frames import InMemorySurface
from flightloop.models.features import FeatureCollection, Frame
from flightloop.models.replay import ReplayStatus

router = APIRouter(prefix="/api/v1/replay", tags=["replay"])

logger = logging.getLogger("flightloop.api.replay")


def _surface(request: Request) -> InMemorySurface:
    surface = getattr(request.app.state, "surface", None)
    if surface is None:
        surface = InMemorySurface()
        request.app.state.surface = surface
    return surface


@router.get("/status", response_model=ReplayStatus, summary="Replay session status")
async def get_replay_status(request: Request) -> ReplayStatus:
    """Report whether the replay is running and what it is showing."""

    session = getattr(request.app.state, "session", None)
    if session is not None:
        return session.status()
    return getattr(request.app.state, "replay_status", None) or ReplayStatus(state="idle")


@router.get("/frame", response_model=Frame, summary="Latest rendered frame")
async def get_frame(request: Request) -> Frame:
    return _surface(request).frame


@router.get(
    "/sources/{name}",
    response_model=FeatureCollection,
    summary="Latest contents of one rendering source",
)
async def get_source(name: str, request: Request) -> FeatureCollection:
    try:
        return _surface(request).source(name)
    except KeyError:
        logger.debug("Unknown source requested: %s", name)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown source '{name}'",
        ) from None
