"""API routers for the flightloop replay service."""

from fastapi import APIRouter

from .health import router as health_router
from .map import router as map_router
from .replay import router as replay_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(replay_router)
api_router.include_router(map_router)

__all__ = ["api_router"]
