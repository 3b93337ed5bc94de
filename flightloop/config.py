"""Configuration settings for the flightloop replay service."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger("flightloop.config")

MAP_TOKEN_PARAMETER = "/flightloop/mapbox/access_token"

DEFAULT_PALETTE = (
    "#00ffff",
    "#ff6b6b",
    "#ffd93d",
    "#6bcb77",
    "#4d96ff",
    "#c77dff",
    "#ff9f1c",
    "#f15bb5",
)


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


def _get_palette(env_var: str) -> tuple[str, ...]:
    raw = os.getenv(env_var)
    if not raw:
        return DEFAULT_PALETTE
    colors = tuple(part.strip() for part in raw.split(",") if part.strip())
    return colors or DEFAULT_PALETTE


@lru_cache(maxsize=1)
def get_map_access_token() -> str:
    """Return the access token used by the map rendering surface.

    ``MAPBOX_TOKEN`` wins when set. Otherwise the token is read from AWS SSM
    Parameter Store and cached in-memory. Any failure results in a runtime
    error; callers decide whether that is fatal.
    """

    value = os.getenv("MAPBOX_TOKEN")
    if value:
        return value

    try:
        client = boto3.client(
            "ssm",
            region_name=os.getenv("AWS_REGION")
            or os.getenv("AWS_DEFAULT_REGION")
            or "us-east-1",
        )
        response = client.get_parameter(Name=MAP_TOKEN_PARAMETER, WithDecryption=True)
        value = response.get("Parameter", {}).get("Value")
    except (ClientError, BotoCoreError) as exc:  # pragma: no cover - AWS error passthrough
        logger.error("Failed to load map access token from SSM: %s", exc)
        raise RuntimeError("Unable to load map access token from SSM") from exc

    if not value:
        logger.error("Received empty map access token from SSM")
        raise RuntimeError("Map access token not configured in SSM")

    return value


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    flightloop_env: str = os.getenv("FLIGHTLOOP_ENV", "local")
    log_level: str = os.getenv("FLIGHTLOOP_LOG_LEVEL", "INFO")

    # Dataset loading
    data_source: str = os.getenv(
        "FLIGHTLOOP_DATA_SOURCE", "data/iceland-flights-2025-12-01.json"
    )
    load_timeout: float = float(os.getenv("FLIGHTLOOP_LOAD_TIMEOUT", "30.0"))

    # Replay engine
    enable_replay: bool = _get_bool("ENABLE_REPLAY", default=True)
    animation_duration_ms: float = float(
        os.getenv("FLIGHTLOOP_ANIMATION_DURATION_MS", "60000")
    )
    window_seconds: float = float(os.getenv("FLIGHTLOOP_WINDOW_SECONDS", "600"))
    max_trail_points: int = int(os.getenv("FLIGHTLOOP_MAX_TRAIL_POINTS", "30"))
    frame_rate: float = float(os.getenv("FLIGHTLOOP_FRAME_RATE", "30"))
    palette: tuple[str, ...] = field(
        default_factory=lambda: _get_palette("FLIGHTLOOP_PALETTE")
    )


settings = Settings()

__all__ = ["DEFAULT_PALETTE", "settings", "Settings", "get_map_access_token"]
