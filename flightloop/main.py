from __future__ import annotations

import contextlib
import logging
import time

from fastapi import FastAPI, Request

from flightloop.api import api_router
from flightloop.config import settings
from flightloop.engine import InMemorySurface, ReplaySession
from flightloop.ingestors import DatasetLoader, EmptyDatasetError, LoadError
from flightloop.models.replay import ReplayStatus

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("flightloop")


async def start_replay(app: FastAPI, loader: DatasetLoader | None = None) -> None:
    """Load the dataset and start the replay loop.

    Load failures leave the surface with empty collections and record the
    reason in ``app.state.replay_status``.
    """

    app.state.surface = InMemorySurface()
    app.state.session = None
    app.state.replay_status = ReplayStatus(state="loading")

    try:
        dataset = await (loader or DatasetLoader()).load()
    except EmptyDatasetError as exc:
        logger.info("No flight data found: %s", exc)
        app.state.replay_status = ReplayStatus(state="empty", detail=str(exc))
        return
    except LoadError as exc:
        logger.error("Failed to load flight data: %s", exc)
        app.state.replay_status = ReplayStatus(state="failed", detail=str(exc))
        return

    session = ReplaySession(dataset, app.state.surface)
    app.state.session = session
    session.start()
    logger.info("Replay session started for %s", dataset.date or "dataset")


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown lifecycle."""

    app.state.surface = InMemorySurface()
    app.state.session = None
    app.state.replay_status = ReplayStatus(state="idle")

    if settings.enable_replay:
        await start_replay(app)
    else:
        logger.info("Replay disabled; serving empty sources")

    try:
        yield
    finally:
        session: ReplaySession | None = getattr(app.state, "session", None)
        if session:
            await session.stop()


app = FastAPI(title="flightloop", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log basic request information for observability."""

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "HTTP %s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.include_router(api_router)


@app.get("/", summary="Root")
def read_root() -> dict[str, str]:
    """Basic root endpoint for quick verification."""

    return {"message": "flightloop replay is running"}
