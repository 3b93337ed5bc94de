"""Health check endpoint."""

from fastapi import APIRouter, Request

from flightloop.config import settings

router = APIRouter()


@router.get("/healthz", summary="Health check")
def health_check(request: Request) -> dict[str, str]:
    """Report liveness plus the replay state; a failed load is still healthy."""

    session = getattr(request.app.state, "session", None)
    if session is not None:
        replay_state = session.status().state
    else:
        replay_status = getattr(request.app.state, "replay_status", None)
        replay_state = replay_status.state if replay_status else "idle"
    return {"status": "ok", "env": settings.flightloop_env, "replay": replay_state}
