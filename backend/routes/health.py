"""Health and readiness check routes."""

from fastapi import APIRouter, Request

from config import settings

router = APIRouter()

SERVICE_NAME = "random-episode-addon"


@router.get("/ready")
async def ready() -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": SERVICE_NAME, "commit": settings.git_sha}


@router.get("/health")
async def health(request: Request) -> dict:
    """Process health plus cache occupancy. Does not call Cinemeta."""
    episode_cache = request.app.state.episode_cache
    sweeper = getattr(request.app.state, "cache_sweeper", None)
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "commit": settings.git_sha,
        "cache_entries": len(episode_cache.store),
        "sweeper": "running" if sweeper is not None and sweeper.running else "stopped",
    }
