"""FastAPI application entry point for the Random Episode addon."""

import logging
import sys
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from errors import register_error_handlers
from services.augmentation import EpisodeAugmentationCache
from services.cache import CacheSweeper, MetaStore
from services.cinemeta import CinemetaClient

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)

SAMPLE_SERIES = {
    "Game of Thrones": "tt0944947",
    "Breaking Bad": "tt0903747",
    "The Office": "tt0386676",
}


def _log_startup_urls(base_url: str) -> None:
    logger.info("Random Episode addon running")
    logger.info("Addon URL: %s", base_url)
    logger.info("Manifest: %s/manifest.json", base_url)
    for title, imdb_id in SAMPLE_SERIES.items():
        logger.info("Test %s: %s/meta/series/%s.json", title, base_url, imdb_id)


@asynccontextmanager
async def lifespan(app: FastAPI):
    http_client = None
    if getattr(app.state, "episode_cache", None) is None:
        http_client = httpx.AsyncClient()
        app.state.episode_cache = EpisodeAugmentationCache(
            store=MetaStore(),
            cinemeta=CinemetaClient(http_client, settings.cinemeta_url),
        )

    sweeper = CacheSweeper(app.state.episode_cache.store)
    sweeper.start()
    app.state.cache_sweeper = sweeper
    _log_startup_urls(settings.public_url)
    try:
        yield
    finally:
        await sweeper.stop()
        if http_client is not None:
            await http_client.aclose()
        logger.info("Random Episode addon stopped")


def create_app(episode_cache: EpisodeAugmentationCache | None = None) -> FastAPI:
    app = FastAPI(title="Random Episode Addon", version="1.0.0", lifespan=lifespan)
    app.state.episode_cache = episode_cache

    # CORS: Stremio clients call the addon from arbitrary origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.manifest import router as manifest_router
    from routes.meta import router as meta_router

    app.include_router(health_router)
    app.include_router(manifest_router)
    app.include_router(meta_router)

    return app


app = create_app()


def main() -> None:
    """Run the addon under uvicorn; a port that cannot be bound exits the process."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
