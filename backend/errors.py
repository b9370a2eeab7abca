"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AddonError(Exception):
    """Base exception tagged with the pipeline stage that failed.

    Never reaches the client: the meta route answers ``{"meta": null}``.
    """

    stage = "unknown"


class UnsupportedTypeError(AddonError):
    stage = "type"

    def __init__(self, content_type: str, supported: str):
        super().__init__(f"Unsupported type: {content_type}. Supported: {supported}")


class UpstreamUnavailableError(AddonError):
    stage = "fetch"


class MetaNotFoundError(UpstreamUnavailableError):
    """Upstream answered, but not with a usable document."""


class UpstreamError(UpstreamUnavailableError):
    """Transport-level failure: timeout, connection error, unbuildable URL, undecodable body."""


class NoEligibleEpisodesError(AddonError):
    stage = "select"

    def __init__(self, meta_id: str, video_count: int):
        super().__init__(f"No eligible episodes for {meta_id} ({video_count} videos)")


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
