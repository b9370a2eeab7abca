"""Cinemeta client: one-shot metadata lookup for a (type, id) pair.

No caching, retries or backoff here. Callers decide what a failure means.
"""

import logging

import httpx

from errors import MetaNotFoundError, UpstreamError

logger = logging.getLogger(__name__)


class CinemetaClient:
    def __init__(self, client: httpx.AsyncClient, base_url: str):
        self._client = client
        self._base_url = base_url.rstrip("/")

    def meta_url(self, content_type: str, meta_id: str) -> str:
        return f"{self._base_url}/meta/{content_type}/{meta_id}.json"

    async def fetch(self, content_type: str, meta_id: str) -> dict:
        """Fetch the ``meta`` object for *meta_id*.

        Raises MetaNotFoundError on a non-success status or a body without a
        non-empty ``meta.videos`` list, and UpstreamError on transport or
        decode failures.
        """
        url = self.meta_url(content_type, meta_id)
        logger.info("Fetching from Cinemeta: %s", meta_id)
        try:
            resp = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Cinemeta request failed for %s: %s", meta_id, e)
            raise UpstreamError(f"Cinemeta request failed: {e}") from e

        if not resp.is_success:
            logger.info("Cinemeta returned %d for %s", resp.status_code, meta_id)
            raise MetaNotFoundError(f"Cinemeta returned {resp.status_code} for {meta_id}")

        try:
            data = resp.json()
        except ValueError as e:
            logger.warning("Cinemeta sent malformed JSON for %s: %s", meta_id, e)
            raise UpstreamError(f"Malformed Cinemeta response: {e}") from e

        meta = data.get("meta") if isinstance(data, dict) else None
        videos = meta.get("videos") if isinstance(meta, dict) else None
        if not isinstance(videos, list) or not videos:
            logger.info("No videos array in Cinemeta response for %s", meta_id)
            raise MetaNotFoundError(f"No videos for {meta_id}")

        logger.info("Found %d videos for %s", len(videos), meta_id)
        return meta
