"""Shared pytest fixtures for the random episode addon test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from services.augmentation import EpisodeAugmentationCache
from services.cache import MetaStore
from services.cinemeta import CinemetaClient

CINEMETA_URL = "https://cinemeta.test"
GOT_ID = "tt0944947"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingHandler:
    """httpx.MockTransport handler that serves queued responses and records requests."""

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # the last queued response repeats once the queue is drained
        item = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(item, Exception):
            raise item
        # fresh Response per call; httpx binds a response to a single request
        return httpx.Response(item.status_code, headers=item.headers, content=item.content)

    @property
    def calls(self) -> int:
        return len(self.requests)


def got_meta(links: list[dict] | None = None) -> dict[str, Any]:
    """Cinemeta-shaped meta with 8 eligible episodes, a special and a trailer."""
    videos: list[dict[str, Any]] = [
        {"id": f"{GOT_ID}:1:{n}", "season": 1, "episode": n, "title": f"Episode {n}"}
        for n in range(1, 9)
    ]
    videos.append({"id": f"{GOT_ID}:0:1", "season": 0, "episode": 1, "title": "Inside the Episode"})
    videos.append({"id": "trailer", "title": "Official Trailer"})
    meta: dict[str, Any] = {
        "id": GOT_ID,
        "type": "series",
        "name": "Game of Thrones",
        "genres": ["Drama", "Fantasy"],
        "videos": videos,
    }
    if links is not None:
        meta["links"] = links
    return meta


def meta_response(meta: dict[str, Any], status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"meta": meta})


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> MetaStore:
    return MetaStore(clock=clock)


@pytest.fixture
def make_cinemeta() -> Callable[[Callable], CinemetaClient]:
    def _make(handler: Callable) -> CinemetaClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return CinemetaClient(client, CINEMETA_URL)

    return _make


@pytest.fixture
def make_cache(store: MetaStore, make_cinemeta) -> Callable[..., tuple[EpisodeAugmentationCache, RecordingHandler]]:
    def _make(*responses: httpx.Response | Exception) -> tuple[EpisodeAugmentationCache, RecordingHandler]:
        handler = RecordingHandler(*responses)
        return EpisodeAugmentationCache(store, make_cinemeta(handler)), handler

    return _make


@pytest.fixture
def malformed_response() -> httpx.Response:
    return httpx.Response(200, content=b"<html>not json</html>", headers={"content-type": "application/json"})
