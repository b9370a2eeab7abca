"""Episode-augmentation cache: the cache-backed fetch behind GET /meta.

hit  → stored document, no I/O
miss → Cinemeta fetch → eligibility filter → random pick → link prepend → store

Failures are never cached, so the next request for the same id goes upstream
again. Concurrent misses on one id each fetch and the last write wins.
"""

import copy
import logging
import random

from errors import AddonError, NoEligibleEpisodesError, UnsupportedTypeError
from services.cache import CacheKey, MetaStore
from services.cinemeta import CinemetaClient
from services.episodes import eligible_episodes, pick_random_episode, with_random_episode_link

logger = logging.getLogger(__name__)

SUPPORTED_TYPE = "series"


class EpisodeAugmentationCache:
    def __init__(self, store: MetaStore, cinemeta: CinemetaClient, rng: random.Random | None = None):
        self.store = store
        self.cinemeta = cinemeta
        self._rng = rng or random.Random()

    async def augment(self, content_type: str, meta_id: str) -> dict:
        """Return augmented metadata, raising an AddonError subclass on failure."""
        if content_type != SUPPORTED_TYPE:
            raise UnsupportedTypeError(content_type, SUPPORTED_TYPE)

        key = CacheKey(content_type, meta_id)
        cached = self.store.get(key)
        if cached is not None:
            logger.debug("Returning cached data for %s", meta_id)
            return cached

        meta = await self.cinemeta.fetch(content_type, meta_id)

        episodes = eligible_episodes(meta["videos"])
        logger.info("%d valid episodes after filtering for %s", len(episodes), meta_id)
        if not episodes:
            raise NoEligibleEpisodesError(meta_id, len(meta["videos"]))

        episode = pick_random_episode(episodes, self._rng)
        logger.info("Selected S%sE%s - %r for %s", episode.season, episode.episode, episode.title, meta_id)

        augmented = with_random_episode_link(meta, meta_id, episode)
        self.store.put(key, augmented)
        return copy.deepcopy(augmented)

    async def get_or_augment(self, content_type: str, meta_id: str) -> dict | None:
        """Augmented metadata for (type, id), or None when unavailable for any reason."""
        try:
            return await self.augment(content_type, meta_id)
        except AddonError as e:
            logger.info("No augmented meta for %s/%s at stage %s: %s", content_type, meta_id, e.stage, e)
            return None
