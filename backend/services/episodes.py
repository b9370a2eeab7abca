"""Random episode selection and link injection.

A video is eligible when season and episode are non-zero numbers and the
title is non-empty. Episode 0 (specials numbering) is excluded on purpose.
"""

import math
import random
from dataclasses import dataclass

RANDOM_LINK_NAME = "🎲 Random Episode"
RANDOM_LINK_CATEGORY = "other"
RANDOM_LINK_TEMPLATE = "stremio:///detail/series/{meta_id}/{season}/{video_id}"


@dataclass(frozen=True)
class EpisodeRecord:
    season: int | float
    episode: int | float
    title: str
    video_id: str | None = None

    @classmethod
    def from_video(cls, video) -> "EpisodeRecord | None":
        """Project an upstream video onto an EpisodeRecord, or None if ineligible."""
        if not isinstance(video, dict):
            return None
        season = video.get("season")
        episode = video.get("episode")
        title = video.get("title")
        if not (_is_nonzero_number(season) and _is_nonzero_number(episode)):
            return None
        if not isinstance(title, str) or not title:
            return None
        video_id = video.get("id")
        return cls(
            season=season,
            episode=episode,
            title=title,
            video_id=video_id if isinstance(video_id, str) and video_id else None,
        )


def _is_nonzero_number(value) -> bool:
    # bool is an int subclass; True must not count as season 1
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    return math.isfinite(value) and value != 0


def eligible_episodes(videos: list) -> list[EpisodeRecord]:
    records = (EpisodeRecord.from_video(v) for v in videos)
    return [r for r in records if r is not None]


def pick_random_episode(episodes: list[EpisodeRecord], rng: random.Random | None = None) -> EpisodeRecord:
    """Uniform draw over *episodes*. Raises IndexError on an empty list."""
    return (rng or random).choice(episodes)


def build_random_episode_link(meta_id: str, episode: EpisodeRecord) -> dict:
    # Cinemeta video ids are "<imdb id>:<season>:<episode>"; used when upstream omits one
    video_id = episode.video_id or f"{meta_id}:{episode.season}:{episode.episode}"
    return {
        "name": RANDOM_LINK_NAME,
        "category": RANDOM_LINK_CATEGORY,
        "url": RANDOM_LINK_TEMPLATE.format(meta_id=meta_id, season=episode.season, video_id=video_id),
    }


def with_random_episode_link(meta: dict, meta_id: str, episode: EpisodeRecord) -> dict:
    """Shallow copy of *meta* with the random-episode link prepended to ``links``."""
    existing = meta.get("links")
    if not isinstance(existing, list):
        existing = []
    return {**meta, "links": [build_random_episode_link(meta_id, episode), *existing]}
