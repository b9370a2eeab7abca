"""Meta resource route: Cinemeta metadata plus a random episode link."""

import logging

from fastapi import APIRouter, Request

from services.augmentation import EpisodeAugmentationCache

logger = logging.getLogger(__name__)

router = APIRouter()


def get_episode_cache(request: Request) -> EpisodeAugmentationCache:
    return request.app.state.episode_cache


@router.get("/meta/{content_type}/{meta_id}.json")
async def meta(content_type: str, meta_id: str, request: Request) -> dict:
    """Always 200: unsupported types and upstream failures both come back as null meta."""
    logger.info("Meta handler called: type=%s id=%s", content_type, meta_id)
    episode_cache = get_episode_cache(request)
    return {"meta": await episode_cache.get_or_augment(content_type, meta_id)}
