"""Addon manifest route."""

from fastapi import APIRouter

router = APIRouter()

MANIFEST = {
    "id": "com.stremio.random.episode",
    "version": "1.0.0",
    "name": "Random Episode Button",
    "description": "Adds a Random Episode button to TV series detail pages",
    "resources": ["meta"],
    "types": ["series"],
    "idPrefixes": ["tt"],
}


@router.get("/manifest.json")
async def manifest() -> dict:
    return MANIFEST
