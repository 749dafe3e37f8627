"""Tiles backed by the some-random-api animal endpoints ({image, fact})."""
from __future__ import annotations

from ..fetcher import HttpClient
from .base import TileResult
from .schemas import AnimalFact, DecodeError, decode

BASE_URL = "https://some-random-api.com/animal/"

# tile id -> (title, animal endpoint, text prefix)
FACT_TILES: dict[str, tuple[str, str, str]] = {
    "kangaroo": ("Kangaroo Fact", "kangaroo", ""),
    "redpanda": ("Red Panda Fact", "panda", "Red Panda (panda fact proxy): "),
    "panda": ("Panda Fact", "panda", ""),
    "koala": ("Koala Fact", "koala", ""),
    "bird": ("Bird Fact", "bird", ""),
}

async def fetch_animal(http: HttpClient, animal: str, prefix: str = "") -> TileResult:
    r = await http.fetch_with_retry(BASE_URL + animal)
    if not r.ok:
        return TileResult.failure(r.error)
    try:
        body = decode(AnimalFact, r.data)
    except DecodeError as e:
        return TileResult.failure(str(e))
    return TileResult.success(body.image, prefix + body.fact)
