from __future__ import annotations

from functools import partial
from typing import Awaitable, Callable

from ..fetcher import HttpClient
from . import catfact, dog, facts, fox, shiba
from .base import TileDefinition, TileResult

REGISTRY: dict[str, tuple[str, Callable[[HttpClient], Awaitable[TileResult]]]] = {
    dog.name: (dog.title, dog.fetch),
    catfact.name: (catfact.title, catfact.fetch),
    shiba.name: (shiba.title, shiba.fetch),
    fox.name: (fox.title, fox.fetch),
}
for _id, (_title, _animal, _prefix) in facts.FACT_TILES.items():
    REGISTRY[_id] = (_title, partial(facts.fetch_animal, animal=_animal, prefix=_prefix))

DEFAULT_ORDER = ["dog", "catfact", "kangaroo", "shiba", "redpanda", "fox", "panda", "koala", "bird"]

# Tiles that no longer exist; their cache entries are dropped at startup.
DEPRECATED_IDS = ["duck", "shibe", "zoo"]

async def _unknown_tile() -> TileResult:
    return TileResult.failure("Unknown tile")

def build_tiles(order: list[str], http: HttpClient) -> list[TileDefinition]:
    tiles: list[TileDefinition] = []
    for tile_id in order:
        entry = REGISTRY.get(tile_id)
        if entry is None:
            tiles.append(TileDefinition(id=tile_id, title=tile_id, fetcher=_unknown_tile))
            continue
        title, fetch = entry
        tiles.append(TileDefinition(id=tile_id, title=title, fetcher=partial(fetch, http)))
    return tiles
