from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable

from .store import KeyValueStore
from .tiles.base import TileResult

logger = logging.getLogger(__name__)

KEY_PREFIX = "animal-tile-"

def cache_key(tile_id: str) -> str:
    return f"{KEY_PREFIX}{tile_id}"

@dataclass(frozen=True)
class CacheEntry:
    timestamp: float | None
    data: TileResult

    @property
    def legacy(self) -> bool:
        return self.timestamp is None

    def age(self, now: float) -> float:
        # Entries written before timestamps existed are always expired.
        if self.timestamp is None:
            return math.inf
        return now - self.timestamp

class TileCache:
    """Last successful result per tile, best effort.

    Storage failures are logged and swallowed: a cache that cannot be read
    or written behaves as an empty one.
    """

    def __init__(self, store: KeyValueStore, clock: Callable[[], float]) -> None:
        self.store = store
        self.clock = clock

    def read(self, tile_id: str) -> CacheEntry | None:
        try:
            raw = self.store.get(cache_key(tile_id))
        except (OSError, ValueError) as e:
            logger.warning("Cache read failed for %s: %s", tile_id, e)
            return None
        if not raw:
            return None
        try:
            parsed = json.loads(raw)
        except ValueError:
            logger.debug("Ignoring corrupt cache entry for %s", tile_id)
            return None
        if not isinstance(parsed, dict) or not parsed:
            return None

        ts = parsed.get("ts")
        if isinstance(ts, (int, float)) and not isinstance(ts, bool) and parsed.get("data"):
            data = TileResult.from_json(parsed["data"])
            return CacheEntry(timestamp=float(ts), data=data) if data is not None else None

        data = TileResult.from_json(parsed)
        return CacheEntry(timestamp=None, data=data) if data is not None else None

    def write(self, tile_id: str, result: TileResult) -> None:
        if not result.ok:
            return
        try:
            payload = json.dumps({"ts": self.clock(), "data": result.to_json()})
            self.store.set(cache_key(tile_id), payload)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Cache write failed for %s: %s", tile_id, e)

    def evict(self, tile_id: str) -> None:
        try:
            self.store.remove(cache_key(tile_id))
        except (OSError, ValueError) as e:
            logger.warning("Cache evict failed for %s: %s", tile_id, e)

    def evict_all(self, tile_ids: Iterable[str]) -> None:
        for tile_id in tile_ids:
            self.evict(tile_id)

    def migrate(self, deprecated_ids: Iterable[str]) -> None:
        """Drop entries of tiles that were removed from the panel."""
        self.evict_all(deprecated_ids)
