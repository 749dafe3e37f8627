from __future__ import annotations

from enum import Enum

from .cache import CacheEntry
from .tiles.base import TileDefinition

CACHE_TTL_MS = 5 * 60 * 1000

class Action(Enum):
    SHOW_CACHED_THEN_BACKGROUND_REFRESH = "show_cached_then_background_refresh"
    SHOW_CACHED_THEN_FOREGROUND_REFRESH = "show_cached_then_foreground_refresh"
    FETCH_FRESH = "fetch_fresh"

def is_stale(entry: CacheEntry, now: float, ttl_ms: float = CACHE_TTL_MS) -> bool:
    return entry.age(now) > ttl_ms

def decide(tile: TileDefinition, entry: CacheEntry | None, now: float, ttl_ms: float = CACHE_TTL_MS) -> Action:
    if entry is None:
        return Action.FETCH_FRESH
    if is_stale(entry, now, ttl_ms):
        return Action.SHOW_CACHED_THEN_FOREGROUND_REFRESH
    return Action.SHOW_CACHED_THEN_BACKGROUND_REFRESH
