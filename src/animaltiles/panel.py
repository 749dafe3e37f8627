from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable

from .cache import TileCache
from .clipboard import copy_text
from .controller import TileController
from .scheduler import Scheduler
from .tiles.base import TileDefinition

logger = logging.getLogger(__name__)

INITIAL_STAGGER_MS = 120
REFRESH_ALL_STAGGER_MS = 80
COPY_STATUS_MS = 1200

class Panel:
    """Owns the tiles and drives the whole-panel operations."""

    def __init__(
        self,
        tiles: Iterable[TileDefinition],
        controller: TileController,
        *,
        initial_stagger_ms: float = INITIAL_STAGGER_MS,
        refresh_all_stagger_ms: float = REFRESH_ALL_STAGGER_MS,
        clipboard: Callable[[str], None] = copy_text,
    ) -> None:
        self.tiles = list(tiles)
        self.controller = controller
        self.initial_stagger_ms = initial_stagger_ms
        self.refresh_all_stagger_ms = refresh_all_stagger_ms
        self.clipboard = clipboard
        self.refresh_all_enabled = True

    @property
    def board(self):
        return self.controller.board

    @property
    def cache(self) -> TileCache:
        return self.controller.cache

    @property
    def scheduler(self) -> Scheduler:
        return self.controller.scheduler

    def mount(self) -> None:
        for tile in self.tiles:
            node = self.board.mount(tile)
            node.show_loading()
            node.on_refresh = lambda tile=tile: self.controller.load(tile)
            node.on_copy = lambda tile=tile: self.copy_fact(tile.id)

    async def start(self) -> None:
        for tile in self.tiles:
            await self.controller.load(tile, use_cache=True)
            await self.scheduler.after(self.initial_stagger_ms)

    async def refresh_all(self) -> bool:
        """Reload every tile bypassing the cache; False when already running."""
        if not self.refresh_all_enabled:
            logger.debug("Refresh all already running, ignoring")
            return False
        self.refresh_all_enabled = False
        try:
            self._status("Refreshing all…")
            for tile in self.tiles:
                await self.controller.load(tile, use_cache=False)
                await self.scheduler.after(self.refresh_all_stagger_ms)
            self.controller.flash("All refreshed")
        finally:
            self.refresh_all_enabled = True
        return True

    def clear_cache(self) -> None:
        self.cache.evict_all(tile.id for tile in self.tiles)
        self.controller.flash("Cache cleared")

    async def copy_fact(self, tile_id: str) -> None:
        node = self.board.get(tile_id)
        if node is None or node.result is None:
            return
        try:
            await asyncio.to_thread(self.clipboard, node.fact)
        except Exception as e:
            logger.warning("Copy failed: %s", e)
            self.controller.flash("Copy failed", COPY_STATUS_MS)
            return
        self.controller.flash("Copied fact", COPY_STATUS_MS)

    def _status(self, message: str) -> None:
        if self.controller.status is not None:
            self.controller.status(message)
