from __future__ import annotations

import logging
from typing import Callable

from .board import Board, TileNode
from .cache import TileCache
from .images import ImageProbe, NullProbe
from .markup import select_fallback
from .policy import CACHE_TTL_MS, Action, decide
from .scheduler import Scheduler
from .tiles.base import TileDefinition, TileResult

logger = logging.getLogger(__name__)

BACKGROUND_REFRESH_DELAY_MS = 200
STATUS_CLEAR_MS = 1500

class TileController:
    """Load, display and refresh cycle of individual tiles.

    Per tile: loading placeholder, then a cached view (background refresh
    when fresh, foreground refresh when stale) or a fresh fetch. Failures
    of a foreground load become a retryable error block; failures of a
    background refresh leave the current view in place.
    """

    def __init__(
        self,
        board: Board,
        cache: TileCache,
        scheduler: Scheduler,
        *,
        ttl_ms: float = CACHE_TTL_MS,
        background_delay_ms: float = BACKGROUND_REFRESH_DELAY_MS,
        status: Callable[[str], None] | None = None,
        status_clear_ms: float = STATUS_CLEAR_MS,
        images: ImageProbe | None = None,
    ) -> None:
        self.board = board
        self.cache = cache
        self.scheduler = scheduler
        self.ttl_ms = ttl_ms
        self.background_delay_ms = background_delay_ms
        self.status = status
        self.status_clear_ms = status_clear_ms
        self.images = images if images is not None else NullProbe()

    def flash(self, message: str, clear_after_ms: float | None = None) -> None:
        """Show a transient status message; without a status sink this does nothing."""
        if self.status is None:
            return
        self.status(message)
        delay = self.status_clear_ms if clear_after_ms is None else clear_after_ms
        self.scheduler.spawn(self._clear_status(delay))

    async def _clear_status(self, delay_ms: float) -> None:
        await self.scheduler.after(delay_ms)
        if self.status is not None:
            self.status("")

    async def load(self, tile: TileDefinition, use_cache: bool = True) -> None:
        node = self.board.get(tile.id)
        if node is None:
            return
        node.show_loading()

        if use_cache:
            entry = self.cache.read(tile.id)
            action = decide(tile, entry, self.scheduler.now(), self.ttl_ms)
            if action is Action.SHOW_CACHED_THEN_FOREGROUND_REFRESH:
                logger.debug("%s: stale cache, refreshing now", tile.id)
                self._display(node, entry.data, cached=True, stale=True)
                self.scheduler.spawn(self.refresh(tile, background=False))
                return
            if action is Action.SHOW_CACHED_THEN_BACKGROUND_REFRESH:
                logger.debug("%s: fresh cache, refreshing in background", tile.id)
                self._display(node, entry.data, cached=True)
                self.scheduler.spawn(self._deferred_refresh(tile))
                return

        result = await self._fetch(tile)
        node = self.board.get(tile.id)
        if node is None:
            return
        if not result.ok:
            self._show_error(node, tile, result.error)
            return
        self._display(node, result)
        self.cache.write(tile.id, result)

    async def _deferred_refresh(self, tile: TileDefinition) -> None:
        await self.scheduler.after(self.background_delay_ms)
        await self.refresh(tile, background=True)

    async def refresh(self, tile: TileDefinition, *, background: bool) -> None:
        result = await self._fetch(tile)
        node = self.board.get(tile.id)
        if node is None:
            return
        if not result.ok:
            if background:
                logger.info("%s: background refresh failed, keeping cached view: %s", tile.id, result.error)
                return
            self._show_error(node, tile, result.error)
            return
        self._display(node, result)
        self.cache.write(tile.id, result)
        self.flash(f"Updated {tile.title}")

    async def _fetch(self, tile: TileDefinition) -> TileResult:
        try:
            return await tile.fetcher()
        except Exception as e:
            logger.exception("%s: adapter raised", tile.id)
            return TileResult.failure(str(e))

    def _show_error(self, node: TileNode, tile: TileDefinition, error: str) -> None:
        logger.info("%s: %s", tile.id, error)
        node.show_error(error, on_retry=lambda: self.load(tile))

    def _display(self, node: TileNode, result: TileResult, *, cached: bool = False, stale: bool = False) -> None:
        node.show_result(result, cached=cached, stale=stale)
        if node.image:
            self.scheduler.spawn(self._check_image(node, node.generation, node.image))

    async def _check_image(self, node: TileNode, generation: int, src: str) -> None:
        # One shot per rendered image: its placeholder, then a text notice.
        if await self.images.check(src) or node.generation != generation:
            return
        fallback = select_fallback(node.tile.id)
        logger.debug("%s: image %s failed, using %s", node.tile.id, src, fallback)
        node.swap_image(fallback)
        if await self.images.check(fallback) or node.generation != generation:
            return
        node.swap_image(None)
