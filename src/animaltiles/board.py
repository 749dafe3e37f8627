from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable

from . import markup
from .tiles.base import TileDefinition, TileResult

class TileState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    DISPLAYED = "displayed"
    DISPLAYED_STALE = "displayed_stale"
    ERROR = "error"

@dataclass
class TileNode:
    """One tile on the board. Its body is owned by the lifecycle controller."""

    tile: TileDefinition
    state: TileState = TileState.IDLE
    body: str = markup.LOADING
    result: TileResult | None = None
    image: str | None = None
    image_unavailable: bool = False
    cached: bool = False
    stale: bool = False
    error: str | None = None
    on_refresh: Callable[[], Awaitable[None]] | None = None
    on_copy: Callable[[], Awaitable[None]] | None = None
    on_retry: Callable[[], Awaitable[None]] | None = None
    # bumped on every body replacement; pending image checks compare against it
    generation: int = 0

    def show_loading(self) -> None:
        self._replace(markup.LOADING, TileState.LOADING)
        self.result = None
        self.image = None
        self.image_unavailable = False
        self.cached = self.stale = False
        self.error = None

    def show_result(self, result: TileResult, *, cached: bool = False, stale: bool = False) -> None:
        self.result = result
        self.image = result.image
        self.image_unavailable = False
        self.cached = cached
        self.stale = stale
        self.error = None
        self._replace(self._result_markup(), TileState.DISPLAYED_STALE if stale else TileState.DISPLAYED)

    def show_error(self, error: str, on_retry: Callable[[], Awaitable[None]]) -> None:
        self.result = None
        self.image = None
        self.cached = self.stale = False
        self.error = error
        self._replace(markup.error_markup(error), TileState.ERROR)
        self.on_retry = on_retry

    def swap_image(self, src: str | None) -> None:
        """Replace the image in place; None swaps it for a text notice."""
        if src is None:
            self.image = None
            self.image_unavailable = True
        else:
            self.image = src
        self.body = self._result_markup()

    def _result_markup(self) -> str:
        kw = {"image": self.image, "image_unavailable": self.image_unavailable}
        if self.cached:
            return markup.cached_markup(self.result, self.tile, stale=self.stale, **kw)
        return markup.build_markup(self.result, self.tile, **kw)

    def _replace(self, body: str, state: TileState) -> None:
        self.body = body
        self.state = state
        self.on_retry = None
        self.generation += 1

    @property
    def fact(self) -> str:
        return self.result.text if self.result is not None else ""

    def render(self) -> str:
        return markup.tile_markup(self.tile, self.body)

@dataclass
class StatusLine:
    text: str = ""

    def set(self, message: str = "") -> None:
        self.text = message

@dataclass
class Board:
    nodes: dict[str, TileNode] = field(default_factory=dict)

    def mount(self, tile: TileDefinition) -> TileNode:
        node = TileNode(tile=tile)
        self.nodes[tile.id] = node
        return node

    def get(self, tile_id: str) -> TileNode | None:
        return self.nodes.get(tile_id)

    def __iter__(self):
        return iter(self.nodes.values())
