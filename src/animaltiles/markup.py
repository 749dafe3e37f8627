from __future__ import annotations

from html import escape

from .tiles.base import TileDefinition, TileResult

LOADING = '<div class="tile-loading">Loading…</div>'
CACHED_BADGE = '<div class="cached-badge" title="Cached">Cached</div>'
STALE_BADGE = '<div class="stale-badge" title="Stale (auto refreshing)">Stale</div>'
IMAGE_UNAVAILABLE = "Image unavailable"

PLACEHOLDER_BASE = "https://placehold.co/300x200?text="
PLACEHOLDERS = {
    "kangaroo": "Kangaroo",
    "redpanda": "Red+Panda",
    "shiba": "Dog",
    "fox": "Fox",
    "panda": "Panda",
    "koala": "Koala",
    "bird": "Bird",
    "dog": "Dog",
    "catfact": "Cat",
}

def escape_html(s: object) -> str:
    return escape(str(s), quote=True)

def select_fallback(tile_id: str | None) -> str:
    return PLACEHOLDER_BASE + PLACEHOLDERS.get(tile_id or "", "Animal")

def image_markup(tile: TileDefinition, src: str | None, unavailable: bool = False) -> str:
    if unavailable:
        return f'<div class="fallback-image">{IMAGE_UNAVAILABLE}</div>'
    if not src:
        return ""
    return (
        f'<img class="animal-img" data-tile="{escape_html(tile.id)}" src="{escape_html(src)}" '
        f'alt="{escape_html(tile.title)} image" loading="lazy"/>'
    )

def build_markup(
    result: TileResult,
    tile: TileDefinition,
    *,
    image: str | None = None,
    image_unavailable: bool = False,
) -> str:
    """Body markup for a successful result.

    ``image`` overrides the result's own URL once a fallback has been
    substituted.
    """
    src = image if image is not None else result.image
    text = escape_html(result.text or "")
    return f'{image_markup(tile, src, image_unavailable)}<p class="tile-text" data-fact="{text}">{text}</p>'

def cached_markup(result: TileResult, tile: TileDefinition, *, stale: bool = False, **kw) -> str:
    out = build_markup(result, tile, **kw) + CACHED_BADGE
    if stale:
        out += STALE_BADGE
    return out

def error_markup(error: str) -> str:
    return (
        f'<div class="tile-error" role="alert">Error: {escape_html(error)} '
        '<button type="button" class="retry-btn">Retry</button></div>'
    )

def tile_markup(tile: TileDefinition, body: str) -> str:
    title = escape_html(tile.title)
    return (
        f'<div class="api-tile" id="tile-{escape_html(tile.id)}">'
        '<div class="tile-header">'
        f'<h3 class="tile-title">{title}</h3>'
        '<div class="tile-header-actions">'
        f'<button type="button" class="refresh-btn" aria-label="Refresh {title}">↻</button>'
        f'<button type="button" class="copy-btn" aria-label="Copy {title} text" title="Copy fact">📋</button>'
        "</div></div>"
        f'<div class="tile-body">{body}</div>'
        "</div>"
    )
