from __future__ import annotations

from pathlib import Path
from ..board import Board, StatusLine

from . import render_html

def render_with(
    kind: str,
    out_path: Path,
    board: Board,
    columns: int,
    theme: dict,
    web_cfg: dict,
    status: StatusLine | None = None,
) -> Path:
    kind = kind.lower().strip()
    if kind == "html":
        return render_html.render(out_path, board, columns, theme, status)
    if kind == "web":
        # playwright is only imported when a screenshot is wanted
        from . import render_web
        return render_web.render(out_path, board, columns, theme, web_cfg, status)
    raise ValueError(f"Unknown renderer: {kind}")
