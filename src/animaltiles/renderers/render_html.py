from __future__ import annotations

from pathlib import Path

from ..board import Board, StatusLine
from ..markup import escape_html

HTML_TEMPLATE = """<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Animal Tiles</title>
  <style>
    :root {{
      --bg: {bg};
      --fg: {fg};
      --fg-dim: {fg_dim};
      --border: {border};
      --alert: {alert};
      --cols: {cols};
      --font: system-ui, -apple-system, "Segoe UI", Roboto, sans-serif;
    }}
    body {{
      margin: 0;
      padding: 24px;
      background: var(--bg);
      color: var(--fg);
      font-family: var(--font);
    }}
    .api-status {{
      min-height: 1.4em;
      color: var(--fg-dim);
      margin-bottom: 12px;
    }}
    .api-grid {{
      display: grid;
      grid-template-columns: repeat(var(--cols), 1fr);
      gap: 18px;
    }}
    .api-tile {{
      border: 2px solid var(--border);
      border-radius: 14px;
      padding: 14px;
      position: relative;
    }}
    .tile-header {{
      display: flex;
      justify-content: space-between;
      align-items: center;
    }}
    .tile-title {{ margin: 0 0 10px 0; font-size: 18px; }}
    .tile-header-actions button {{ background: none; border: 0; color: var(--fg-dim); }}
    .animal-img {{ width: 100%; max-height: 220px; object-fit: cover; border-radius: 8px; }}
    .tile-text {{ color: var(--fg-dim); line-height: 1.35; }}
    .tile-loading, .fallback-image {{ color: var(--fg-dim); font-style: italic; }}
    .tile-error {{ color: var(--alert); }}
    .cached-badge, .stale-badge {{
      display: inline-block;
      font-size: 11px;
      padding: 2px 6px;
      margin-right: 4px;
      border: 1px solid var(--border);
      border-radius: 6px;
      color: var(--fg-dim);
    }}
    .stale-badge {{ color: var(--alert); border-color: var(--alert); }}
  </style>
</head>
<body>
  <div class="api-status" id="api-status" aria-live="polite">{status}</div>
  <div class="api-grid" id="api-grid">
{tiles}
  </div>
</body>
</html>
"""

def page(board: Board, columns: int, theme: dict, status: StatusLine | None = None) -> str:
    return HTML_TEMPLATE.format(
        cols=max(1, columns),
        bg=theme.get("background", "#0f1115"),
        fg=theme.get("foreground", "#e8e8e8"),
        fg_dim=theme.get("foreground_dim", "#9aa0a6"),
        border=theme.get("panel_border", "#2a2f3a"),
        alert=theme.get("alert", "#ff5566"),
        status=escape_html(status.text) if status is not None else "",
        tiles="\n".join("    " + node.render() for node in board),
    )

def render(out_path: Path, board: Board, columns: int, theme: dict, status: StatusLine | None = None) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(page(board, columns, theme, status), encoding="utf-8")
    return out_path
