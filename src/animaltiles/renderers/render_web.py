from __future__ import annotations

from pathlib import Path
from playwright.sync_api import sync_playwright

from ..board import Board, StatusLine
from . import render_html

def render(
    out_path: Path,
    board: Board,
    columns: int,
    theme: dict,
    web_cfg: dict,
    status: StatusLine | None = None,
) -> Path:
    """Write the HTML page, then screenshot it next to it as PNG."""
    html_path = render_html.render(out_path.with_suffix(".html"), board, columns, theme, status)
    png_path = out_path.with_suffix(".png")

    w = int(web_cfg.get("width", 1280))
    h = int(web_cfg.get("height", 1600))
    scale = float(web_cfg.get("viewport_device_scale_factor", 1))
    headless = bool(web_cfg.get("headless", True))
    browser_name = str(web_cfg.get("browser", "chromium"))

    with sync_playwright() as p:
        browser = getattr(p, browser_name).launch(headless=headless)
        page = browser.new_page(viewport={"width": w, "height": h}, device_scale_factor=scale)
        page.goto(html_path.as_uri())
        page.wait_for_load_state("networkidle")
        page.screenshot(path=str(png_path), full_page=True)
        browser.close()

    return png_path
