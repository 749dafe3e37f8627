from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Callable

import requests

from .board import Board
from .cache import TileCache
from .config import Config, load_config
from .controller import TileController
from .fetcher import HttpClient
from .images import HttpImageProbe, NullProbe
from .panel import Panel
from .renderers import render_with
from .scheduler import AsyncioScheduler
from .store import JsonFileStore
from .tiles import build_tiles

logger = logging.getLogger(__name__)

def report_status(message: str) -> None:
    # the page is rendered after status messages clear, so they go to the log
    if message:
        logger.info("%s", message)

def build_panel(
    cfg: Config,
    session: requests.Session,
    image_session: requests.Session,
    scheduler: AsyncioScheduler,
    status: Callable[[str], None] = report_status,
) -> Panel:
    http = HttpClient(session, scheduler, timeout_ms=cfg.timeout_ms, retries=cfg.retries)
    cache = TileCache(JsonFileStore(cfg.cache_path), clock=scheduler.now)
    cache.migrate(cfg.deprecated_tiles)
    # image checks run in their own threads; they get their own session
    images = HttpImageProbe(image_session, timeout_ms=cfg.image_timeout_ms) if cfg.verify_images else NullProbe()
    controller = TileController(
        Board(),
        cache,
        scheduler,
        ttl_ms=cfg.ttl_ms,
        status=status,
        images=images,
    )
    return Panel(
        build_tiles(cfg.tiles, http),
        controller,
        initial_stagger_ms=cfg.initial_stagger_ms,
        refresh_all_stagger_ms=cfg.refresh_all_stagger_ms,
    )

async def run(cfg: Config, args: argparse.Namespace) -> Path:
    scheduler = AsyncioScheduler()
    with requests.Session() as session, requests.Session() as image_session:
        panel = build_panel(cfg, session, image_session, scheduler)
        if args.clear_cache:
            panel.clear_cache()
        panel.mount()
        if args.refresh_all:
            await panel.refresh_all()
        else:
            await panel.start()
        # background refreshes and image checks
        await scheduler.drain()

    renderer = args.renderer or cfg.renderer_kind
    return render_with(renderer, cfg.output_path, panel.board, cfg.columns, cfg.theme, cfg.web_renderer)

def main() -> None:
    ap = argparse.ArgumentParser(prog="animaltiles")
    ap.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    ap.add_argument("--renderer", choices=["html", "web"], help="Override renderer.kind from config")
    ap.add_argument("--refresh-all", action="store_true", help="Reload every tile, bypassing the cache")
    ap.add_argument("--clear-cache", action="store_true", help="Evict all cached tiles before loading")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = load_config(args.config)
    out = asyncio.run(run(cfg, args))
    logger.info("Wrote %s", out)
