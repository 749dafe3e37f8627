"""Tests for the HTML page renderer and CLI wiring."""

import argparse
import json
import logging
from unittest.mock import patch

import pytest
import requests

from animaltiles import cli
from animaltiles.board import Board, StatusLine
from animaltiles.config import Config
from animaltiles.renderers import render_html, render_with
from animaltiles.scheduler import AsyncioScheduler
from animaltiles.tiles.base import TileDefinition, TileResult

TILE = TileDefinition(id='dog', title='Random Dog', fetcher=None)


def board_with(result=None, error=None):
    board = Board()
    node = board.mount(TILE)
    if result is not None:
        node.show_result(result)
    elif error is not None:
        node.show_error(error, on_retry=None)
    return board


class TestPage:
    def test_contains_tiles_and_status(self):
        board = board_with(TileResult.success('https://x/a.png', 'Dogs <3 walks'))
        html = render_html.page(board, 3, {}, StatusLine('Updated Random Dog'))
        assert 'id="tile-dog"' in html
        assert 'Dogs &lt;3 walks' in html
        assert 'Updated Random Dog' in html
        assert '--cols: 3;' in html

    def test_error_tile(self):
        html = render_html.page(board_with(error='HTTP 500'), 1, {'alert': '#f00'}, None)
        assert 'Error: HTTP 500' in html
        assert '--alert: #f00;' in html


class TestRenderWith:
    def test_html(self, tmp_path):
        out = render_with('html', tmp_path / 'out' / 'panel.html', board_with(TileResult.success(None, 'x')), 2, {}, {})
        assert out.exists()
        assert 'tile-text' in out.read_text(encoding='utf-8')

    def test_unknown(self, tmp_path):
        with pytest.raises(ValueError):
            render_with('pillow', tmp_path / 'panel.png', Board(), 2, {}, {})


class TestRun:
    @pytest.mark.asyncio
    async def test_cached_tiles_render_without_network(self, tmp_path):
        store_path = tmp_path / 'store.json'
        ts = 4_102_444_800_000  # far future, always fresh
        store_path.write_text(json.dumps({
            'animal-tile-fox': json.dumps({'ts': ts, 'data': {'image': None, 'text': 'cached fox'}}),
            'animal-tile-duck': json.dumps({'ts': ts, 'data': {'image': None, 'text': 'old duck'}}),
        }), encoding='utf-8')
        cfg = Config(raw={
            'tiles': ['fox'],
            'cache': {'path': str(store_path)},
            'images': {'verify': False},
            'output': {'path': str(tmp_path / 'panel.html')},
        })
        args = argparse.Namespace(renderer=None, refresh_all=False, clear_cache=False)

        async def offline(tile):
            return None

        with (
            patch('animaltiles.controller.TileController.refresh', new=lambda self, tile, background: offline(tile)),
            patch('animaltiles.cli.render_with', wraps=render_with) as render,
        ):
            out = await cli.run(cfg, args)

        # the page carries no status line: it is rendered after messages clear
        assert 'status' not in render.call_args.kwargs
        assert len(render.call_args.args) == 6

        html = out.read_text(encoding='utf-8')
        assert 'cached fox' in html
        assert 'Cached' in html
        stored = json.loads(store_path.read_text(encoding='utf-8'))
        assert 'animal-tile-duck' not in stored


class TestBuildPanel:
    def test_image_checks_use_their_own_session(self, tmp_path):
        cfg = Config(raw={'cache': {'path': str(tmp_path / 'store.json')}})
        with requests.Session() as session, requests.Session() as image_session:
            panel = cli.build_panel(cfg, session, image_session, AsyncioScheduler())
            assert panel.controller.images.session is image_session
            assert panel.controller.images.session is not session

    def test_status_messages_are_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger='animaltiles.cli'):
            cli.report_status('Updated Random Dog')
            cli.report_status('')
        assert [r.getMessage() for r in caplog.records] == ['Updated Random Dog']
