"""Pytest configuration and fixtures for animaltiles tests."""

import asyncio
import sys
from pathlib import Path

import pytest
import requests

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from animaltiles.board import Board  # noqa: E402
from animaltiles.cache import TileCache  # noqa: E402
from animaltiles.controller import TileController  # noqa: E402
from animaltiles.fetcher import HttpClient  # noqa: E402
from animaltiles.store import MemoryStore  # noqa: E402

START_MS = 1_700_000_000_000.0


class FakeScheduler:
    """Virtual time: delays advance the clock instead of sleeping."""

    def __init__(self, start=START_MS):
        self.clock = start
        self.sleeps = []
        self.tasks = []

    def now(self):
        return self.clock

    async def after(self, ms):
        self.sleeps.append(ms)
        self.clock += ms
        await asyncio.sleep(0)

    def spawn(self, coro):
        task = asyncio.get_running_loop().create_task(coro)
        self.tasks.append(task)
        return task

    async def drain(self):
        while any(not t.done() for t in self.tasks):
            await asyncio.gather(*self.tasks)


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Scripted responses per URL.

    Each route is a list of outcomes consumed in order; the last one repeats.
    An int is an HTTP status with no body, an exception is raised, a
    FakeResponse is returned as is, anything else is a 200 JSON body.
    """

    def __init__(self, routes=None):
        self.routes = {url: list(outcomes) for url, outcomes in (routes or {}).items()}
        self.calls = []
        self.timeouts = []

    def route(self, url, *outcomes):
        self.routes[url] = list(outcomes)

    def get(self, url, timeout=None):
        self.calls.append(url)
        self.timeouts.append(timeout)
        outcomes = self.routes.get(url)
        if not outcomes:
            raise requests.ConnectionError(f'no route for {url}')
        outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, FakeResponse):
            return outcome
        if isinstance(outcome, int):
            return FakeResponse(outcome)
        return FakeResponse(200, outcome)


class FakeProbe:
    def __init__(self, failing=()):
        self.failing = set(failing)
        self.checked = []

    async def check(self, url):
        self.checked.append(url)
        return url not in self.failing


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def http(session, scheduler):
    return HttpClient(session, scheduler)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def cache(store, scheduler):
    return TileCache(store, clock=scheduler.now)


@pytest.fixture
def statuses():
    return []


@pytest.fixture
def probe():
    return FakeProbe()


@pytest.fixture
def controller(cache, scheduler, statuses, probe):
    return TileController(Board(), cache, scheduler, status=statuses.append, images=probe)
