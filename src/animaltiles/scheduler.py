from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Coroutine, Protocol

logger = logging.getLogger(__name__)

class Scheduler(Protocol):
    def now(self) -> float:
        """Current time in epoch milliseconds."""
        ...

    async def after(self, ms: float) -> None:
        ...

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        ...

    async def drain(self) -> None:
        ...

class AsyncioScheduler:
    """Wall clock and real delays on the running event loop.

    Spawned tasks are tracked so a caller (the CLI) can wait for background
    refreshes and status clears before rendering.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    def now(self) -> float:
        return time.time() * 1000

    async def after(self, ms: float) -> None:
        await asyncio.sleep(max(0.0, ms) / 1000)

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._done)
        return task

    def _done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Background task failed", exc_info=task.exception())

    async def drain(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
