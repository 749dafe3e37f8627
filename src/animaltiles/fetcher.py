from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import requests

from .scheduler import AsyncioScheduler, Scheduler

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 8000
DEFAULT_RETRIES = 2
BACKOFF_BASE_MS = 300

@dataclass(frozen=True)
class FetchResult:
    ok: bool
    data: Any = None
    error: str | None = None

class HTTPStatusError(Exception):
    def __init__(self, status: int):
        super().__init__(f"HTTP {status}")
        self.status = status

def backoff_ms(attempt: int) -> int:
    return BACKOFF_BASE_MS * (2 ** attempt)

class HttpClient:
    """Shared JSON GET client with a bounded retry budget.

    One instance is shared by every tile adapter. It holds no per-request
    state; the session only pools connections.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        scheduler: Scheduler | None = None,
        *,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        retries: int = DEFAULT_RETRIES,
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self.timeout_ms = timeout_ms
        self.retries = retries

    def _get_json(self, url: str, timeout_ms: int) -> Any:
        r = self.session.get(url, timeout=timeout_ms / 1000)
        if not 200 <= r.status_code < 300:
            raise HTTPStatusError(r.status_code)
        return r.json()

    async def fetch_with_retry(
        self,
        url: str,
        *,
        timeout_ms: int | None = None,
        retries: int | None = None,
    ) -> FetchResult:
        timeout_ms = self.timeout_ms if timeout_ms is None else timeout_ms
        retries = self.retries if retries is None else retries
        max_attempts = max(0, retries) + 1

        last_error = "Request failed"
        for attempt in range(max_attempts):
            try:
                # bounds the whole attempt, not just each socket read
                data = await asyncio.wait_for(
                    asyncio.to_thread(self._get_json, url, timeout_ms),
                    timeout_ms / 1000,
                )
                return FetchResult(ok=True, data=data)
            except asyncio.TimeoutError:
                last_error = f"Timed out after {timeout_ms} ms"
            except Exception as e:
                last_error = str(e) or type(e).__name__
            logger.debug("GET %s attempt %d/%d failed: %s", url, attempt + 1, max_attempts, last_error)
            # no sleep after the final attempt
            if attempt < max_attempts - 1:
                await self.scheduler.after(backoff_ms(attempt))

        logger.warning("GET %s failed after %d attempts: %s", url, max_attempts, last_error)
        return FetchResult(ok=False, error=last_error)
