from __future__ import annotations

import asyncio
import logging
from io import BytesIO
from typing import Protocol

import requests
from PIL import Image

logger = logging.getLogger(__name__)

class ImageProbe(Protocol):
    async def check(self, url: str) -> bool:
        ...

class NullProbe:
    """Assumes every image loads."""

    async def check(self, url: str) -> bool:
        return True

class HttpImageProbe:
    """Downloads an image and checks that Pillow can decode it.

    A single attempt; a failed image goes straight to its placeholder.
    """

    def __init__(self, session: requests.Session | None = None, timeout_ms: int = 8000) -> None:
        self.session = session if session is not None else requests.Session()
        self.timeout_ms = timeout_ms

    def _load(self, url: str) -> bool:
        r = self.session.get(url, timeout=self.timeout_ms / 1000)
        if not 200 <= r.status_code < 300:
            logger.debug("Image %s: HTTP %s", url, r.status_code)
            return False
        with Image.open(BytesIO(r.content)) as img:
            img.verify()
        return True

    async def check(self, url: str) -> bool:
        try:
            return await asyncio.to_thread(self._load, url)
        except Exception as e:
            logger.debug("Image %s failed to load: %s", url, e)
            return False
