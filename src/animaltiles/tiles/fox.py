from __future__ import annotations

from ..fetcher import HttpClient
from .base import TileResult
from .schemas import DecodeError, FoxImage, decode

name = "fox"
title = "Random Fox"

URL = "https://randomfox.ca/floof/"

async def fetch(http: HttpClient) -> TileResult:
    r = await http.fetch_with_retry(URL)
    if not r.ok:
        return TileResult.failure(r.error)
    try:
        body = decode(FoxImage, r.data)
    except DecodeError as e:
        return TileResult.failure(str(e))
    return TileResult.success(body.image, "Floofy fox")
