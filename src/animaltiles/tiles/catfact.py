from __future__ import annotations

import asyncio

from ..fetcher import HttpClient
from .base import TileResult
from .schemas import CatFact, DecodeError, decode, first_search_url

name = "catfact"
title = "Cat Fact + Image"

FACT_URL = "https://catfact.ninja/fact"
IMAGE_URL = "https://api.thecatapi.com/v1/images/search"

async def fetch(http: HttpClient) -> TileResult:
    fact, img = await asyncio.gather(
        http.fetch_with_retry(FACT_URL),
        http.fetch_with_retry(IMAGE_URL),
    )
    # The fact decides the tile; a missing image is tolerated.
    if not fact.ok:
        return TileResult.failure(fact.error)
    try:
        body = decode(CatFact, fact.data)
    except DecodeError as e:
        return TileResult.failure(str(e))
    image = first_search_url(img.data) if img.ok else None
    return TileResult.success(image, body.fact)
