from __future__ import annotations

from ..fetcher import HttpClient
from .base import TileResult
from .schemas import DecodeError, DogCeoImage, decode

name = "dog"
title = "Random Dog"

URL = "https://dog.ceo/api/breeds/image/random"

async def fetch(http: HttpClient) -> TileResult:
    r = await http.fetch_with_retry(URL)
    if not r.ok:
        return TileResult.failure(r.error)
    try:
        body = decode(DogCeoImage, r.data)
    except DecodeError as e:
        return TileResult.failure(str(e))
    return TileResult.success(body.message, "Dog CEO API")
