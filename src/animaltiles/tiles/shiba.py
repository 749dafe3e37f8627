from __future__ import annotations

from ..fetcher import HttpClient
from .base import TileResult
from .schemas import DecodeError, DogCeoImage, decode, first_search_url

name = "shiba"
title = "Shiba Dog"

PREFERRED_URL = "https://api.thedogapi.com/v1/images/search"
FALLBACK_URL = "https://dog.ceo/api/breeds/image/random"

async def fetch(http: HttpClient) -> TileResult:
    dog = await http.fetch_with_retry(PREFERRED_URL)
    url = first_search_url(dog.data) if dog.ok else None
    if url:
        return TileResult.success(url, "Random Dog (Shiba-ish)")

    r = await http.fetch_with_retry(FALLBACK_URL)
    fallback_error = r.error
    if r.ok:
        try:
            return TileResult.success(decode(DogCeoImage, r.data).message, "Dog CEO fallback")
        except DecodeError as e:
            fallback_error = str(e)
    return TileResult.failure(dog.error or fallback_error or "Dog fetch failed")
