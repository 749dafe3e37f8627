"""Expected response bodies of the remote animal APIs."""
from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

M = TypeVar("M", bound=BaseModel)

class DecodeError(ValueError):
    pass

class DogCeoImage(BaseModel):
    message: str

class CatFact(BaseModel):
    fact: str

class SearchImage(BaseModel):
    url: str

class AnimalFact(BaseModel):
    fact: str
    image: str | None = None

class FoxImage(BaseModel):
    image: str

_search_results = TypeAdapter(list[SearchImage])

def decode(model: type[M], data: Any) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Unexpected response: {e.error_count()} invalid field(s) for {model.__name__}") from e

def first_search_url(data: Any) -> str | None:
    """URL of the first search hit, or None for an empty or malformed list."""
    try:
        hits = _search_results.validate_python(data)
    except ValidationError:
        return None
    if not hits or not hits[0].url:
        return None
    return hits[0].url
