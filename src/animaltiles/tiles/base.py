from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

@dataclass(frozen=True)
class TileResult:
    text: str = ""
    image: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, image: str | None, text: str) -> TileResult:
        return cls(text=text or "", image=image or None)

    @classmethod
    def failure(cls, error: str) -> TileResult:
        return cls(error=error or "Unknown error")

    def to_json(self) -> dict[str, Any]:
        if not self.ok:
            return {"error": self.error}
        return {"image": self.image, "text": self.text}

    @classmethod
    def from_json(cls, raw: Any) -> TileResult | None:
        """Rebuild a stored result; None when the value is not a usable result."""
        if not isinstance(raw, dict):
            return None
        if raw.get("error"):
            return cls.failure(str(raw["error"]))
        image = raw.get("image")
        return cls.success(image if isinstance(image, str) else None, str(raw.get("text") or ""))

@dataclass(frozen=True)
class TileDefinition:
    id: str
    title: str
    fetcher: Callable[[], Awaitable[TileResult]]
