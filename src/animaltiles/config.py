from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import os
import yaml

from .tiles import DEFAULT_ORDER, DEPRECATED_IDS

RENDERERS = ("html", "web")

def _expand(path: str) -> str:
    return os.path.expanduser(os.path.expandvars(path))

def _non_negative(value, key: str) -> int:
    n = int(value)
    if n < 0:
        raise ValueError(f"{key} must not be negative, got {n}")
    return n

@dataclass(frozen=True)
class Config:
    raw: dict = field(default_factory=dict)

    def _section(self, name: str) -> dict:
        section = self.raw.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"{name!r} must be a mapping.")
        return section

    @property
    def tiles(self) -> list[str]:
        tiles = self.raw.get("tiles") or DEFAULT_ORDER
        if not isinstance(tiles, list):
            raise ValueError(f"'tiles' must be a list of tile ids, got {tiles!r}")
        return [str(t) for t in tiles]

    @property
    def columns(self) -> int:
        return max(1, int(self.raw.get("columns", 3)))

    @property
    def cache_path(self) -> Path:
        return Path(_expand(str(self._section("cache").get("path", "~/.cache/animaltiles/store.json"))))

    @property
    def ttl_ms(self) -> int:
        return _non_negative(self._section("cache").get("ttl_seconds", 300), "cache.ttl_seconds") * 1000

    @property
    def deprecated_tiles(self) -> list[str]:
        return [str(t) for t in self._section("cache").get("deprecated", DEPRECATED_IDS)]

    @property
    def timeout_ms(self) -> int:
        return _non_negative(self._section("fetch").get("timeout_ms", 8000), "fetch.timeout_ms")

    @property
    def retries(self) -> int:
        return _non_negative(self._section("fetch").get("retries", 2), "fetch.retries")

    @property
    def initial_stagger_ms(self) -> int:
        return _non_negative(self._section("stagger").get("initial_ms", 120), "stagger.initial_ms")

    @property
    def refresh_all_stagger_ms(self) -> int:
        return _non_negative(self._section("stagger").get("refresh_all_ms", 80), "stagger.refresh_all_ms")

    @property
    def verify_images(self) -> bool:
        return bool(self._section("images").get("verify", True))

    @property
    def image_timeout_ms(self) -> int:
        return _non_negative(self._section("images").get("timeout_ms", 8000), "images.timeout_ms")

    @property
    def output_path(self) -> Path:
        out = self._section("output").get("path", "~/.cache/animaltiles/panel.html")
        return Path(_expand(str(out)))

    @property
    def renderer_kind(self) -> str:
        kind = str(self._section("renderer").get("kind", "html")).lower().strip()
        if kind not in RENDERERS:
            raise ValueError(f"Unsupported renderer {kind!r}. Supported: {list(RENDERERS)}")
        return kind

    @property
    def theme(self) -> dict:
        return self._section("theme")

    @property
    def web_renderer(self) -> dict:
        return self._section("web_renderer")

def load_config(path: str | Path) -> Config:
    p = Path(_expand(str(path)))
    if not p.exists():
        return Config()
    raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    if raw is None:
        return Config()
    if not isinstance(raw, dict):
        raise ValueError("config.yaml must contain a YAML mapping at top level.")
    return Config(raw=raw)
