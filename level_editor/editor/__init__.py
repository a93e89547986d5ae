from __future__ import annotations

from .config import RenderParams, AppConfig
from .renderer import PygameRenderer
from .tiles import build_tile_catalog, palette_names, TILE_COLORS
from .app import MapEditorApp

__all__ = [
    "RenderParams",
    "AppConfig",
    "PygameRenderer",
    "build_tile_catalog",
    "palette_names",
    "TILE_COLORS",
    "MapEditorApp",
]
