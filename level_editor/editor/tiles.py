from __future__ import annotations
from typing import Dict, List, Tuple

from level_editor.core.types import MapTileType


TILE_COLORS: Dict[str, Tuple[int, int, int]] = {
    "Grass": (70, 160, 60),
    "Desert": (220, 190, 110),
    "Water": (30, 110, 220),
}

UNKNOWN_TILE_COLOR: Tuple[int, int, int] = (255, 0, 255)


def build_tile_catalog() -> Dict[str, MapTileType]:
    """
    Tile types available to the editor, keyed by name.
    Built once at startup; the core only ever sees the names.
    """
    types = [
        MapTileType(3, "Desert"),
        MapTileType(5, "Water"),
        MapTileType(1, "Grass"),
    ]
    return {t.name: t for t in types}


def palette_names(catalog: Dict[str, MapTileType]) -> List[str]:
    return [t.name for t in sorted(catalog.values(), key=lambda t: t.tag)]
