from __future__ import annotations
from .core.config import NewMapParams
from .core.errors import ErrorKind, MapError, Result
from .core.types import Map, MapTile, MapTileType
from .core.operations import (
    create_map,
    load_map,
    save_map,
    paint_tile,
    list_tiles,
)

__all__ = [
    "NewMapParams",
    "ErrorKind",
    "MapError",
    "Result",
    "Map",
    "MapTile",
    "MapTileType",
    "create_map",
    "load_map",
    "save_map",
    "paint_tile",
    "list_tiles",
]
