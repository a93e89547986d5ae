from __future__ import annotations

from .config import NewMapParams
from .errors import (
    ErrorKind,
    MapError,
    InvalidDimension,
    OutOfBounds,
    PositionMismatch,
    IncompleteMap,
    UnknownTileType,
    MapParseError,
    MapIOError,
    Result,
)
from .types import Map, MapTile, MapTileType, Position, TileTypeName
from .operations import (
    create_map,
    load_map,
    save_map,
    load_map_file,
    save_map_file,
    paint_tile,
    list_tiles,
)
from . import io as io

__all__ = [
    "NewMapParams",
    "ErrorKind",
    "MapError",
    "InvalidDimension",
    "OutOfBounds",
    "PositionMismatch",
    "IncompleteMap",
    "UnknownTileType",
    "MapParseError",
    "MapIOError",
    "Result",
    "Map",
    "MapTile",
    "MapTileType",
    "Position",
    "TileTypeName",
    "create_map",
    "load_map",
    "save_map",
    "load_map_file",
    "save_map_file",
    "paint_tile",
    "list_tiles",
    "io",
]
