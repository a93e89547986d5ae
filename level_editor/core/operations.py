from __future__ import annotations

import logging
from typing import BinaryIO, Container, List, Optional

from . import io as map_io
from .errors import ErrorKind, MapError, MapParseError, Result, UnknownTileType
from .types import Map, MapTile, TileTypeName

logger = logging.getLogger(__name__)


def _check_type(type_name: TileTypeName, tile_types: Optional[Container[str]]) -> None:
    if tile_types is not None and type_name not in tile_types:
        raise UnknownTileType(f"Unknown tile type {type_name!r}.")


def _as_load_error(error: MapError) -> MapError:
    # anything but a bad size is reported as an invalid file
    if error.kind in (ErrorKind.INVALID_DIMENSION, ErrorKind.PARSE_ERROR, ErrorKind.IO_ERROR):
        return error
    parse_error = MapParseError(f"Invalid map file: {error}")
    parse_error.__cause__ = error
    return parse_error


def create_map(
    width: int,
    height: int,
    default_type: TileTypeName,
    tile_types: Optional[Container[str]] = None,
) -> Result[Map]:
    try:
        _check_type(default_type, tile_types)
        new_map = Map.filled(width, height, default_type)
    except MapError as e:
        logger.warning("Could not create map: %s", e)
        return Result.failure(e)

    logger.debug("Created %dx%d map filled with %s", width, height, default_type)
    return Result.success(new_map)


def load_map(
    stream: BinaryIO,
    tile_types: Optional[Container[str]] = None,
) -> Result[Map]:
    try:
        loaded = map_io.read_map(stream, tile_types)
    except MapError as e:
        error = _as_load_error(e)
        logger.warning("Could not load map: %s", error)
        return Result.failure(error)
    return Result.success(loaded)


def save_map(map_: Map, stream: BinaryIO) -> Result[None]:
    try:
        map_io.write_map(map_, stream)
    except MapError as e:
        logger.warning("Could not save map: %s", e)
        return Result.failure(e)
    return Result.success()


def load_map_file(path, tile_types: Optional[Container[str]] = None) -> Result[Map]:
    try:
        loaded = map_io.read_map_file(path, tile_types)
    except MapError as e:
        error = _as_load_error(e)
        logger.warning("Could not load map %s: %s", path, error)
        return Result.failure(error)
    return Result.success(loaded)


def save_map_file(path, map_: Map) -> Result[None]:
    try:
        map_io.write_map_file(path, map_)
    except MapError as e:
        logger.warning("Could not save map %s: %s", path, e)
        return Result.failure(e)
    return Result.success()


def paint_tile(
    map_: Map,
    x: int,
    y: int,
    type_name: TileTypeName,
    tile_types: Optional[Container[str]] = None,
) -> Result[MapTile]:
    """
    Change the type of the tile at (x, y). Nothing is mutated on failure.
    """
    try:
        _check_type(type_name, tile_types)
        tile = map_.set_tile_type(x, y, type_name)
    except MapError as e:
        logger.warning("Could not paint tile (%s, %s): %s", x, y, e)
        return Result.failure(e)
    return Result.success(tile)


def list_tiles(map_: Map) -> List[MapTile]:
    return list(map_.tiles())
