from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import BinaryIO, Container, Iterator, List, Optional, Union

from .errors import IncompleteMap, MapIOError, MapParseError
from .types import Map, MapTile

logger = logging.getLogger(__name__)

MAP_NAMESPACE = "http://www.npruehs.de/teaching/tool-development/"
MAP_FILE_EXTENSION = ".map"

XML_ELEMENT_MAP = "Map"
XML_ELEMENT_WIDTH = "Width"
XML_ELEMENT_HEIGHT = "Height"
XML_ELEMENT_TILES = "Tiles"
XML_ELEMENT_TILE = "MapTile"
XML_ELEMENT_POSITION_X = "X"
XML_ELEMENT_POSITION_Y = "Y"
XML_ELEMENT_TYPE = "Type"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

PathLike = Union[str, Path]


# ---------------------------------------------------------------------------
# Writing


def _format_int(value: int) -> str:
    # str() of an int never uses locale grouping or separators
    return str(int(value))


def build_map_element(map_: Map) -> ET.Element:
    root = ET.Element(XML_ELEMENT_MAP)
    root.set("xmlns:map", MAP_NAMESPACE)

    ET.SubElement(root, XML_ELEMENT_WIDTH).text = _format_int(map_.width)
    ET.SubElement(root, XML_ELEMENT_HEIGHT).text = _format_int(map_.height)

    tiles = ET.SubElement(root, XML_ELEMENT_TILES)
    for tile in map_.tiles():
        el = ET.SubElement(tiles, XML_ELEMENT_TILE)
        ET.SubElement(el, XML_ELEMENT_POSITION_X).text = _format_int(tile.x)
        ET.SubElement(el, XML_ELEMENT_POSITION_Y).text = _format_int(tile.y)
        ET.SubElement(el, XML_ELEMENT_TYPE).text = tile.type

    return root


def write_map(map_: Map, stream: BinaryIO) -> None:
    """
    Serialize a map as UTF-8 XML into a binary stream.
    Tiles are written in `Map.tiles()` order (x-major).
    """
    if not map_.is_complete():
        raise IncompleteMap("Cannot write a map with unassigned tiles.")

    tree = ET.ElementTree(build_map_element(map_))
    ET.indent(tree, space="  ")
    try:
        tree.write(stream, encoding="utf-8", xml_declaration=True)
    except OSError as e:
        raise MapIOError(f"Could not write map: {e}") from e


# ---------------------------------------------------------------------------
# Reading


def _read_to_following(elements: Iterator[ET.Element], tag: str) -> ET.Element:
    for el in elements:
        if el.tag == tag:
            return el
    raise MapParseError(f"Expected element <{tag}> was not found.")


def _parse_int(el: ET.Element) -> int:
    text = (el.text or "").strip()
    if not _INT_PATTERN.fullmatch(text):
        raise MapParseError(f"<{el.tag}> must be an integer, got {text!r}.")
    try:
        return int(text)
    except ValueError as e:
        # e.g. past the interpreter's integer string length limit
        raise MapParseError(f"<{el.tag}> is not a usable integer: {e}") from e


def read_map(
    stream: BinaryIO,
    tile_types: Optional[Container[str]] = None,
) -> Map:
    """
    Parse a map from an XML stream.

    Elements are consumed in document order: Width, Height, Tiles, then
    width * height records of X, Y, Type. Records past that count are
    ignored. Either a complete Map is returned or an error is raised.
    """
    try:
        root = ET.parse(stream).getroot()
    except ET.ParseError as e:
        raise MapParseError(f"Malformed map file: {e}") from e
    except OSError as e:
        raise MapIOError(f"Could not read map: {e}") from e

    elements = root.iter()

    width = _parse_int(_read_to_following(elements, XML_ELEMENT_WIDTH))
    height = _parse_int(_read_to_following(elements, XML_ELEMENT_HEIGHT))

    # a short file must not allocate the grid it declares
    expected = width * height
    if width > 0 and height > 0:
        found = sum(1 for _ in root.iter(XML_ELEMENT_POSITION_X))
        if found < expected:
            raise MapParseError(
                f"Map declares {width}x{height} tiles but only {found} records are present."
            )

    loaded = Map(width, height)

    _read_to_following(elements, XML_ELEMENT_TILES)

    for i in range(expected):
        try:
            x = _parse_int(_read_to_following(elements, XML_ELEMENT_POSITION_X))
            y = _parse_int(_read_to_following(elements, XML_ELEMENT_POSITION_Y))
            type_el = _read_to_following(elements, XML_ELEMENT_TYPE)
        except MapParseError as e:
            raise MapParseError(
                f"Expected {expected} tiles but record {i} is incomplete: {e}"
            ) from e

        type_name = type_el.text or ""
        if tile_types is not None and type_name not in tile_types:
            raise MapParseError(f"Unknown tile type {type_name!r} at ({x}, {y}).")

        if loaded.in_bounds(x, y) and loaded.is_assigned(x, y):
            raise MapParseError(f"Duplicate tile record for ({x}, {y}).")

        loaded.set(x, y, MapTile(x, y, type_name))

    if not loaded.is_complete():
        raise MapParseError("Map file does not cover every tile.")

    return loaded


# ---------------------------------------------------------------------------
# Files


def map_path(directory: PathLike, name: str) -> Path:
    """
    Build the path of a map file in `directory`.
    '.map' is added if `name` has no extension.
    """
    if not name:
        name = "unnamed"

    path = Path(directory) / name
    if path.suffix == "":
        path = path.with_suffix(MAP_FILE_EXTENSION)
    return path


def write_map_file(path: PathLike, map_: Map) -> Path:
    path = Path(path)
    if not map_.is_complete():
        # checked before opening so an existing file is not truncated
        raise IncompleteMap("Cannot write a map with unassigned tiles.")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            write_map(map_, f)
    except OSError as e:
        raise MapIOError(f"Could not write map file {path}: {e}") from e

    logger.info("Saved %dx%d map to %s", map_.width, map_.height, path)
    return path


def read_map_file(
    path: PathLike,
    tile_types: Optional[Container[str]] = None,
) -> Map:
    path = Path(path)
    try:
        with open(path, "rb") as f:
            loaded = read_map(f, tile_types)
    except OSError as e:
        raise MapIOError(f"Could not read map file {path}: {e}") from e

    logger.info("Loaded %dx%d map from %s", loaded.width, loaded.height, path)
    return loaded


def list_maps(directory: PathLike) -> List[str]:
    """
    List the '.map' files in `directory`, sorted by name.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(
        p.name
        for p in directory.iterdir()
        if p.is_file() and p.suffix == MAP_FILE_EXTENSION
    )
