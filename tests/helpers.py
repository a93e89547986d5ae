from __future__ import annotations

import io
from typing import Iterable, Tuple

from level_editor.core.io import MAP_NAMESPACE

Record = Tuple[object, object, str]


def map_xml(width, height, records: Iterable[Record]) -> bytes:
    """Hand-build a .map document; values are inserted as given."""
    tiles = "".join(
        f"<MapTile><X>{x}</X><Y>{y}</Y><Type>{t}</Type></MapTile>" for x, y, t in records
    )
    return (
        f'<Map xmlns:map="{MAP_NAMESPACE}">'
        f"<Width>{width}</Width><Height>{height}</Height>"
        f"<Tiles>{tiles}</Tiles>"
        "</Map>"
    ).encode("utf-8")


def map_stream(width, height, records: Iterable[Record]) -> io.BytesIO:
    return io.BytesIO(map_xml(width, height, records))


def full_records(width: int, height: int, type_name: str = "Grass"):
    return [(x, y, type_name) for x in range(width) for y in range(height)]


def tile_set(map_):
    return {(t.position, t.type) for t in map_.tiles()}
