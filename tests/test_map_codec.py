import io
import xml.etree.ElementTree as ET

import pytest

from level_editor.core.errors import (
    IncompleteMap,
    InvalidDimension,
    MapIOError,
    MapParseError,
    OutOfBounds,
)
from level_editor.core.io import MAP_NAMESPACE, read_map, write_map
from level_editor.core.types import Map

from tests.helpers import full_records, map_stream, tile_set


class BrokenStream(io.BytesIO):
    def write(self, data):
        raise OSError("disk full")


def _write(m: Map) -> bytes:
    buf = io.BytesIO()
    write_map(m, buf)
    return buf.getvalue()


def _records(data: bytes):
    root = ET.fromstring(data)
    return [
        (int(el.findtext("X")), int(el.findtext("Y")), el.findtext("Type"))
        for el in root.find("Tiles")
    ]


def test_write_layout():
    m = Map.filled(3, 2, "Grass")
    data = _write(m)

    assert data.startswith(b"<?xml")
    assert f'xmlns:map="{MAP_NAMESPACE}"'.encode() in data

    root = ET.fromstring(data)
    assert root.tag == "Map"
    assert [child.tag for child in root] == ["Width", "Height", "Tiles"]
    assert root.findtext("Width") == "3"
    assert root.findtext("Height") == "2"

    tiles = list(root.find("Tiles"))
    assert len(tiles) == 6
    assert all(el.tag == "MapTile" for el in tiles)
    assert [child.tag for child in tiles[0]] == ["X", "Y", "Type"]


def test_paint_then_write_orders_records_x_major():
    m = Map.filled(2, 2, "Grass")
    m.set_tile_type(1, 0, "Water")

    assert _records(_write(m)) == [
        (0, 0, "Grass"),
        (0, 1, "Grass"),
        (1, 0, "Water"),
        (1, 1, "Grass"),
    ]


def test_large_numbers_have_no_grouping():
    m = Map.filled(1200, 1, "Grass")
    root = ET.fromstring(_write(m))
    assert root.findtext("Width") == "1200"


def test_write_failure_raises_io_error():
    with pytest.raises(MapIOError):
        write_map(Map.filled(2, 2, "Grass"), BrokenStream())


@pytest.mark.parametrize("width,height", [(1, 1), (2, 2), (4, 3)])
def test_round_trip(width, height):
    m = Map.filled(width, height, "Grass")
    m.set_tile_type(width - 1, 0, "Water")
    m.set_tile_type(0, height - 1, "Desert")

    loaded = read_map(io.BytesIO(_write(m)))

    assert loaded.size == m.size
    assert tile_set(loaded) == tile_set(m)
    assert [t.position for t in loaded.tiles()] == [t.position for t in m.tiles()]


def test_read_accepts_records_in_any_order():
    records = list(reversed(full_records(2, 2)))
    loaded = read_map(map_stream(2, 2, records))
    assert loaded.is_complete()
    assert loaded[1, 1].type == "Grass"


def test_read_trims_whitespace_in_numbers():
    loaded = read_map(map_stream(" 1 ", "\n1\n", [(" 0", "0 ", "Water")]))
    assert loaded[0, 0].type == "Water"


def test_read_zero_width_fails():
    with pytest.raises(InvalidDimension):
        read_map(map_stream(0, 2, []))


@pytest.mark.parametrize(
    "width,height",
    [("ten", 2), (2, "1.5"), ("", 2), (2, "1,000"), ("0x10", 2)],
)
def test_read_non_numeric_dimension_fails(width, height):
    with pytest.raises(MapParseError):
        read_map(map_stream(width, height, full_records(2, 2)))


def test_read_malformed_xml_fails():
    with pytest.raises(MapParseError):
        read_map(io.BytesIO(b"<Map><Width>2</Width><Height>"))


def test_read_missing_tiles_element_fails():
    data = b"<Map><Width>1</Width><Height>1</Height></Map>"
    with pytest.raises(MapParseError):
        read_map(io.BytesIO(data))


def test_read_fewer_records_than_declared_fails():
    with pytest.raises(MapParseError):
        read_map(map_stream(2, 2, full_records(2, 2)[:3]))


def test_read_ignores_trailing_records():
    records = full_records(2, 1) + [(0, 0, "Water")]
    loaded = read_map(map_stream(2, 1, records))
    assert loaded[0, 0].type == "Grass"


def test_read_duplicate_record_fails():
    records = [(0, 0, "Grass"), (0, 0, "Water"), (1, 0, "Grass"), (1, 1, "Grass")]
    with pytest.raises(MapParseError):
        read_map(map_stream(2, 2, records))


def test_read_record_outside_map_fails():
    records = [(0, 0, "Grass"), (5, 0, "Grass")]
    with pytest.raises(OutOfBounds):
        read_map(map_stream(2, 1, records))


def test_read_non_numeric_coordinate_fails():
    records = [(0, 0, "Grass"), ("one", 0, "Grass")]
    with pytest.raises(MapParseError):
        read_map(map_stream(2, 1, records))


def test_read_checks_tile_types_when_given():
    records = [(0, 0, "Lava")]
    with pytest.raises(MapParseError):
        read_map(map_stream(1, 1, records), tile_types={"Grass", "Water"})

    loaded = read_map(map_stream(1, 1, records))
    assert loaded[0, 0].type == "Lava"


def test_read_overlong_number_is_parse_error():
    with pytest.raises(MapParseError):
        read_map(map_stream("1" * 5000, 1, []))


def test_read_short_file_with_huge_size_fails_before_allocating():
    # a 100000x100000 grid would not fit in memory
    with pytest.raises(MapParseError):
        read_map(map_stream(100000, 100000, [(0, 0, "Grass")]))


def test_write_incomplete_map_fails():
    with pytest.raises(IncompleteMap):
        write_map(Map(2, 2), io.BytesIO())
