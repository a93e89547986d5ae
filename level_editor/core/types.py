from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .errors import IncompleteMap, InvalidDimension, OutOfBounds, PositionMismatch

Position = Tuple[int, int]
TileTypeName = str


@dataclass(frozen=True)
class MapTileType:
    tag: int
    name: TileTypeName


class MapTile:
    """
    One grid cell. The position is fixed at creation; only `type` changes.
    """

    __slots__ = ("_position", "type")

    def __init__(self, x: int, y: int, type: TileTypeName) -> None:
        self._position: Position = (x, y)
        self.type = type

    @property
    def position(self) -> Position:
        return self._position

    @property
    def x(self) -> int:
        return self._position[0]

    @property
    def y(self) -> int:
        return self._position[1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapTile):
            return NotImplemented
        return self._position == other._position and self.type == other.type

    def __hash__(self) -> int:
        return hash(self._position)

    def __repr__(self) -> str:
        return f"MapTile(x={self.x}, y={self.y}, type={self.type!r})"


def _check_dimension(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDimension(f"Map {name} must be an integer, got {value!r}.")
    if value <= 0:
        raise InvalidDimension(f"Map {name} must be positive, got {value}.")


class Map:
    """
    Fixed-size grid of tiles, indexed [x][y].

    A freshly constructed Map has allocated but unassigned cells; use
    `Map.filled` or populate every cell before handing it out.
    """

    def __init__(self, width: int, height: int) -> None:
        _check_dimension("width", width)
        _check_dimension("height", height)

        self._width = width
        self._height = height
        self._tiles: List[List[Optional[MapTile]]] = [
            [None for _ in range(height)] for _ in range(width)
        ]

    @classmethod
    def filled(cls, width: int, height: int, default_type: TileTypeName) -> "Map":
        m = cls(width, height)
        for x in range(width):
            for y in range(height):
                m._tiles[x][y] = MapTile(x, y, default_type)
        return m

    # ------------------------------------------------------------------ size

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Tuple[int, int]:
        return self._width, self._height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBounds(
                f"Position ({x}, {y}) is outside the {self._width}x{self._height} map."
            )

    # ---------------------------------------------------------------- access

    def get(self, x: int, y: int) -> MapTile:
        self._check_bounds(x, y)
        tile = self._tiles[x][y]
        if tile is None:
            raise IncompleteMap(f"Tile ({x}, {y}) has not been assigned yet.")
        return tile

    def is_assigned(self, x: int, y: int) -> bool:
        self._check_bounds(x, y)
        return self._tiles[x][y] is not None

    def set(self, x: int, y: int, tile: MapTile) -> None:
        self._check_bounds(x, y)
        if tile.position != (x, y):
            raise PositionMismatch(
                f"Tile at {tile.position} cannot be placed at ({x}, {y})."
            )
        self._tiles[x][y] = tile

    def set_tile_type(self, x: int, y: int, type_name: TileTypeName) -> MapTile:
        tile = self.get(x, y)
        tile.type = type_name
        return tile

    def __getitem__(self, pos: Position) -> MapTile:
        x, y = pos
        return self.get(x, y)

    def __setitem__(self, pos: Position, tile: MapTile) -> None:
        x, y = pos
        self.set(x, y, tile)

    # ------------------------------------------------------------- iteration

    def tiles(self) -> Iterator[MapTile]:
        # x-major: this is also the on-disk record order
        for column in self._tiles:
            for tile in column:
                if tile is not None:
                    yield tile

    def __iter__(self) -> Iterator[MapTile]:
        return self.tiles()

    def is_complete(self) -> bool:
        return all(tile is not None for column in self._tiles for tile in column)

    def __repr__(self) -> str:
        return f"Map(width={self._width}, height={self._height})"
