from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    INVALID_DIMENSION = "invalid_dimension"
    OUT_OF_BOUNDS = "out_of_bounds"
    POSITION_MISMATCH = "position_mismatch"
    INCOMPLETE_MAP = "incomplete_map"
    UNKNOWN_TILE_TYPE = "unknown_tile_type"
    PARSE_ERROR = "parse_error"
    IO_ERROR = "io_error"


class MapError(Exception):
    """Base class for everything the map model and codec can fail with."""

    kind: ErrorKind


class InvalidDimension(MapError, ValueError):
    kind = ErrorKind.INVALID_DIMENSION


class OutOfBounds(MapError, IndexError):
    kind = ErrorKind.OUT_OF_BOUNDS


class PositionMismatch(MapError, ValueError):
    kind = ErrorKind.POSITION_MISMATCH


class IncompleteMap(MapError, LookupError):
    kind = ErrorKind.INCOMPLETE_MAP


class UnknownTileType(MapError, ValueError):
    kind = ErrorKind.UNKNOWN_TILE_TYPE


class MapParseError(MapError):
    kind = ErrorKind.PARSE_ERROR


class MapIOError(MapError):
    kind = ErrorKind.IO_ERROR


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a collaborator-facing operation.
    Exactly one of `value` / `error` is meaningful; branch on `ok` or `kind`.
    """

    value: Optional[T] = None
    error: Optional[MapError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: MapError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ""

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
