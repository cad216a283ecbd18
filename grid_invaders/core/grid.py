"""
Grid primitives - integer coordinates, directions and a fixed-size 2D grid.

The same Grid type backs the glyph buffer used for drawing and the occupancy
map used for collision detection.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Generic, Iterator, List, Tuple, TypeVar, Union

T = TypeVar("T")


class Direction(IntEnum):
    """Movement directions on the grid."""
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


@dataclass(frozen=True)
class Coord:
    """A cell position on the grid."""
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Coord":
        """Return the coordinate shifted by (dx, dy)."""
        return Coord(self.x + dx, self.y + dy)

    def area(self) -> int:
        """Number of cells in a grid of this size."""
        return self.x * self.y

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary for serialization."""
        return {"x": self.x, "y": self.y}


Index = Union[Coord, Tuple[int, int]]


class Grid(Generic[T]):
    """
    Fixed-size 2D grid stored as a dense row-major list.

    Out-of-bounds access is a programming error and raises IndexError;
    coordinates are never clamped or wrapped.
    """

    def __init__(self, size: Index, default: T):
        """
        Initialize the grid.

        Args:
            size: Grid dimensions as Coord(width, height) or (width, height)
            default: Value every cell starts with
        """
        width, height = _unpack(size)
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._cells: List[T] = [default] * self.size.area()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Coord:
        return Coord(self._width, self._height)

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether (x, y) lies inside the grid."""
        return 0 <= x < self._width and 0 <= y < self._height

    def _offset(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(
                f"({x}, {y}) is outside grid of size {self._width}x{self._height}"
            )
        return y * self._width + x

    def get(self, x: int, y: int) -> T:
        return self._cells[self._offset(x, y)]

    def set(self, x: int, y: int, value: T) -> None:
        self._cells[self._offset(x, y)] = value

    def __getitem__(self, index: Index) -> T:
        x, y = _unpack(index)
        return self.get(x, y)

    def __setitem__(self, index: Index, value: T) -> None:
        x, y = _unpack(index)
        self.set(x, y, value)

    def __iter__(self) -> Iterator[Tuple[Coord, T]]:
        """Iterate over (Coord, value) pairs in row-major order."""
        for offset, value in enumerate(self._cells):
            yield Coord(offset % self._width, offset // self._width), value

    def rows(self) -> Iterator[List[T]]:
        """Yield each row as a list, top to bottom."""
        for y in range(self._height):
            start = y * self._width
            yield self._cells[start:start + self._width]

    def __repr__(self) -> str:
        return f"Grid({self._width}x{self._height})"


def _unpack(index: Index) -> Tuple[int, int]:
    if isinstance(index, Coord):
        return index.x, index.y
    x, y = index
    return x, y
