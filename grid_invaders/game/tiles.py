"""
Occupancy tiles - what a cell of the per-tick occupancy grid holds.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class CellState(IntEnum):
    """Cell contents as seen by the renderer."""
    EMPTY = 0
    PLAYER = 1
    INVADER = 2
    PROJECTILE = 3
    EXPLOSION = 4


@dataclass(frozen=True)
class Tile:
    """
    A stamped cell of the occupancy grid.

    Invader and projectile stamps carry the index of the entity that made them
    so the collision resolver can map a cell back to its list slot.
    """
    kind: CellState
    owner: Optional[int] = None

    @classmethod
    def invader(cls, index: int) -> "Tile":
        return cls(CellState.INVADER, index)

    @classmethod
    def projectile(cls, index: int) -> "Tile":
        return cls(CellState.PROJECTILE, index)

    @property
    def is_empty(self) -> bool:
        return self.kind == CellState.EMPTY


Tile.EMPTY = Tile(CellState.EMPTY)
Tile.PLAYER = Tile(CellState.PLAYER)
Tile.EXPLOSION = Tile(CellState.EXPLOSION)
