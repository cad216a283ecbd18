"""
Entities - the player, the invaders and their projectiles.

Each entity moves itself in place during update() and may answer with a
Request for the simulation to act on (spawn a projectile, remove the entity).
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Sequence

from ..core.grid import Coord, Direction
from ..core.loop_interface import Intent
from .tiles import CellState

logger = logging.getLogger(__name__)

# Cooldown counter saturates instead of growing without bound
COOLDOWN_MAX = 255
DEFAULT_FIRE_COOLDOWN_TICKS = 5
PLAYER_START_HEALTH = 3


class Request(Enum):
    """Side effects an entity asks the simulation to perform."""
    FIRE_PROJECTILE = auto()
    REMOVE = auto()


@dataclass
class FrameContext:
    """Per-tick input shared by every entity update."""
    intents: Sequence[Intent] = field(default_factory=list)
    frame: int = 0
    width: int = 45
    height: int = 15
    fire_cooldown_ticks: int = DEFAULT_FIRE_COOLDOWN_TICKS
    invader_step_interval_ticks: int = 5


class Entity(ABC):
    """Capabilities shared by every entity kind."""

    position: Coord

    @property
    @abstractmethod
    def glyph(self) -> str:
        """Character used when drawing the entity."""
        pass

    @property
    @abstractmethod
    def cell_state(self) -> CellState:
        """Cell state the entity shows up as in the render snapshot."""
        pass

    @abstractmethod
    def update(self, ctx: FrameContext) -> Optional[Request]:
        """
        Advance the entity by one tick.

        Args:
            ctx: Intents, frame counter and grid dimensions for this tick

        Returns:
            A Request for the simulation, or None
        """
        pass


@dataclass
class Player(Entity):
    """The player's cannon on the bottom row."""
    position: Coord
    health: int = PLAYER_START_HEALTH
    # Starts at the threshold so the first tick's increment allows a shot
    cooldown: int = DEFAULT_FIRE_COOLDOWN_TICKS

    @property
    def glyph(self) -> str:
        return "^"

    @property
    def cell_state(self) -> CellState:
        return CellState.PLAYER

    def update(self, ctx: FrameContext) -> Optional[Request]:
        self.cooldown = min(self.cooldown + 1, COOLDOWN_MAX)

        request = None
        for intent in ctx.intents:
            if intent == Intent.MOVE_LEFT:
                if self.position.x > 0:
                    self.position = self.position.offset(-1, 0)
            elif intent == Intent.MOVE_RIGHT:
                if self.position.x < ctx.width - 1:
                    self.position = self.position.offset(1, 0)
            elif intent == Intent.FIRE:
                if self.cooldown > ctx.fire_cooldown_ticks:
                    self.cooldown = 0
                    request = Request.FIRE_PROJECTILE

        return request

    def spawn_projectile(self) -> Optional["Projectile"]:
        """Create the projectile fired from just above the player."""
        if self.position.y == 0:
            logger.debug("Player on the top row has no room to fire")
            return None
        return Projectile(self.position.offset(0, -1), Direction.UP)


@dataclass
class Invader(Entity):
    """
    A single invader sweeping back and forth across the grid.

    Moving left or right it steps one cell per gated tick; at an edge it
    drops one row (DOWN) and on the next gated tick heads back toward the
    far edge.
    """
    position: Coord
    direction: Direction = Direction.RIGHT

    def __post_init__(self):
        if self.direction == Direction.UP:
            raise ValueError(f"Invader at {self.position} cannot face UP")

    @property
    def glyph(self) -> str:
        return "@"

    @property
    def cell_state(self) -> CellState:
        return CellState.INVADER

    def update(self, ctx: FrameContext) -> Optional[Request]:
        if ctx.frame % ctx.invader_step_interval_ticks != 0:
            return None

        x = self.position.x
        if self.direction == Direction.DOWN:
            if x < ctx.width - x:
                # Closer to the left edge
                self.direction = Direction.RIGHT
                self.position = self.position.offset(1, 0)
            else:
                self.direction = Direction.LEFT
                self.position = self.position.offset(-1, 0)
        elif self.direction == Direction.LEFT:
            if x == 0:
                self.direction = Direction.DOWN
                self.position = self.position.offset(0, 1)
            else:
                self.position = self.position.offset(-1, 0)
        elif self.direction == Direction.RIGHT:
            if x == ctx.width - 1:
                self.direction = Direction.DOWN
                self.position = self.position.offset(0, 1)
            else:
                self.position = self.position.offset(1, 0)
        else:
            raise AssertionError(f"Invader at {self.position} is facing {self.direction.name}")

        return None


@dataclass
class Projectile(Entity):
    """A projectile travelling one cell per tick in a fixed direction."""
    position: Coord
    direction: Direction = Direction.UP

    @property
    def glyph(self) -> str:
        if self.direction == Direction.UP:
            return "!"
        if self.direction == Direction.DOWN:
            return ";"
        return "="

    @property
    def cell_state(self) -> CellState:
        return CellState.PROJECTILE

    def update(self, ctx: FrameContext) -> Optional[Request]:
        x, y = self.position.x, self.position.y

        if self.direction == Direction.UP:
            if y > 0:
                self.position = self.position.offset(0, -1)
                return None
        elif self.direction == Direction.DOWN:
            if y + 1 < ctx.height:
                self.position = self.position.offset(0, 1)
                return None
        elif self.direction == Direction.LEFT:
            if x > 0:
                self.position = self.position.offset(-1, 0)
                return None
        elif self.direction == Direction.RIGHT:
            if x + 1 < ctx.width:
                self.position = self.position.offset(1, 0)
                return None

        return Request.REMOVE


def update_projectiles(projectiles: List[Projectile], ctx: FrameContext) -> List[Projectile]:
    """Move every projectile, dropping the ones that asked to be removed."""
    return [p for p in projectiles if p.update(ctx) != Request.REMOVE]
