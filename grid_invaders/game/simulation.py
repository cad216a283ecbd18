"""
Grid Invaders Simulation - pure per-tick game logic without terminal I/O.

A Simulation is one play session: it owns the player, the invaders and the
projectiles, advances them one tick at a time and resolves collisions.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..core.grid import Coord, Direction, Grid
from ..core.loop_interface import Intent
from .collisions import explosions, resolve_collisions
from .config import InvadersConfig
from .entities import (
    FrameContext,
    Invader,
    Player,
    Projectile,
    Request,
    update_projectiles,
)
from .tiles import Tile

logger = logging.getLogger(__name__)


class Simulation:
    """
    Core game session.

    The player sits on the bottom row, the invaders sweep back and forth and
    drop a row at each edge. The session is won once every invader is destroyed
    and lost once an invader reaches the player's row.
    """

    def __init__(
        self,
        config: Optional[InvadersConfig] = None,
        player: Optional[Player] = None,
        invaders: Optional[List[Invader]] = None,
        projectiles: Optional[List[Projectile]] = None,
    ):
        """
        Initialize the session.

        Args:
            config: Session parameters (defaults to InvadersConfig())
            player: Starting player (defaults to the config's start position)
            invaders: Starting invaders (defaults to the config's formation)
            projectiles: Projectiles already in flight
        """
        self.config = config or InvadersConfig()
        self.width, self.height = self.config.grid_size

        if player is None:
            player = Player(
                self.config.player_start(),
                cooldown=self.config.fire_cooldown_ticks,
            )
        if invaders is None:
            invaders = [
                Invader(position, direction)
                for position, direction in self.config.formation()
            ]

        self.player = player
        self.invaders: List[Invader] = list(invaders)
        self.projectiles: List[Projectile] = list(projectiles or [])
        self.ticks: int = 0
        self.abandoned: bool = False
        self._result_logged = False

        # Stamp the starting layout so there is something to draw before tick 0
        self.occupancy: Grid[Tile] = self._resolve()

    @classmethod
    def from_config(cls, config: InvadersConfig) -> "Simulation":
        """Create a session with the config's standard formation."""
        config.validate()
        return cls(config)

    @property
    def size(self) -> Coord:
        return Coord(self.width, self.height)

    @property
    def is_won(self) -> bool:
        return not self.invaders

    @property
    def is_lost(self) -> bool:
        player_row = self.player.position.y
        if any(inv.position.y >= player_row for inv in self.invaders):
            return True
        return any(
            p.direction == Direction.DOWN and p.position.y >= player_row
            for p in self.projectiles
        )

    @property
    def is_over(self) -> bool:
        return self.abandoned or self.is_won or self.is_lost

    def abandon(self) -> None:
        """Mark the session as given up by the player."""
        self.abandoned = True
        logger.info("Session abandoned after %d ticks", self.ticks)

    def step(self, intents: Sequence[Intent], frame: int) -> Grid[Tile]:
        """
        Advance the session by one tick.

        Args:
            intents: Intents polled this tick, in arrival order
            frame: Frame counter used to gate invader movement

        Returns:
            The occupancy grid for this tick
        """
        ctx = FrameContext(
            intents=intents,
            frame=frame,
            width=self.width,
            height=self.height,
            fire_cooldown_ticks=self.config.fire_cooldown_ticks,
            invader_step_interval_ticks=self.config.invader_step_interval_ticks,
        )

        self.projectiles = update_projectiles(self.projectiles, ctx)

        for invader in self.invaders:
            invader.update(ctx)

        if self.player.update(ctx) == Request.FIRE_PROJECTILE:
            projectile = self.player.spawn_projectile()
            if projectile is not None:
                self.projectiles.append(projectile)

        self.occupancy = self._resolve()
        self.ticks += 1

        blasts = explosions(self.occupancy)
        if blasts:
            logger.debug("Frame %d: explosions at %s", frame, [c.to_dict() for c in blasts])
        self._log_result()

        return self.occupancy

    def _resolve(self) -> Grid[Tile]:
        occupancy, self.invaders, self.projectiles = resolve_collisions(
            self.player, self.invaders, self.projectiles, self.size
        )
        return occupancy

    def _log_result(self) -> None:
        if self._result_logged:
            return
        if self.is_won:
            logger.info("Session won after %d ticks", self.ticks)
            self._result_logged = True
        elif self.is_lost:
            logger.info(
                "Session lost after %d ticks with %d invaders left",
                self.ticks, len(self.invaders),
            )
            self._result_logged = True

    def snapshot(self) -> np.ndarray:
        """
        Read-only view of the last occupancy grid as CellState values.

        Returns:
            Array of shape (height, width) with dtype int8
        """
        cells = np.array(
            [[int(tile.kind) for tile in row] for row in self.occupancy.rows()],
            dtype=np.int8,
        )
        cells.flags.writeable = False
        return cells

    def get_state(self) -> Dict[str, Any]:
        """Get current session state for display or debugging."""
        return {
            "player": {**self.player.position.to_dict(), "health": self.player.health},
            "invaders": [inv.position.to_dict() for inv in self.invaders],
            "projectiles": [p.position.to_dict() for p in self.projectiles],
            "invaders_left": len(self.invaders),
            "ticks": self.ticks,
            "won": self.is_won,
            "lost": self.is_lost,
            "width": self.width,
            "height": self.height,
        }
