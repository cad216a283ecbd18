"""
Map Loader - build a session from a textual map file.

Format:
    first line:       "<width> <height>"
    following lines:  one grid row each, using the glyphs below

    ' '  empty        '@'  invader (sweeping right)
    '^'  player       '!'  projectile (travelling up)
    '*'  explosion    (transient, loaded as empty)

Short rows are padded with spaces and missing rows are empty. A row wider
than the declared width, a bad header, or anything other than exactly one
player aborts the load.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from ..core.grid import Coord, Direction
from .config import InvadersConfig
from .entities import Invader, Player, Projectile
from .simulation import Simulation

logger = logging.getLogger(__name__)

EMPTY_GLYPH = " "
INVADER_GLYPH = "@"
PLAYER_GLYPH = "^"
PROJECTILE_GLYPH = "!"
EXPLOSION_GLYPH = "*"


class MapFormatError(ValueError):
    """Raised when a map file cannot be turned into a session."""


@dataclass
class GameMap:
    """Starting layout parsed from a map file."""
    width: int
    height: int
    player: Player
    invaders: List[Invader] = field(default_factory=list)
    projectiles: List[Projectile] = field(default_factory=list)

    def to_simulation(self, config: Optional[InvadersConfig] = None) -> Simulation:
        """
        Create a session from this layout.

        The map's dimensions replace the config's grid size; timing settings
        are taken from the config. Entities are copied, so one map can start
        any number of sessions.
        """
        config = config or InvadersConfig()
        session_config = InvadersConfig.from_dict(
            {**config.to_dict(), "grid_size": [self.width, self.height]}
        )
        return Simulation(
            session_config,
            player=Player(
                self.player.position,
                health=self.player.health,
                cooldown=session_config.fire_cooldown_ticks,
            ),
            invaders=[Invader(inv.position, inv.direction) for inv in self.invaders],
            projectiles=[Projectile(p.position, p.direction) for p in self.projectiles],
        )


def parse_map(text: str, source: str = "<string>") -> GameMap:
    """
    Parse map text into a GameMap.

    Args:
        text: Full map file contents
        source: Name used in error and log messages

    Returns:
        The parsed layout

    Raises:
        MapFormatError: If the header or rows are malformed, or the map does
            not contain exactly one player
    """
    lines = text.splitlines()
    if not lines:
        raise MapFormatError(f"{source}: map is empty")

    width, height = _parse_header(lines[0], source)

    rows = lines[1:]
    if len(rows) > height:
        logger.warning(
            "%s: ignoring %d rows beyond declared height %d",
            source, len(rows) - height, height,
        )
        rows = rows[:height]

    player: Optional[Player] = None
    invaders: List[Invader] = []
    projectiles: List[Projectile] = []

    for y, row in enumerate(rows):
        if len(row) > width:
            raise MapFormatError(
                f"{source}: row {y + 1} is {len(row)} cells wide, declared width is {width}"
            )
        for x, glyph in enumerate(row.ljust(width)):
            position = Coord(x, y)
            if glyph == EMPTY_GLYPH:
                continue
            elif glyph == INVADER_GLYPH:
                invaders.append(Invader(position, Direction.RIGHT))
            elif glyph == PROJECTILE_GLYPH:
                projectiles.append(Projectile(position, Direction.UP))
            elif glyph == PLAYER_GLYPH:
                if player is not None:
                    raise MapFormatError(
                        f"{source}: second player at ({x}, {y}), "
                        f"first at ({player.position.x}, {player.position.y})"
                    )
                player = Player(position)
            elif glyph == EXPLOSION_GLYPH:
                logger.warning("%s: explosion at (%d, %d) loaded as empty", source, x, y)
            else:
                logger.warning("%s: unknown glyph %r at (%d, %d) loaded as empty", source, glyph, x, y)

    if player is None:
        raise MapFormatError(f"{source}: map has no player ('{PLAYER_GLYPH}')")

    return GameMap(
        width=width,
        height=height,
        player=player,
        invaders=invaders,
        projectiles=projectiles,
    )


def load_map(path: Union[str, Path]) -> GameMap:
    """
    Load a map file from disk.

    Raises:
        MapFormatError: If the file is missing or malformed
    """
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as e:
        raise MapFormatError(f"Cannot read map file {path}: {e}") from e

    game_map = parse_map(text, source=str(path))
    logger.info(
        "Loaded map %s (%dx%d, %d invaders)",
        path, game_map.width, game_map.height, len(game_map.invaders),
    )
    return game_map


def _parse_header(line: str, source: str):
    parts = line.split()
    if len(parts) != 2:
        raise MapFormatError(f"{source}: header must be '<width> <height>', got {line!r}")
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError as e:
        raise MapFormatError(f"{source}: header must be '<width> <height>', got {line!r}") from e
    if width < 2 or height <= 0:
        raise MapFormatError(
            f"{source}: map needs a width of at least 2 and a positive height, got {width}x{height}"
        )
    return width, height
