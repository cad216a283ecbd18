"""
Collision resolution through a per-tick occupancy grid.

Entities are stamped onto a fresh grid; an invader stamped onto an occupied
cell turns it into an explosion. Afterwards only entities whose cell still
carries their own tag survive.
"""

from typing import List, Tuple

from ..core.grid import Coord, Grid, Index
from .entities import Invader, Player, Projectile
from .tiles import Tile


def resolve_collisions(
    player: Player,
    invaders: List[Invader],
    projectiles: List[Projectile],
    size: Index,
) -> Tuple[Grid[Tile], List[Invader], List[Projectile]]:
    """
    Stamp all entities, detect overlaps and prune destroyed entities.

    Args:
        player: The player, stamped last and never removed
        invaders: Live invaders in list order (the index is the owner tag)
        projectiles: Live projectiles in list order (the index is the owner tag)
        size: Grid dimensions

    Returns:
        Tuple of (occupancy grid, surviving invaders, surviving projectiles)
    """
    occupancy: Grid[Tile] = Grid(size, Tile.EMPTY)

    # Later projectiles on the same cell overwrite earlier ones
    for index, projectile in enumerate(projectiles):
        occupancy[projectile.position] = Tile.projectile(index)

    for index, invader in enumerate(invaders):
        if occupancy[invader.position].is_empty:
            occupancy[invader.position] = Tile.invader(index)
        else:
            occupancy[invader.position] = Tile.EXPLOSION

    surviving_projectiles = [
        p for index, p in enumerate(projectiles)
        if occupancy[p.position] == Tile.projectile(index)
    ]
    surviving_invaders = [
        inv for index, inv in enumerate(invaders)
        if occupancy[inv.position] == Tile.invader(index)
    ]

    occupancy[player.position] = Tile.PLAYER

    return occupancy, surviving_invaders, surviving_projectiles


def explosions(occupancy: Grid[Tile]) -> List[Coord]:
    """Cells that hold an explosion this tick."""
    return [coord for coord, tile in occupancy if tile == Tile.EXPLOSION]
