"""
Grid Invaders game module - entities, simulation, collisions and session flow.
"""

from .config import InvadersConfig
from .entities import Entity, FrameContext, Invader, Player, Projectile, Request
from .tiles import CellState, Tile
from .simulation import Simulation
from .map_loader import GameMap, MapFormatError, load_map, parse_map
from .game_loop import GameLoop
from .menu_loop import MenuItem, MenuLoop
from .state_machine import Game, GameState, sleep_duration

__all__ = [
    "InvadersConfig",
    "Entity",
    "FrameContext",
    "Invader",
    "Player",
    "Projectile",
    "Request",
    "CellState",
    "Tile",
    "Simulation",
    "GameMap",
    "MapFormatError",
    "load_map",
    "parse_map",
    "GameLoop",
    "MenuItem",
    "MenuLoop",
    "Game",
    "GameState",
    "sleep_duration",
]
