"""
Core abstractions for Grid Invaders.

Provides the grid primitive and the loop contract shared by the menu and game loops.
"""

from .grid import Coord, Direction, Grid
from .loop_interface import GameAction, Intent, LoopInterface

__all__ = [
    'Coord',
    'Direction',
    'Grid',
    'GameAction',
    'Intent',
    'LoopInterface',
]
