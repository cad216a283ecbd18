"""
Abstract loop interface for Grid Invaders.

The state machine drives exactly one loop per tick. Each loop consumes the
intents polled for that tick and answers with a GameAction telling the state
machine where to go next.
"""

from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Optional, Sequence


class Intent(Enum):
    """Abstract input events, decoupled from physical keys."""
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    FIRE = auto()
    MENU_UP = auto()
    MENU_DOWN = auto()
    MENU_SELECT = auto()
    QUIT = auto()


class GameAction(Enum):
    """Transitions requested by a loop."""
    CONTINUE = auto()
    NEW_GAME = auto()
    END_GAME = auto()
    MENU = auto()
    QUIT = auto()


class LoopInterface(ABC):
    """
    Abstract base class for the menu and game loops.

    Loops hold their own state between ticks but never sleep or touch the
    terminal; pacing and I/O belong to the state machine's run loop.
    """

    @abstractmethod
    def frame(self, intents: Sequence[Intent]) -> Optional[GameAction]:
        """
        Process one tick.

        Args:
            intents: Intents polled this tick, in arrival order

        Returns:
            The action to apply, or None to stay in the current state
        """
        pass
