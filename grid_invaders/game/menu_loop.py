"""
Menu loop - item selection between sessions.
"""

from enum import Enum
from typing import List, Optional, Sequence

from ..core.loop_interface import GameAction, Intent, LoopInterface


class MenuItem(Enum):
    """Menu entries with their display label and action."""
    CONTINUE = ("Continue", GameAction.CONTINUE)
    NEW_GAME = ("New Game", GameAction.NEW_GAME)
    END_GAME = ("End Game", GameAction.END_GAME)
    QUIT = ("Quit", GameAction.QUIT)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def action(self) -> GameAction:
        return self.value[1]


class MenuLoop(LoopInterface):
    """
    Main menu.

    CONTINUE and END_GAME are only offered while there is a paused,
    unfinished session. The banner carries the outcome of the last session.
    """

    def __init__(self):
        self.can_continue = False
        self.banner: str = ""
        self.selected: MenuItem = MenuItem.NEW_GAME

    @property
    def items(self) -> List[MenuItem]:
        if self.can_continue:
            return [MenuItem.CONTINUE, MenuItem.NEW_GAME, MenuItem.END_GAME, MenuItem.QUIT]
        return [MenuItem.NEW_GAME, MenuItem.QUIT]

    def refresh(self, can_continue: bool, banner: str = "") -> None:
        """Update the offered items when the menu is (re)entered."""
        self.can_continue = can_continue
        self.banner = banner
        self.selected = MenuItem.CONTINUE if can_continue else MenuItem.NEW_GAME

    def frame(self, intents: Sequence[Intent]) -> Optional[GameAction]:
        for intent in intents:
            if intent == Intent.QUIT:
                return GameAction.QUIT
            elif intent == Intent.MENU_UP:
                self._move(-1)
            elif intent == Intent.MENU_DOWN:
                self._move(1)
            elif intent == Intent.MENU_SELECT:
                return self.selected.action
        return None

    def _move(self, step: int) -> None:
        items = self.items
        index = items.index(self.selected) if self.selected in items else 0
        index = max(0, min(len(items) - 1, index + step))
        self.selected = items[index]
