"""
Terminal Display - Rich-based in-place drawing and blessed keyboard input.

Provides:
- KeyboardInput: drains pending keys each tick and decodes them into intents
- TerminalDisplay: redraws the occupancy snapshot or the menu in place
"""

import logging
from typing import Dict, List, Optional

import numpy as np
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ..core.grid import Grid
from ..core.loop_interface import Intent
from ..game.menu_loop import MenuLoop
from ..game.simulation import Simulation
from ..game.state_machine import Game, GameState
from ..game.tiles import CellState

logger = logging.getLogger(__name__)

CELL_GLYPHS: Dict[CellState, str] = {
    CellState.EMPTY: " ",
    CellState.PLAYER: "^",
    CellState.INVADER: "@",
    CellState.PROJECTILE: "!",
    CellState.EXPLOSION: "*",
}

GLYPH_STYLES: Dict[str, str] = {
    "^": "bold cyan",
    "@": "green",
    "!": "yellow",
    "*": "bold red",
}

KEY_NAME_INTENTS: Dict[str, Intent] = {
    "KEY_LEFT": Intent.MOVE_LEFT,
    "KEY_RIGHT": Intent.MOVE_RIGHT,
    "KEY_UP": Intent.MENU_UP,
    "KEY_DOWN": Intent.MENU_DOWN,
    "KEY_ENTER": Intent.MENU_SELECT,
    "KEY_ESCAPE": Intent.QUIT,
}

KEY_CHAR_INTENTS: Dict[str, Intent] = {
    "a": Intent.MOVE_LEFT,
    "d": Intent.MOVE_RIGHT,
    " ": Intent.FIRE,
    "w": Intent.MENU_UP,
    "s": Intent.MENU_DOWN,
    "\n": Intent.MENU_SELECT,
    "\r": Intent.MENU_SELECT,
    "q": Intent.QUIT,
}


def decode_key(key) -> Optional[Intent]:
    """
    Translate a blessed keystroke into an intent.

    Args:
        key: blessed Keystroke (a str with an optional .name)

    Returns:
        The intent, or None for keys with no binding
    """
    name = getattr(key, "name", None)
    if name and name in KEY_NAME_INTENTS:
        return KEY_NAME_INTENTS[name]
    return KEY_CHAR_INTENTS.get(str(key).lower())


class KeyboardInput:
    """Non-blocking keyboard poll on top of a blessed Terminal."""

    def __init__(self, terminal):
        """
        Args:
            terminal: blessed.Terminal already in cbreak mode
        """
        self.terminal = terminal

    def poll(self) -> List[Intent]:
        """Drain every pending key and return the decoded intents in order."""
        intents = []
        key = self.terminal.inkey(timeout=0)
        while key:
            intent = decode_key(key)
            if intent is None:
                logger.debug("Ignoring unbound key %r", getattr(key, "name", None) or str(key))
            else:
                intents.append(intent)
            key = self.terminal.inkey(timeout=0)
        return intents


def build_glyph_grid(snapshot: np.ndarray) -> Grid[str]:
    """Convert a (height, width) CellState snapshot into a glyph buffer."""
    height, width = snapshot.shape
    glyphs: Grid[str] = Grid((width, height), " ")
    for y in range(height):
        for x in range(width):
            glyphs.set(x, y, CELL_GLYPHS[CellState(int(snapshot[y, x]))])
    return glyphs


class TerminalDisplay:
    """
    Rich-based in-place display.

    Redraws a single panel every tick without scrolling: the play field while
    a session runs, the menu otherwise.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.live: Optional[Live] = None

    def start(self):
        """Start the live display."""
        self.live = Live(console=self.console, auto_refresh=False, transient=True)
        self.live.start()

    def stop(self):
        """Stop the live display."""
        if self.live:
            self.live.stop()
            self.live = None

    def render(self, game: Game) -> None:
        """Draw the state machine's current screen."""
        if game.state == GameState.RUNNING and game.session is not None:
            panel = self.build_game_panel(game.session)
        else:
            panel = self.build_menu_panel(game.menu, game.state)

        if self.live:
            self.live.update(panel, refresh=True)
        else:
            self.console.print(panel)

    def build_game_panel(self, session: Simulation) -> Panel:
        """Build the play field panel."""
        glyphs = build_glyph_grid(session.snapshot())

        field_text = Text()
        for y, row in enumerate(glyphs.rows()):
            if y:
                field_text.append("\n")
            for glyph in row:
                field_text.append(glyph, style=GLYPH_STYLES.get(glyph, ""))

        state = session.get_state()
        status = Text()
        status.append(f"Invaders: {state['invaders_left']}", style="bold")
        status.append(f"  Health: {state['player']['health']}")
        status.append(f"  Tick: {state['ticks']}", style="dim")
        status.append("  [←/→ move, space fire, q menu]", style="dim")

        return Panel(
            Group(field_text, status),
            title="Grid Invaders",
            border_style="blue",
            expand=False,
        )

    def build_menu_panel(self, menu: MenuLoop, state: GameState) -> Panel:
        """Build the menu panel, with the last session's result in DONE."""
        lines = Text()
        if menu.banner:
            style = "bold yellow" if state == GameState.DONE else "dim"
            lines.append(menu.banner + "\n\n", style=style)

        for item in menu.items:
            if item == menu.selected:
                lines.append(f"> {item.label}\n", style="bold cyan")
            else:
                lines.append(f"  {item.label}\n")

        lines.append("\n[↑/↓ choose, enter select, q quit]", style="dim")

        return Panel(lines, title="Grid Invaders", border_style="cyan", expand=False)
