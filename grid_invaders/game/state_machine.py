"""
Session state machine - sequences the menu and play sessions.

States:
    MENU     menu loop is driven, a paused session may be waiting
    RUNNING  game loop is driven
    DONE     the last session finished; menu loop is driven with its result

Exactly one loop is driven per tick. Loops answer with a GameAction and the
state machine applies the transition.
"""

import logging
import time
from enum import Enum, auto
from typing import Callable, List, Optional, Sequence

from ..core.loop_interface import GameAction, Intent
from .config import InvadersConfig
from .game_loop import GameLoop
from .menu_loop import MenuLoop
from .simulation import Simulation

logger = logging.getLogger(__name__)


class GameState(Enum):
    """State machine states."""
    MENU = auto()
    RUNNING = auto()
    DONE = auto()


def sleep_duration(frame_duration: float, elapsed: float) -> float:
    """Time left in the frame; zero when processing overran it."""
    return max(0.0, frame_duration - elapsed)


class Game:
    """
    Owns the active session and the loops, and applies transitions.

    The session is created through session_factory so a map file or a test
    can supply the starting layout.
    """

    def __init__(
        self,
        config: Optional[InvadersConfig] = None,
        session_factory: Optional[Callable[[], Simulation]] = None,
    ):
        """
        Initialize the state machine in the MENU state.

        Args:
            config: Session parameters, also used for frame pacing
            session_factory: Creates a fresh session for NEW_GAME
        """
        self.config = config or InvadersConfig()
        self.session_factory = session_factory or (
            lambda: Simulation.from_config(self.config)
        )
        self.state = GameState.MENU
        self.session: Optional[Simulation] = None
        self.game_loop: Optional[GameLoop] = None
        self.menu = MenuLoop()
        self.running = True
        self.sessions_played = 0

    def tick(self, intents: Sequence[Intent]) -> bool:
        """
        Drive the loop for the current state once and apply its action.

        Returns:
            False once QUIT has been processed
        """
        if not self.running:
            return False

        if self.state == GameState.RUNNING and self.game_loop is not None:
            action = self.game_loop.frame(intents)
        else:
            action = self.menu.frame(intents)

        self.apply(action)
        return self.running

    def apply(self, action: Optional[GameAction]) -> None:
        """Apply a transition requested by a loop."""
        if action is None:
            return

        if action == GameAction.CONTINUE:
            if self.session is None:
                self._new_session()
            self.state = GameState.RUNNING
        elif action == GameAction.NEW_GAME:
            self._new_session()
            self.state = GameState.RUNNING
        elif action == GameAction.END_GAME:
            if self.session is not None:
                self.session.abandon()
            self._discard_session()
            self.state = GameState.MENU
            self.menu.refresh(can_continue=False, banner="Game abandoned")
        elif action == GameAction.MENU:
            self._enter_menu()
        elif action == GameAction.QUIT:
            logger.info("Quit after %d sessions", self.sessions_played)
            self.running = False

    def _new_session(self) -> None:
        self._discard_session()
        self.session = self.session_factory()
        self.game_loop = GameLoop(self.session)
        self.sessions_played += 1
        logger.info(
            "New session %d: %dx%d grid, %d invaders",
            self.sessions_played, self.session.width, self.session.height,
            len(self.session.invaders),
        )

    def _discard_session(self) -> None:
        if self.session is not None:
            logger.debug("Discarding session after %d ticks", self.session.ticks)
        self.session = None
        self.game_loop = None

    def _enter_menu(self) -> None:
        if self.session is not None and self.session.is_over:
            self.state = GameState.DONE
            if self.session.is_won:
                banner = "You won! The invaders are gone."
            else:
                banner = "Game over. The invaders reached you."
            self.menu.refresh(can_continue=False, banner=banner)
        else:
            self.state = GameState.MENU
            self.menu.refresh(can_continue=self.session is not None)

    def run(
        self,
        poll_intents: Callable[[], List[Intent]],
        render: Callable[["Game"], None],
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
        max_ticks: Optional[int] = None,
    ) -> int:
        """
        Run the fixed-tick loop until QUIT.

        Args:
            poll_intents: Non-blocking intent poll, called once per tick
            render: Draws the current state after each tick
            clock: Monotonic clock in seconds
            sleep: Sleep function used for frame pacing
            max_ticks: Stop after this many ticks (None = until QUIT)

        Returns:
            Number of ticks run
        """
        frame_duration = self.config.frame_duration
        ticks = 0

        while self.running and (max_ticks is None or ticks < max_ticks):
            start = clock()

            if self.tick(poll_intents()):
                render(self)

            ticks += 1
            sleep(sleep_duration(frame_duration, clock() - start))

        return ticks
