"""
Game loop - drives one session tick by tick while the state machine is RUNNING.
"""

import logging
from typing import Optional, Sequence

from ..core.loop_interface import GameAction, Intent, LoopInterface
from .simulation import Simulation

logger = logging.getLogger(__name__)

# Frame counter wraps like a one-byte counter; 255 is a multiple of the
# default invader step interval so gating stays regular across the wrap
FRAME_COUNTER_WRAP = 255


class GameLoop(LoopInterface):
    """Steps the active session and reports when it is over."""

    def __init__(self, session: Simulation):
        self.session = session
        self.frame_counter = 0

    def frame(self, intents: Sequence[Intent]) -> Optional[GameAction]:
        # Quit pauses before the tick runs; the rest of this tick's intents are dropped
        if Intent.QUIT in intents:
            logger.debug("Session paused at tick %d", self.session.ticks)
            return GameAction.MENU

        if self.session.is_over:
            return GameAction.MENU

        self.session.step(intents, self.frame_counter)
        self.frame_counter = (self.frame_counter + 1) % FRAME_COUNTER_WRAP

        if self.session.is_over:
            return GameAction.MENU
        return GameAction.CONTINUE
