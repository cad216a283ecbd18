"""
Tests for the menu loop, the game loop and the session state machine.
"""

import pytest


def _game(**config_kwargs):
    from grid_invaders.game.config import InvadersConfig
    from grid_invaders.game.state_machine import Game

    config_kwargs.setdefault("frame_duration_ms", 0)
    return Game(InvadersConfig(**config_kwargs))


class TestMenuLoop:
    """Tests for menu navigation."""

    def test_initial_items(self):
        """Test CONTINUE is not offered before any session exists."""
        from grid_invaders.game.menu_loop import MenuItem, MenuLoop

        menu = MenuLoop()

        assert menu.items == [MenuItem.NEW_GAME, MenuItem.QUIT]
        assert menu.selected == MenuItem.NEW_GAME

    def test_navigation_clamped(self):
        """Test up/down move the selection without wrapping."""
        from grid_invaders.core.loop_interface import Intent
        from grid_invaders.game.menu_loop import MenuItem, MenuLoop

        menu = MenuLoop()
        assert menu.frame([Intent.MENU_UP]) is None
        assert menu.selected == MenuItem.NEW_GAME

        menu.frame([Intent.MENU_DOWN, Intent.MENU_DOWN])
        assert menu.selected == MenuItem.QUIT

    def test_select_returns_item_action(self):
        """Test MENU_SELECT answers with the selected item's action."""
        from grid_invaders.core.loop_interface import GameAction, Intent
        from grid_invaders.game.menu_loop import MenuLoop

        menu = MenuLoop()

        assert menu.frame([Intent.MENU_SELECT]) == GameAction.NEW_GAME
        assert menu.frame([Intent.MENU_DOWN, Intent.MENU_SELECT]) == GameAction.QUIT

    def test_quit_intent(self):
        """Test QUIT in the menu terminates."""
        from grid_invaders.core.loop_interface import GameAction, Intent
        from grid_invaders.game.menu_loop import MenuLoop

        assert MenuLoop().frame([Intent.QUIT]) == GameAction.QUIT

    def test_refresh_offers_continue(self):
        """Test a paused session puts CONTINUE first and selects it."""
        from grid_invaders.game.menu_loop import MenuItem, MenuLoop

        menu = MenuLoop()
        menu.refresh(can_continue=True)

        assert menu.items == [
            MenuItem.CONTINUE, MenuItem.NEW_GAME, MenuItem.END_GAME, MenuItem.QUIT,
        ]
        assert menu.selected == MenuItem.CONTINUE


class TestGameLoop:
    """Tests for the game loop's per-tick answers."""

    def test_continue_while_running(self):
        """Test a live session keeps the loop running."""
        from grid_invaders.core.loop_interface import GameAction
        from grid_invaders.game.config import InvadersConfig
        from grid_invaders.game.game_loop import GameLoop
        from grid_invaders.game.simulation import Simulation

        loop = GameLoop(Simulation.from_config(InvadersConfig()))

        assert loop.frame([]) == GameAction.CONTINUE
        assert loop.frame_counter == 1

    def test_quit_pauses_session(self):
        """Test QUIT returns to the menu without stepping or ending the session."""
        from grid_invaders.core.loop_interface import GameAction, Intent
        from grid_invaders.game.config import InvadersConfig
        from grid_invaders.game.game_loop import GameLoop
        from grid_invaders.game.simulation import Simulation

        session = Simulation.from_config(InvadersConfig())
        loop = GameLoop(session)

        assert loop.frame([Intent.MOVE_LEFT, Intent.QUIT]) == GameAction.MENU
        assert not session.abandoned
        assert not session.is_over
        assert session.ticks == 0

    def test_finished_session_returns_menu(self):
        """Test a won session returns MENU without running a tick."""
        from grid_invaders.core.loop_interface import GameAction
        from grid_invaders.game.config import InvadersConfig
        from grid_invaders.game.game_loop import GameLoop
        from grid_invaders.game.simulation import Simulation

        session = Simulation.from_config(InvadersConfig(invader_rows=0))
        loop = GameLoop(session)

        assert loop.frame([]) == GameAction.MENU
        assert session.ticks == 0

    def test_frame_counter_wraps(self):
        """Test the frame counter wraps at 255."""
        from grid_invaders.game.config import InvadersConfig
        from grid_invaders.game.game_loop import FRAME_COUNTER_WRAP, GameLoop
        from grid_invaders.game.simulation import Simulation

        loop = GameLoop(Simulation.from_config(InvadersConfig(grid_size=(45, 60))))
        loop.frame_counter = FRAME_COUNTER_WRAP - 1
        loop.frame([])

        assert loop.frame_counter == 0


class TestStateMachine:
    """Tests for transitions between MENU, RUNNING and DONE."""

    def test_starts_in_menu(self):
        """Test the machine starts in MENU with no session."""
        from grid_invaders.game.state_machine import GameState

        game = _game()

        assert game.state == GameState.MENU
        assert game.session is None

    def test_new_game_starts_running(self):
        """Test selecting New Game creates a session and runs it."""
        from grid_invaders.core.loop_interface import Intent
        from grid_invaders.game.state_machine import GameState

        game = _game()
        assert game.tick([Intent.MENU_SELECT]) is True

        assert game.state == GameState.RUNNING
        assert game.session is not None
        assert game.sessions_played == 1

    def test_only_game_loop_driven_while_running(self):
        """Test menu intents do nothing to the menu while running."""
        from grid_invaders.core.loop_interface import Intent
        from grid_invaders.game.state_machine import GameState

        game = _game()
        game.tick([Intent.MENU_SELECT])
        selected = game.menu.selected

        game.tick([Intent.MENU_DOWN, Intent.MENU_SELECT])

        assert game.state == GameState.RUNNING
        assert game.menu.selected == selected
        assert game.session.ticks == 1

    def test_quit_while_running_pauses_and_continue_resumes(self):
        """Test QUIT in game offers CONTINUE, which resumes the same session."""
        from grid_invaders.core.loop_interface import Intent
        from grid_invaders.game.menu_loop import MenuItem
        from grid_invaders.game.state_machine import GameState

        game = _game()
        game.tick([Intent.MENU_SELECT])
        for _ in range(3):
            game.tick([])
        session = game.session

        assert game.tick([Intent.QUIT]) is True

        assert game.state == GameState.MENU
        assert game.session is session
        assert MenuItem.CONTINUE in game.menu.items
        assert game.menu.selected == MenuItem.CONTINUE

        game.tick([Intent.MENU_SELECT])

        assert game.state == GameState.RUNNING
        assert game.session is session
        assert session.ticks == 3
        game.tick([])
        assert session.ticks == 4
        assert game.sessions_played == 1

    def test_end_game_from_menu_discards_session(self):
        """Test choosing End Game on a paused session abandons it."""
        from grid_invaders.core.loop_interface import Intent
        from grid_invaders.game.menu_loop import MenuItem
        from grid_invaders.game.state_machine import GameState

        game = _game()
        game.tick([Intent.MENU_SELECT])
        game.tick([Intent.QUIT])
        session = game.session

        game.tick([Intent.MENU_DOWN, Intent.MENU_DOWN])
        assert game.menu.selected == MenuItem.END_GAME
        game.tick([Intent.MENU_SELECT])

        assert session.abandoned
        assert game.state == GameState.MENU
        assert game.session is None
        assert game.running is True
        assert game.menu.banner == "Game abandoned"
        assert MenuItem.CONTINUE not in game.menu.items

    def test_pause_and_continue_reuses_session(self):
        """Test MENU keeps the session and CONTINUE resumes the same one."""
        from grid_invaders.core.loop_interface import GameAction
        from grid_invaders.game.menu_loop import MenuItem
        from grid_invaders.game.state_machine import GameState

        game = _game()
        game.apply(GameAction.NEW_GAME)
        session = game.session

        game.apply(GameAction.MENU)
        assert game.state == GameState.MENU
        assert MenuItem.CONTINUE in game.menu.items

        game.apply(GameAction.CONTINUE)
        assert game.state == GameState.RUNNING
        assert game.session is session

    def test_new_game_replaces_session(self):
        """Test NEW_GAME discards the existing session."""
        from grid_invaders.core.loop_interface import GameAction

        game = _game()
        game.apply(GameAction.NEW_GAME)
        first = game.session
        game.apply(GameAction.NEW_GAME)

        assert game.session is not first
        assert game.sessions_played == 2

    def test_continue_without_session_starts_one(self):
        """Test CONTINUE with nothing to resume behaves like NEW_GAME."""
        from grid_invaders.core.loop_interface import GameAction
        from grid_invaders.game.state_machine import GameState

        game = _game()
        game.apply(GameAction.CONTINUE)

        assert game.state == GameState.RUNNING
        assert game.session is not None

    def test_victory_moves_to_done(self):
        """Test a won session ends in DONE with a result banner."""
        from grid_invaders.core.loop_interface import Intent
        from grid_invaders.game.menu_loop import MenuItem
        from grid_invaders.game.state_machine import GameState

        game = _game(invader_rows=0)
        game.tick([Intent.MENU_SELECT])
        assert game.state == GameState.RUNNING

        game.tick([])

        assert game.state == GameState.DONE
        assert "won" in game.menu.banner
        assert MenuItem.CONTINUE not in game.menu.items

    def test_defeat_moves_to_done(self):
        """Test a lost session ends in DONE."""
        from grid_invaders.core.grid import Coord, Direction
        from grid_invaders.core.loop_interface import GameAction
        from grid_invaders.game.config import InvadersConfig
        from grid_invaders.game.entities import Invader, Player
        from grid_invaders.game.simulation import Simulation
        from grid_invaders.game.state_machine import Game, GameState

        config = InvadersConfig(grid_size=(10, 5), frame_duration_ms=0)
        game = Game(config, session_factory=lambda: Simulation(
            config,
            player=Player(Coord(2, 4)),
            invaders=[Invader(Coord(9, 3), Direction.RIGHT)],
        ))
        game.apply(GameAction.NEW_GAME)

        game.tick([])

        assert game.session.is_lost
        assert game.state == GameState.DONE
        assert "Game over" in game.menu.banner

    def test_done_to_new_game(self):
        """Test a new game can be started from DONE."""
        from grid_invaders.core.loop_interface import Intent
        from grid_invaders.game.state_machine import GameState

        game = _game(invader_rows=0)
        game.tick([Intent.MENU_SELECT])
        game.tick([])
        assert game.state == GameState.DONE

        game.tick([Intent.MENU_SELECT])

        assert game.state == GameState.RUNNING
        assert game.sessions_played == 2

    def test_quit_from_menu_stops(self):
        """Test QUIT stops the machine and later ticks are no-ops."""
        from grid_invaders.core.loop_interface import Intent

        game = _game()

        assert game.tick([Intent.QUIT]) is False
        assert game.running is False
        assert game.tick([Intent.MENU_SELECT]) is False
        assert game.session is None


class TestPacing:
    """Tests for fixed-tick pacing."""

    @pytest.mark.parametrize("frame, elapsed, expected", [
        (0.030, 0.010, 0.020),
        (0.030, 0.030, 0.0),
        (0.030, 0.100, 0.0),
    ])
    def test_sleep_duration_never_negative(self, frame, elapsed, expected):
        """Test the remaining sleep saturates at zero."""
        from grid_invaders.game.state_machine import sleep_duration

        assert sleep_duration(frame, elapsed) == pytest.approx(expected)

    def test_run_paces_and_stops_on_quit(self):
        """Test run() polls, renders and sleeps once per tick until QUIT."""
        from grid_invaders.core.loop_interface import Intent
        from grid_invaders.game.config import InvadersConfig
        from grid_invaders.game.state_machine import Game

        game = Game(InvadersConfig(frame_duration_ms=30))
        script = [[Intent.MENU_SELECT], [], [], [Intent.QUIT], [Intent.QUIT]]
        rendered = []
        sleeps = []
        times = iter([0.0, 0.01, 1.0, 1.05, 2.0, 2.01, 3.0, 3.0, 4.0, 4.0])

        ticks = game.run(
            poll_intents=lambda: script.pop(0),
            render=lambda g: rendered.append(g.state),
            clock=lambda: next(times),
            sleep=sleeps.append,
        )

        assert ticks == 5
        assert len(rendered) == 4
        assert sleeps[0] == pytest.approx(0.02)
        assert sleeps[1] == 0.0
        assert all(s >= 0 for s in sleeps)
        assert game.running is False

    def test_run_max_ticks(self):
        """Test max_ticks bounds the loop."""
        from grid_invaders.game.state_machine import Game

        game = Game()
        ticks = game.run(lambda: [], lambda g: None, sleep=lambda s: None, max_ticks=3)

        assert ticks == 3
        assert game.running is True
