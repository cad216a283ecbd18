"""
Pytest configuration and fixtures for Grid Invaders tests.

The simulation is pure logic, so no terminal is needed; fixtures build small
sessions and map files on disk.
"""

import sys
from pathlib import Path

import pytest


# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def small_config():
    """A compact 10x8 session with four invaders."""
    from grid_invaders.game.config import InvadersConfig

    return InvadersConfig(
        grid_size=(10, 8),
        invader_rows=1,
        invader_cols_per_row=4,
        fire_cooldown_ticks=5,
        invader_step_interval_ticks=5,
        frame_duration_ms=0,
    )


@pytest.fixture
def make_simulation():
    """Factory for sessions with explicit entities on a 45x15 grid."""
    from grid_invaders.core.grid import Coord
    from grid_invaders.game.config import InvadersConfig
    from grid_invaders.game.entities import Player
    from grid_invaders.game.simulation import Simulation

    def _make(invaders=None, projectiles=None, player_at=(22, 14), **config_kwargs):
        config = InvadersConfig(**config_kwargs)
        return Simulation(
            config,
            player=Player(Coord(*player_at), cooldown=config.fire_cooldown_ticks),
            invaders=invaders if invaders is not None else [],
            projectiles=projectiles if projectiles is not None else [],
        )

    return _make


@pytest.fixture
def write_map(tmp_path):
    """Write map text to a temporary file and return its path."""
    def _write(text, name="test.map"):
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write
