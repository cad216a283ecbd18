# Grid Invaders Source Package
"""
Grid Invaders - terminal Space-Invaders on a fixed cell grid.

Modules:
- core: Grid primitive and the loop contract
- game: Entities, simulation step, collision resolution and session flow
- utils: Configuration and logging
- visualization: Terminal display and keyboard input
"""

__version__ = "0.1.0"
