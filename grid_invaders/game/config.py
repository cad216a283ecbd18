"""
Grid Invaders session configuration.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from ..core.grid import Coord, Direction


@dataclass
class InvadersConfig:
    """Configuration for one play session."""

    # Grid dimensions in cells (width, height)
    grid_size: Tuple[int, int] = (45, 15)

    # Formation: rows two cells apart, columns in groups of four
    invader_rows: int = 1
    invader_cols_per_row: int = 16

    # Timing, all in ticks except the frame duration
    fire_cooldown_ticks: int = 5
    invader_step_interval_ticks: int = 5
    frame_duration_ms: int = 30

    @property
    def width(self) -> int:
        return self.grid_size[0]

    @property
    def height(self) -> int:
        return self.grid_size[1]

    @property
    def frame_duration(self) -> float:
        """Frame duration in seconds."""
        return self.frame_duration_ms / 1000.0

    def player_start(self) -> Coord:
        """Player starts centred on the bottom row."""
        return Coord(self.width // 2, self.height - 1)

    def formation(self) -> List[Tuple[Coord, Direction]]:
        """Starting invader positions, row by row, all sweeping right."""
        positions = []
        for row in range(self.invader_rows):
            y = 2 + 2 * row
            for col in range(self.invader_cols_per_row):
                x = 2 + col + col // 4
                positions.append((Coord(x, y), Direction.RIGHT))
        return positions

    def validate(self) -> None:
        """
        Check the configuration can produce a playable session.

        Raises:
            ValueError: If any value is out of range or the formation does not fit
        """
        width, height = self.grid_size
        if width < 2 or height <= 0:
            raise ValueError(
                f"grid_size needs a width of at least 2 and a positive height, got {self.grid_size}"
            )
        if self.invader_rows < 0 or self.invader_cols_per_row < 0:
            raise ValueError("invader_rows and invader_cols_per_row must be >= 0")
        if self.fire_cooldown_ticks < 0:
            raise ValueError("fire_cooldown_ticks must be >= 0")
        if self.invader_step_interval_ticks < 1:
            raise ValueError("invader_step_interval_ticks must be >= 1")
        if self.frame_duration_ms < 0:
            raise ValueError("frame_duration_ms must be >= 0")

        player_row = self.player_start().y
        for position, _ in self.formation():
            if position.x >= width or position.y >= player_row:
                raise ValueError(
                    f"Invader formation does not fit a {width}x{height} grid "
                    f"(invader at ({position.x}, {position.y}))"
                )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "grid_size": list(self.grid_size),
            "invader_rows": self.invader_rows,
            "invader_cols_per_row": self.invader_cols_per_row,
            "fire_cooldown_ticks": self.fire_cooldown_ticks,
            "invader_step_interval_ticks": self.invader_step_interval_ticks,
            "frame_duration_ms": self.frame_duration_ms,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InvadersConfig":
        """Create config from dictionary."""
        grid_size = data.get("grid_size", (45, 15))
        return cls(
            grid_size=(int(grid_size[0]), int(grid_size[1])),
            invader_rows=data.get("invader_rows", 1),
            invader_cols_per_row=data.get("invader_cols_per_row", 16),
            fire_cooldown_ticks=data.get("fire_cooldown_ticks", 5),
            invader_step_interval_ticks=data.get("invader_step_interval_ticks", 5),
            frame_duration_ms=data.get("frame_duration_ms", 30),
        )
