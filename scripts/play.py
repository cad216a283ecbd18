#!/usr/bin/env python3
"""
Grid Invaders - Play Script

Usage:
    python scripts/play.py                          # Default formation
    python scripts/play.py --map maps/classic.map   # Custom starting layout
    python scripts/play.py --fps 20 --log-level DEBUG

Controls:
    Left/Right (or A/D): Move
    Space: Fire
    Up/Down (or W/S), Enter: Menu
    Q / ESC: Pause to the menu while playing, exit from the menu
"""
import sys
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from blessed import Terminal

from grid_invaders.game.map_loader import MapFormatError, load_map
from grid_invaders.game.state_machine import Game
from grid_invaders.utils.config_loader import load_config
from grid_invaders.utils.logging_setup import setup_logging
from grid_invaders.visualization.terminal_display import KeyboardInput, TerminalDisplay


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Grid Invaders - terminal Space-Invaders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/play.py
  python scripts/play.py --map maps/classic.map
  python scripts/play.py --config config/default.yaml --fps 20
"""
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="Path to YAML config (default: config/default.yaml)"
    )
    parser.add_argument(
        "-m", "--map",
        type=str,
        default=None,
        help="Map file with a custom starting layout"
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=None,
        help="Frames per second (overrides frame_duration_ms)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: from config)"
    )

    return parser.parse_args()


def main():
    """Main entry point."""
    args = parse_args()

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.fps is not None:
        if args.fps <= 0:
            print("Error: --fps must be positive")
            sys.exit(1)
        config.game.frame_duration_ms = 1000 // args.fps
    if args.log_level:
        config.logging.level = args.log_level

    try:
        setup_logging(config.logging)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    session_factory = None
    if args.map:
        try:
            # Parsed once, before the terminal is taken; every New Game copies it
            game_map = load_map(args.map)
        except MapFormatError as e:
            print(f"Error: {e}")
            sys.exit(1)
        session_factory = lambda: game_map.to_simulation(config.game)

    game = Game(config.game, session_factory=session_factory)

    term = Terminal()
    display = TerminalDisplay()
    keyboard = KeyboardInput(term)

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        display.start()
        try:
            game.run(keyboard.poll, display.render)
        except KeyboardInterrupt:
            pass
        finally:
            display.stop()

    print(f"Thanks for playing! Sessions played: {game.sessions_played}")


if __name__ == "__main__":
    main()
