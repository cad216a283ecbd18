from .terminal_display import KeyboardInput, TerminalDisplay, build_glyph_grid, decode_key

__all__ = [
    "KeyboardInput",
    "TerminalDisplay",
    "build_glyph_grid",
    "decode_key",
]
