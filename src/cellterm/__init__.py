"""
cellterm: cross-platform terminal cells

Query terminal geometry, move the cursor, compose colors and render
clipped, colored text through one interface backed by curses on Unix,
the console screen buffer API on Windows, or an in-memory device.

Quick Start:
    >>> import cellterm
    >>> from cellterm import Color, ColorPair
    >>> with cellterm.init_terminal() as term:
    ...     term.set_default_color(ColorPair(bg=Color.DARK_BLUE))
    ...     term.write("Hello\\n")
    ...     term.write_in_color("world", ColorPair(fg=Color.LIGHT_YELLOW))

Features:
    - 16-color palette with partial fg/bg pairs layered over a default
    - Buffered, clipped line rendering with an explicit present step
    - Cursor and resize requests checked against the real device
    - Composable drawing surfaces for nested layouts
"""

__version__ = "0.1.0"

# Core types
from cellterm.core.cell import Cell
from cellterm.core.buffer import CellBuffer
from cellterm.core.color import Color, ColorPair, DEFAULT_COLOR

# Errors
from cellterm.errors import (
    CursorError,
    ResizeError,
    TerminalBusyError,
    TerminalError,
    TerminalInitError,
    UnresolvedColorError,
)

# Terminals
from cellterm.config import TerminalConfig
from cellterm.terminal import MemoryTerminal, Terminal, init_terminal

# Surfaces
from cellterm.surface import Drawable, Rect, render

__all__ = [
    # Version
    "__version__",
    # Core types
    "Cell",
    "CellBuffer",
    "Color",
    "ColorPair",
    "DEFAULT_COLOR",
    # Errors
    "CursorError",
    "ResizeError",
    "TerminalBusyError",
    "TerminalError",
    "TerminalInitError",
    "UnresolvedColorError",
    # Terminals
    "TerminalConfig",
    "Terminal",
    "MemoryTerminal",
    "init_terminal",
    # Surfaces
    "Drawable",
    "Rect",
    "render",
]
