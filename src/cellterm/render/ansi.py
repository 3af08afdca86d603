"""Render cell grids to terminal-compatible escape sequences."""

from __future__ import annotations

from typing import Iterable

from cellterm.core.cell import Cell
from cellterm.core.color import DEFAULT_COLOR, Color


class AnsiRenderer:
    """
    Render rows of Cells to ANSI escape sequences for terminal display.

    Optimizes output by only emitting SGR codes when colors change.
    Used to show a memory terminal's screen on a real console.
    """

    def __init__(self, reset_at_end: bool = True, trim: bool = True):
        self.reset_at_end = reset_at_end
        self.trim = trim

    def render(self, rows: Iterable[list[Cell]]) -> str:
        """Render rows to an ANSI string, one line per row."""
        default_fg, default_bg = DEFAULT_COLOR.resolved()
        lines: list[str] = []

        for row in rows:
            line_parts: list[str] = []
            last_fg: Color | None = None
            last_bg: Color | None = None

            # Find last visible cell to avoid trailing spaces
            last_col = len(row) - 1
            if self.trim:
                last_col = -1
                for x, cell in enumerate(row):
                    if not cell.is_blank() or cell.bg != default_bg:
                        last_col = x

            for cell in row[:last_col + 1]:
                sgr_parts: list[str] = []
                if cell.fg != last_fg:
                    sgr_parts.append(cell.fg.to_sgr_fg())
                    last_fg = cell.fg
                if cell.bg != last_bg:
                    sgr_parts.append(cell.bg.to_sgr_bg())
                    last_bg = cell.bg
                if sgr_parts:
                    line_parts.append(f"\x1b[{';'.join(sgr_parts)}m")
                line_parts.append(cell.char)

            # Reset at end of each line to prevent color bleeding into clear-to-EOL
            if last_fg is not None and (last_fg, last_bg) != (default_fg, default_bg):
                line_parts.append('\x1b[0m')

            lines.append(''.join(line_parts))

        result = '\n'.join(lines)

        if self.reset_at_end:
            result += '\x1b[0m'

        return result
