"""Text and fill surfaces."""

from __future__ import annotations

from itertools import repeat
from typing import TYPE_CHECKING, Optional, Sequence

from cellterm.core.color import ColorPair
from cellterm.surface.base import BaseSurface

if TYPE_CHECKING:
    from cellterm.terminal.base import Terminal


class TextSurface(BaseSurface):
    """
    Static lines of text.

    Colors default to the terminal's default. ``colors`` may give one
    ColorPair per character of each line; rows or characters without an
    entry fall back to ``color``.
    """

    def __init__(
        self,
        text: str | Sequence[str],
        color: ColorPair = ColorPair.EMPTY,
        colors: Optional[Sequence[Sequence[ColorPair]]] = None,
    ) -> None:
        super().__init__()
        self.lines = text.split('\n') if isinstance(text, str) else list(text)
        self.color = color
        self.colors = colors

    def size(self) -> tuple[int, int]:
        return max((len(line) for line in self.lines), default=0), len(self.lines)

    def _line_colors(self, row: int, length: int) -> list[ColorPair]:
        own = list(self.colors[row]) if self.colors and row < len(self.colors) else []
        return [c.compose(self.color) for c in own[:length]] + [self.color] * (length - len(own))

    def draw(self, terminal: Terminal, x: int, y: int) -> None:
        if not self.visible:
            return
        for row, line in enumerate(self.lines):
            terminal.print_at(x, y + row, zip(line, self._line_colors(row, len(line))))


class FillSurface(BaseSurface):
    """A solid block of one character."""

    def __init__(
        self,
        width: int,
        height: int,
        char: str = ' ',
        color: ColorPair = ColorPair.EMPTY,
    ) -> None:
        super().__init__()
        self.width = width
        self.height = height
        self.char = char
        self.color = color

    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def draw(self, terminal: Terminal, x: int, y: int) -> None:
        if not self.visible:
            return
        for row in range(self.height):
            terminal.print_at(x, y + row, repeat((self.char, self.color), self.width))
