"""Box border around another surface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from cellterm.core.color import ColorPair
from cellterm.surface.base import BaseSurface, Drawable

if TYPE_CHECKING:
    from cellterm.terminal.base import Terminal

# top-left, top-right, bottom-left, bottom-right, horizontal, vertical
SINGLE = "┌┐└┘─│"
DOUBLE = "╔╗╚╝═║"
ASCII = "++++-|"


class BorderSurface(BaseSurface):
    """Draws a one-cell frame around a child surface, with optional title."""

    def __init__(
        self,
        child: Drawable,
        color: ColorPair = ColorPair.EMPTY,
        title: Optional[str] = None,
        style: str = SINGLE,
    ) -> None:
        super().__init__()
        if len(style) != 6:
            raise ValueError(f"Border style needs 6 characters, got {style!r}")
        self.child = child
        self.color = color
        self.title = title
        self.style = style

    def size(self) -> tuple[int, int]:
        width, height = self.child.size()
        return width + 2, height + 2

    def _top(self, inner: int) -> str:
        tl, tr, _, _, h, _ = self.style
        label = f" {self.title} "[:inner] if self.title else ""
        return tl + label + h * (inner - len(label)) + tr

    def draw(self, terminal: Terminal, x: int, y: int) -> None:
        if not self.visible:
            return
        width, height = self.size()
        _, _, bl, br, h, v = self.style
        inner = width - 2

        terminal.print_at(x, y, ((ch, self.color) for ch in self._top(inner)))
        for row in range(1, height - 1):
            terminal.print_at(x, y + row, [(v, self.color)])
            terminal.print_at(x + width - 1, y + row, [(v, self.color)])
        bottom = bl + h * inner + br
        terminal.print_at(x, y + height - 1, ((ch, self.color) for ch in bottom))

        self.child.draw(terminal, x + 1, y + 1)
