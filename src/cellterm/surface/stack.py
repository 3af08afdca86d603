"""Surface that places children at offsets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from cellterm.surface.base import BaseSurface, Drawable, Rect

if TYPE_CHECKING:
    from cellterm.terminal.base import Terminal


@dataclass
class Placement:
    surface: Drawable
    x: int
    y: int


class StackSurface(BaseSurface):
    """
    Children drawn in insertion order at their offsets.

    Later children paint over earlier ones. Offsets may be negative;
    whatever falls outside the terminal is clipped by ``print_at``.
    """

    def __init__(self, width: Optional[int] = None, height: Optional[int] = None) -> None:
        super().__init__()
        self._width = width
        self._height = height
        self.children: list[Placement] = []

    def add(self, surface: Drawable, x: int = 0, y: int = 0) -> StackSurface:
        self.children.append(Placement(surface, x, y))
        return self

    def extent(self) -> Rect:
        """Union of all child bounds, relative to the stack's origin."""
        rect = Rect(0, 0, 0, 0)
        for child in self.children:
            width, height = child.surface.size()
            rect = rect.union(Rect(child.x, child.y, width, height))
        return rect

    def size(self) -> tuple[int, int]:
        extent = self.extent()
        width = self._width if self._width is not None else extent.right
        height = self._height if self._height is not None else extent.bottom
        return width, height

    def draw(self, terminal: Terminal, x: int, y: int) -> None:
        if not self.visible:
            return
        for child in self.children:
            child.surface.draw(terminal, x + child.x, y + child.y)
