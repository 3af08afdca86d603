"""Drawing surface protocol and common functionality."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cellterm.terminal.base import Terminal


@dataclass
class Rect:
    """Rectangle bounds for surface positioning."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom

    def union(self, other: Rect) -> Rect:
        x, y = min(self.x, other.x), min(self.y, other.y)
        return Rect(x, y, max(self.right, other.right) - x, max(self.bottom, other.bottom) - y)


@runtime_checkable
class Drawable(Protocol):
    """
    Protocol for anything that can be drawn onto a terminal.

    ``draw`` must go through ``terminal.print_at`` only, so the surface
    can be placed anywhere, including partly off-screen, and never
    flushes the device itself.
    """

    def size(self) -> tuple[int, int]:
        """Return ``(width, height)`` in cells."""
        ...

    def draw(self, terminal: Terminal, x: int, y: int) -> None:
        """Draw with the top-left corner at ``(x, y)``."""
        ...


class BaseSurface(ABC):
    """Base class with common surface functionality."""

    def __init__(self) -> None:
        self._visible = True

    @property
    def visible(self) -> bool:
        return self._visible

    @visible.setter
    def visible(self, value: bool) -> None:
        self._visible = value

    @abstractmethod
    def size(self) -> tuple[int, int]:
        pass

    @abstractmethod
    def draw(self, terminal: Terminal, x: int, y: int) -> None:
        """Subclasses must implement drawing."""
        pass


def render(surface: Drawable, terminal: Terminal, x: int = 0, y: int = 0) -> None:
    """Draw a surface tree and present the result once."""
    surface.draw(terminal, x, y)
    terminal.present()
