"""In-memory terminal backend.

Simulates a device without touching the real terminal: resize requests
are clamped to a maximum size, cursor moves are clamped to the screen,
and the visible ``screen`` only changes when the buffer is presented.
"""

from __future__ import annotations

import logging
from typing import Optional

from cellterm.core.cell import Cell
from cellterm.core.color import DEFAULT_COLOR, ColorPair
from cellterm.terminal.base import BufferedTerminal, clamp

logger = logging.getLogger(__name__)


class MemoryTerminal(BufferedTerminal):
    """Headless terminal backed by a simulated device."""

    name = "memory"

    def __init__(
        self,
        width: int = 80,
        height: int = 24,
        *,
        max_size: Optional[tuple[int, int]] = None,
        default_color: ColorPair = DEFAULT_COLOR,
    ) -> None:
        self.max_size = max_size
        self._device_size = self._achievable(width, height)
        super().__init__(*self._device_size, default_color=default_color)
        self._cursor = (0, 0)
        self.screen: list[list[Cell]] = [[cell.copy() for cell in row] for row in self._buffer.rows()]
        self.present_count = 0

    def _achievable(self, width: int, height: int) -> tuple[int, int]:
        width, height = max(width, 1), max(height, 1)
        if self.max_size is not None:
            width = min(width, self.max_size[0])
            height = min(height, self.max_size[1])
        return width, height

    def _query_size(self) -> tuple[int, int]:
        return self._device_size

    def resize(self, width: int, height: int) -> None:
        self._device_size = self._achievable(width, height)
        self._clamp_cursor()
        self._check_resize((width, height), self._device_size)

    def simulate_resize(self, width: int, height: int) -> None:
        """Change the device size behind the terminal's back, like a window drag."""
        self._device_size = self._achievable(width, height)
        self._clamp_cursor()

    def _clamp_cursor(self) -> None:
        width, height = self._device_size
        x, y = self._cursor
        self._cursor = (clamp(x, 0, width - 1), clamp(y, 0, height - 1))

    def get_cursor_pos(self) -> tuple[int, int]:
        return self._cursor

    def set_cursor_pos(self, x: int, y: int) -> None:
        width, height = self._device_size
        self._cursor = (clamp(x, 0, width - 1), clamp(y, 0, height - 1))
        self._check_cursor((x, y), self._cursor)

    def present(self) -> None:
        self.size()
        self.screen = [[cell.copy() for cell in row] for row in self._buffer.rows()]
        self.present_count += 1

    def screen_lines(self) -> list[str]:
        """Return the presented screen as one string per row."""
        return [''.join(cell.char for cell in row) for row in self.screen]

    def _release(self) -> None:
        self.screen = []
