"""Terminal capability shared by every backend."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from itertools import repeat
from typing import Iterable

from cellterm.core.buffer import CellBuffer, ColoredLine
from cellterm.core.color import DEFAULT_COLOR, ColorPair
from cellterm.errors import CursorError, ResizeError, UnresolvedColorError
from cellterm.terminal import session

logger = logging.getLogger(__name__)


class Terminal(ABC):
    """
    Access to one terminal surface.

    Backends implement geometry, cursor, ``print_at`` and ``present``;
    the text-writing entry points are built on top of those. Writes made
    with ``print_at`` are buffered and only reach the device on
    ``present``, so a caller composing many surfaces pays for one flush.

    Terminals are context managers; leaving the ``with`` block restores
    the device to the state it was in before acquisition.
    """

    name = "terminal"

    def __init__(self, default_color: ColorPair = DEFAULT_COLOR) -> None:
        if not default_color.is_resolved:
            raise UnresolvedColorError(
                f"Default color must have both channels set: {default_color!r}"
            )
        self._default_color = default_color
        self._closed = False

    # -- required primitives -------------------------------------------------

    @abstractmethod
    def size(self) -> tuple[int, int]:
        """Return current ``(width, height)`` as reported by the device."""

    @abstractmethod
    def resize(self, width: int, height: int) -> None:
        """
        Resize the terminal.

        Raises ResizeError if the device does not end up at exactly the
        requested size. Either way the buffer matches the achieved size.
        """

    @abstractmethod
    def get_cursor_pos(self) -> tuple[int, int]:
        """Return the cursor position reported by the device."""

    @abstractmethod
    def set_cursor_pos(self, x: int, y: int) -> None:
        """
        Move the cursor.

        Raises CursorError if the device rejects or clamps the position;
        the cursor then stays wherever the device put it.
        """

    @abstractmethod
    def print_at(self, x: int, y: int, line: ColoredLine) -> int:
        """
        Write one clipped line of colored characters into the buffer.

        Returns the number of cells written.
        """

    @abstractmethod
    def present(self) -> None:
        """Flush buffered cells to the device."""

    @abstractmethod
    def _release(self) -> None:
        """Restore the device state saved at acquisition."""

    # -- colors --------------------------------------------------------------

    def get_default_color(self) -> ColorPair:
        """Return the default colors; both channels are always set."""
        return self._default_color

    def set_default_color(self, color: ColorPair) -> None:
        """Update the default colors; ``None`` channels keep their old value."""
        self._default_color = color.compose(self._default_color)

    # -- text output ---------------------------------------------------------

    def write(self, s: str) -> None:
        """Write text at the cursor in the default color."""
        self.write_in_color(s, self.get_default_color())

    def write_in_color(self, s: str, color: ColorPair) -> None:
        """Write text at the cursor, every character in ``color``."""
        self.write_colored(s, repeat(color))

    def write_colored(self, s: str, colors: Iterable[ColorPair]) -> None:
        """
        Write text at the cursor, coloring characters from ``colors``.

        Output stops when either the text or the colors run out. Each
        newline moves to the start of the next row; text past the right
        edge or below the last row is dropped. The cursor ends up just
        after the last character drawn and the result is presented.
        """
        width, height = self.size()
        x, y = self.get_cursor_pos()
        end = (x, y)
        pairs = zip(s, colors)

        while y < height:
            line: list[tuple[str, ColorPair]] = []
            newline = False
            for pair in pairs:
                if pair[0] == '\n':
                    newline = True
                    break
                line.append(pair)

            drawn = self.print_at(x, y, line)
            if drawn:
                end = (min(x + drawn, width - 1), y)
            if not newline:
                break
            x, y = 0, y + 1

        try:
            self.set_cursor_pos(*end)
        except CursorError as exc:
            logger.debug("Cursor not placed after write: %s", exc)
        self.present()

    def clear(self) -> None:
        """Blank the buffer in the default color and home the cursor."""
        width, height = self.size()
        for y in range(height):
            self.print_at(0, y, repeat((' ', ColorPair.EMPTY), width))
        self.set_cursor_pos(0, 0)

    # -- lifecycle -----------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the device. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        logger.debug("Releasing %s terminal", self.name)
        try:
            self._release()
        finally:
            session.release(self)

    def __enter__(self) -> Terminal:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class BufferedTerminal(Terminal):
    """
    Terminal that renders into an in-memory CellBuffer.

    Subclasses report the device size through ``_query_size``; the
    buffer is reshaped to match whenever the device size changes.
    """

    def __init__(self, width: int, height: int, default_color: ColorPair = DEFAULT_COLOR) -> None:
        super().__init__(default_color)
        self._buffer = CellBuffer(width, height, default_color)

    @property
    def buffer(self) -> CellBuffer:
        return self._buffer

    @abstractmethod
    def _query_size(self) -> tuple[int, int]:
        """Ask the device for its current size."""

    def size(self) -> tuple[int, int]:
        size = self._query_size()
        self._sync_buffer(size)
        return size

    def _sync_buffer(self, size: tuple[int, int]) -> None:
        if size != self._buffer.size:
            logger.debug("Buffer %sx%s -> %sx%s", *self._buffer.size, *size)
            self._buffer.resize(size[0], size[1], self._default_color)

    def print_at(self, x: int, y: int, line: ColoredLine) -> int:
        return self._buffer.print_at(x, y, line, self._default_color)

    def _check_resize(self, requested: tuple[int, int], achieved: tuple[int, int]) -> None:
        self._sync_buffer(achieved)
        if achieved != requested:
            logger.debug("Resize to %sx%s settled at %sx%s", *requested, *achieved)
            raise ResizeError(requested, achieved)

    def _check_cursor(self, requested: tuple[int, int], actual: tuple[int, int]) -> None:
        if actual != requested:
            raise CursorError(requested, actual)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))
