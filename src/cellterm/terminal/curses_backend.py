"""Curses terminal backend for Unix-like systems."""

from __future__ import annotations

import curses
import logging
import os
from typing import Iterator, Optional

from cellterm.core.cell import Cell
from cellterm.core.color import Color, ColorPair, DEFAULT_COLOR
from cellterm.errors import TerminalInitError
from cellterm.terminal.base import BufferedTerminal

logger = logging.getLogger(__name__)

# Curses color number for each hue index.
CURSES_HUES = (
    curses.COLOR_BLACK,
    curses.COLOR_RED,
    curses.COLOR_GREEN,
    curses.COLOR_YELLOW,
    curses.COLOR_BLUE,
    curses.COLOR_MAGENTA,
    curses.COLOR_CYAN,
    curses.COLOR_WHITE,
)

PAIR_COUNT = len(CURSES_HUES) * len(CURSES_HUES)


def pair_number(fg: Color, bg: Color) -> int:
    """
    Color pair slot holding ``fg`` on ``bg``.

    Slots 1-64 hold every hue combination; slot 0 is reserved by curses.
    Brightness is not part of the pair: light foregrounds are drawn bold
    and background brightness is not representable.
    """
    return CURSES_HUES[fg.hue] * len(CURSES_HUES) + CURSES_HUES[bg.hue] + 1


def attribute(fg: Color, bg: Color) -> int:
    """Curses attribute for a resolved color."""
    attr = curses.color_pair(pair_number(fg, bg))
    if fg.is_light:
        attr |= curses.A_BOLD
    return attr


def init_pairs() -> None:
    """Register every fg/bg hue combination as a color pair."""
    if curses.COLOR_PAIRS <= PAIR_COUNT:
        raise TerminalInitError(
            f"Terminal supports {curses.COLOR_PAIRS} color pairs, need {PAIR_COUNT + 1}"
        )
    for fg in CURSES_HUES:
        for bg in CURSES_HUES:
            curses.init_pair(fg * len(CURSES_HUES) + bg + 1, fg, bg)


class CursesTerminal(BufferedTerminal):
    """Terminal drawn through the curses standard screen."""

    name = "curses"

    def __init__(self, default_color: ColorPair = DEFAULT_COLOR) -> None:
        self._stdscr: Optional[curses.window] = None
        self._old_cursor: Optional[int] = None
        self._last_tty: Optional[tuple[int, int]] = None
        try:
            self._stdscr = curses.initscr()
            self._last_tty = self._tty_size()
            curses.noecho()
            curses.start_color()
            init_pairs()
            try:
                self._old_cursor = curses.curs_set(1)
            except curses.error:
                self._old_cursor = None
            height, width = self._stdscr.getmaxyx()
            super().__init__(width, height, default_color)
        except curses.error as exc:
            self._release()
            raise TerminalInitError(f"{TerminalInitError.description}: {exc}") from exc
        except Exception:
            self._release()
            raise
        logger.debug("curses screen %sx%s", width, height)

    @property
    def stdscr(self) -> curses.window:
        assert self._stdscr is not None, "terminal is closed"
        return self._stdscr

    def _tty_size(self) -> Optional[tuple[int, int]]:
        try:
            size = os.get_terminal_size()
        except OSError:
            return None
        return size.columns, size.lines

    def _query_size(self) -> tuple[int, int]:
        # Follow the tty only when it changed since last seen, so a size
        # set through resize() sticks until the emulator window moves.
        tty = self._tty_size()
        if tty is not None and tty != self._last_tty:
            self._last_tty = tty
            columns, lines = tty
            if curses.is_term_resized(lines, columns):
                curses.resize_term(lines, columns)
        height, width = self.stdscr.getmaxyx()
        return width, height

    def resize(self, width: int, height: int) -> None:
        try:
            curses.resize_term(height, width)
        except curses.error as exc:
            logger.debug("resize_term(%s, %s) failed: %s", height, width, exc)
        rows, cols = self.stdscr.getmaxyx()
        self._check_resize((width, height), (cols, rows))

    def get_cursor_pos(self) -> tuple[int, int]:
        y, x = self.stdscr.getyx()
        return x, y

    def set_cursor_pos(self, x: int, y: int) -> None:
        try:
            self.stdscr.move(y, x)
        except curses.error as exc:
            logger.debug("move(%s, %s) rejected: %s", y, x, exc)
        self.stdscr.refresh()
        self._check_cursor((x, y), self.get_cursor_pos())

    def _runs(self, row: list[Cell]) -> Iterator[tuple[int, str, int]]:
        """Group a row into ``(column, text, attribute)`` runs of equal color."""
        start = 0
        while start < len(row):
            fg, bg = row[start].fg, row[start].bg
            end = start + 1
            while end < len(row) and row[end].fg == fg and row[end].bg == bg:
                end += 1
            yield start, ''.join(cell.char for cell in row[start:end]), attribute(fg, bg)
            start = end

    def present(self) -> None:
        width, height = self.size()
        cursor_y, cursor_x = self.stdscr.getyx()
        for y, row in enumerate(self._buffer.rows()):
            for x, text, attr in self._runs(row):
                try:
                    self.stdscr.addstr(y, x, text, attr)
                except curses.error:
                    # Filling the bottom-right cell pushes the cursor off screen.
                    if y != height - 1 or x + len(text) != width:
                        raise
        self.stdscr.move(cursor_y, cursor_x)
        self.stdscr.refresh()

    def _release(self) -> None:
        if self._stdscr is None:
            return
        if self._old_cursor is not None:
            try:
                curses.curs_set(self._old_cursor)
            except curses.error:
                logger.debug("Cursor visibility not restored")
        if not curses.isendwin():
            curses.endwin()
        self._stdscr = None
