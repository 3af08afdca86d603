"""Tests for the curses backend, driven through a fake curses module."""

import os
from typing import Optional

import pytest

pytest.importorskip("curses")

from cellterm.core.color import Color, ColorPair
from cellterm.errors import CursorError, ResizeError, TerminalInitError
from cellterm.terminal import curses_backend
from cellterm.terminal.curses_backend import CursesTerminal, pair_number


class FakeError(Exception):
    pass


class FakeWindow:
    """Just enough of curses.window for the backend."""

    def __init__(self, lines: int, cols: int) -> None:
        self.lines = lines
        self.cols = cols
        self.cursor = (0, 0)
        self.cells: dict[tuple[int, int], tuple[str, int]] = {}
        self.refreshes = 0

    def getmaxyx(self) -> tuple[int, int]:
        return self.lines, self.cols

    def getyx(self) -> tuple[int, int]:
        return self.cursor

    def move(self, y: int, x: int) -> None:
        if not (0 <= y < self.lines and 0 <= x < self.cols):
            raise FakeError("move() returned ERR")
        self.cursor = (y, x)

    def addstr(self, y: int, x: int, text: str, attr: int) -> None:
        for i, ch in enumerate(text):
            self.cells[(x + i, y)] = (ch, attr)
        end = x + len(text)
        if y == self.lines - 1 and end == self.cols:
            raise FakeError("addwstr() returned ERR")
        self.cursor = (y, end) if end < self.cols else (y + 1, 0)

    def refresh(self) -> None:
        self.refreshes += 1


class FakeCurses:
    """Module-level curses functions the backend calls."""

    error = FakeError
    A_BOLD = 1 << 21

    def __init__(self, lines: int = 4, cols: int = 10, color_pairs: int = 256, max_size=(20, 10)) -> None:
        self.window = FakeWindow(lines, cols)
        self.COLOR_PAIRS = color_pairs
        self.max_size = max_size
        self.pairs: dict[int, tuple[int, int]] = {}
        self.ended = False
        self.visibility = 0
        # Size the controlling tty reports as (columns, lines); None when detached.
        self.tty: Optional[tuple[int, int]] = None

    def get_terminal_size(self, fd: int = 1) -> os.terminal_size:
        if self.tty is None:
            raise OSError("not a tty")
        return os.terminal_size(self.tty)

    def initscr(self) -> FakeWindow:
        return self.window

    def noecho(self) -> None:
        pass

    def start_color(self) -> None:
        pass

    def init_pair(self, number: int, fg: int, bg: int) -> None:
        self.pairs[number] = (fg, bg)

    def curs_set(self, visibility: int) -> int:
        old, self.visibility = self.visibility, visibility
        return old

    def color_pair(self, number: int) -> int:
        return number << 8

    def is_term_resized(self, lines: int, cols: int) -> bool:
        return (lines, cols) != self.window.getmaxyx()

    def resize_term(self, lines: int, cols: int) -> None:
        max_cols, max_lines = self.max_size
        if lines > max_lines or cols > max_cols:
            raise FakeError("resize_term() returned ERR")
        self.window.lines, self.window.cols = lines, cols
        y, x = self.window.cursor
        self.window.cursor = (min(y, lines - 1), min(x, cols - 1))

    def isendwin(self) -> bool:
        return self.ended

    def endwin(self) -> None:
        self.ended = True


@pytest.fixture
def fake(monkeypatch: pytest.MonkeyPatch) -> FakeCurses:
    fake = FakeCurses()
    monkeypatch.setattr(curses_backend, "curses", fake)
    monkeypatch.setattr(curses_backend.os, "get_terminal_size", fake.get_terminal_size)
    return fake


def attr(fg: Color, bg: Color) -> int:
    value = pair_number(fg, bg) << 8
    if fg.is_light:
        value |= FakeCurses.A_BOLD
    return value


class TestPairTable:
    """Tests for the color pair mapping."""

    def test_pair_numbers(self) -> None:
        assert pair_number(Color.DARK_BLACK, Color.DARK_BLACK) == 1
        assert pair_number(Color.DARK_RED, Color.DARK_BLUE) == 1 * 8 + 4 + 1
        assert pair_number(Color.DARK_WHITE, Color.DARK_WHITE) == 64

    def test_every_color_has_a_pair(self) -> None:
        numbers = {pair_number(fg, bg) for fg in Color for bg in Color}
        assert numbers == set(range(1, 65))

    def test_light_shares_dark_pair(self) -> None:
        assert pair_number(Color.LIGHT_GREEN, Color.DARK_BLACK) == pair_number(Color.DARK_GREEN, Color.DARK_BLACK)


class TestCursesTerminal:
    """Tests for the curses backend against a fake screen."""

    def test_init(self, fake: FakeCurses) -> None:
        term = CursesTerminal()
        assert term.size() == (10, 4)
        assert len(fake.pairs) == 64
        assert fake.pairs[pair_number(Color.DARK_RED, Color.DARK_BLUE)] == (1, 4)
        assert fake.visibility == 1

    def test_not_enough_pairs(self, fake: FakeCurses) -> None:
        fake.COLOR_PAIRS = 16
        with pytest.raises(TerminalInitError):
            CursesTerminal()
        assert fake.ended is True

    def test_write_presents_cells(self, fake: FakeCurses) -> None:
        term = CursesTerminal()
        term.write_in_color("hi", ColorPair(fg=Color.LIGHT_RED))
        assert fake.window.cells[(0, 0)] == ('h', attr(Color.LIGHT_RED, Color.DARK_BLACK))
        assert fake.window.cells[(2, 0)] == (' ', attr(Color.DARK_WHITE, Color.DARK_BLACK))
        assert term.get_cursor_pos() == (2, 0)

    def test_present_fills_bottom_right(self, fake: FakeCurses) -> None:
        term = CursesTerminal()
        term.print_at(6, 3, [(ch, ColorPair.EMPTY) for ch in "abcd"])
        term.present()
        assert fake.window.cells[(9, 3)][0] == 'd'
        assert fake.window.getyx() == (0, 0)

    def test_cursor_rejected(self, fake: FakeCurses) -> None:
        term = CursesTerminal()
        term.set_cursor_pos(3, 2)
        with pytest.raises(CursorError) as excinfo:
            term.set_cursor_pos(30, 2)
        assert excinfo.value.actual == (3, 2)
        assert term.get_cursor_pos() == (3, 2)

    def test_resize(self, fake: FakeCurses) -> None:
        term = CursesTerminal()
        term.resize(15, 6)
        assert term.size() == (15, 6)
        assert term.buffer.size == (15, 6)

    def test_resize_refused(self, fake: FakeCurses) -> None:
        term = CursesTerminal()
        with pytest.raises(ResizeError):
            term.resize(50, 50)
        assert term.size() == (10, 4)
        assert term.buffer.size == (10, 4)

    def test_close_restores(self, fake: FakeCurses) -> None:
        with CursesTerminal():
            pass
        assert fake.ended is True
        assert fake.visibility == 0


class TestCursesTtySize:
    """Tests for following the size the controlling tty reports."""

    @pytest.fixture
    def tty_fake(self, fake: FakeCurses) -> FakeCurses:
        fake.tty = (10, 4)
        return fake

    def test_resize_sticks(self, tty_fake: FakeCurses) -> None:
        term = CursesTerminal()
        term.resize(15, 6)
        assert term.size() == (15, 6)
        assert term.size() == (15, 6)
        assert term.buffer.size == (15, 6)

    def test_external_resize_is_seen(self, tty_fake: FakeCurses) -> None:
        term = CursesTerminal()
        tty_fake.tty = (16, 8)
        assert term.size() == (16, 8)
        assert term.buffer.size == (16, 8)
        assert tty_fake.window.getmaxyx() == (8, 16)

    def test_external_resize_after_resize(self, tty_fake: FakeCurses) -> None:
        term = CursesTerminal()
        term.resize(15, 6)
        tty_fake.tty = (12, 5)
        assert term.size() == (12, 5)
        assert term.buffer.size == (12, 5)

    def test_refused_resize_keeps_tty_size(self, tty_fake: FakeCurses) -> None:
        term = CursesTerminal()
        with pytest.raises(ResizeError) as excinfo:
            term.resize(50, 50)
        assert excinfo.value.achieved == (10, 4)
        assert term.size() == (10, 4)
        assert term.buffer.size == (10, 4)
