"""Tests for the Windows console backend, driven through a fake kernel32."""

import pytest

from cellterm.core.color import Color, ColorPair
from cellterm.errors import CursorError, ResizeError, TerminalInitError
from cellterm.terminal.console import (
    COORD,
    SMALL_RECT,
    ConsoleTerminal,
    attribute,
    color_bits,
)

OLD_HANDLE = 7
NEW_HANDLE = 42


class FakeKernel32:
    """
    Simulated console API.

    The window can never be larger than the screen buffer or the
    maximum window size, and the buffer never smaller than the window.
    """

    def __init__(self, window=(10, 4), max_window=(20, 8)) -> None:
        self.window = tuple(window)
        self.buffer_size = tuple(window)
        self.max_window = max_window
        self.cursor = (0, 0)
        self.active = OLD_HANDLE
        self.has_console = True
        self.fail_create = False
        self.fail_activate = False
        self.closed: list[int] = []
        self.written: list[tuple[str, int]] = []

    def GetConsoleWindow(self) -> int:
        return 1 if self.has_console else 0

    def AllocConsole(self) -> int:
        return 0

    def GetStdHandle(self, which: int) -> int:
        return OLD_HANDLE

    def CreateConsoleScreenBuffer(self, *args) -> int:
        return 0 if self.fail_create else NEW_HANDLE

    def SetConsoleActiveScreenBuffer(self, handle: int) -> int:
        if handle == NEW_HANDLE and self.fail_activate:
            return 0
        self.active = handle
        return 1

    def GetConsoleScreenBufferInfo(self, handle: int, ref) -> int:
        info = ref._obj
        info.dwSize = COORD(*self.buffer_size)
        info.dwCursorPosition = COORD(*self.cursor)
        info.srWindow = SMALL_RECT(0, 0, self.window[0] - 1, self.window[1] - 1)
        return 1

    def SetConsoleScreenBufferSize(self, handle: int, size: COORD) -> int:
        if size.X < self.window[0] or size.Y < self.window[1]:
            return 0
        self.buffer_size = (size.X, size.Y)
        return 1

    def SetConsoleWindowInfo(self, handle: int, absolute: int, ref) -> int:
        rect = ref._obj
        width, height = rect.Right - rect.Left + 1, rect.Bottom - rect.Top + 1
        if width > min(self.buffer_size[0], self.max_window[0]):
            return 0
        if height > min(self.buffer_size[1], self.max_window[1]):
            return 0
        self.window = (width, height)
        return 1

    def SetConsoleCursorPosition(self, handle: int, pos: COORD) -> int:
        if not (0 <= pos.X < self.buffer_size[0] and 0 <= pos.Y < self.buffer_size[1]):
            return 0
        self.cursor = (pos.X, pos.Y)
        return 1

    def WriteConsoleOutputW(self, handle: int, cells, size: COORD, origin: COORD, region) -> int:
        self.written = [
            (cells[i].Char.UnicodeChar, cells[i].Attributes) for i in range(size.X * size.Y)
        ]
        return 1

    def CloseHandle(self, handle: int) -> int:
        self.closed.append(handle)
        return 1


@pytest.fixture
def kernel32() -> FakeKernel32:
    return FakeKernel32()


class TestAttributes:
    """Tests for the console attribute table."""

    def test_dark_colors(self) -> None:
        assert color_bits(Color.DARK_BLACK) == 0
        assert color_bits(Color.DARK_RED) == 0x4
        assert color_bits(Color.DARK_CYAN) == 0x3
        assert color_bits(Color.DARK_WHITE) == 0x7

    def test_light_adds_only_intensity(self) -> None:
        for color in Color:
            if color.is_light:
                assert color_bits(color) == color_bits(color.dark()) | 0x8
        assert color_bits(Color.LIGHT_BLACK) == 0x8

    def test_background_shift(self) -> None:
        assert attribute(Color.LIGHT_RED, Color.DARK_BLUE) == 0xC | (0x1 << 4)
        assert attribute(Color.DARK_WHITE, Color.DARK_BLACK) == 0x7


class TestConsoleTerminal:
    """Tests for the console backend against a fake console."""

    def test_init_activates_new_buffer(self, kernel32: FakeKernel32) -> None:
        term = ConsoleTerminal(kernel32=kernel32)
        assert kernel32.active == NEW_HANDLE
        assert term.size() == (10, 4)
        assert kernel32.buffer_size == (10, 4)

    def test_close_restores_old_buffer(self, kernel32: FakeKernel32) -> None:
        with ConsoleTerminal(kernel32=kernel32):
            pass
        assert kernel32.active == OLD_HANDLE
        assert kernel32.closed == [NEW_HANDLE]

    def test_no_console(self, kernel32: FakeKernel32) -> None:
        kernel32.has_console = False
        with pytest.raises(TerminalInitError, match="Unable to get terminal"):
            ConsoleTerminal(kernel32=kernel32)
        assert kernel32.closed == []

    def test_create_fails(self, kernel32: FakeKernel32) -> None:
        kernel32.fail_create = True
        with pytest.raises(TerminalInitError):
            ConsoleTerminal(kernel32=kernel32)
        assert kernel32.active == OLD_HANDLE
        assert kernel32.closed == []

    def test_activate_fails_releases_handle(self, kernel32: FakeKernel32) -> None:
        kernel32.fail_activate = True
        with pytest.raises(TerminalInitError):
            ConsoleTerminal(kernel32=kernel32)
        assert kernel32.closed == [NEW_HANDLE]
        assert kernel32.active == OLD_HANDLE

    def test_write_and_present(self, kernel32: FakeKernel32) -> None:
        term = ConsoleTerminal(kernel32=kernel32)
        term.write_in_color("ok", ColorPair(Color.LIGHT_YELLOW, Color.DARK_BLUE))
        assert kernel32.written[0] == ('o', attribute(Color.LIGHT_YELLOW, Color.DARK_BLUE))
        assert kernel32.written[2] == (' ', attribute(Color.DARK_WHITE, Color.DARK_BLACK))
        assert len(kernel32.written) == 40
        assert term.get_cursor_pos() == (2, 0)

    def test_resize(self, kernel32: FakeKernel32) -> None:
        term = ConsoleTerminal(kernel32=kernel32)
        term.resize(16, 6)
        assert term.size() == (16, 6)
        assert kernel32.buffer_size == (16, 6)
        assert term.buffer.size == (16, 6)

    def test_shrink(self, kernel32: FakeKernel32) -> None:
        term = ConsoleTerminal(kernel32=kernel32)
        term.resize(5, 2)
        assert term.size() == (5, 2)
        assert kernel32.buffer_size == (5, 2)

    def test_resize_beyond_maximum(self, kernel32: FakeKernel32) -> None:
        term = ConsoleTerminal(kernel32=kernel32)
        with pytest.raises(ResizeError) as excinfo:
            term.resize(40, 6)
        achieved = excinfo.value.achieved
        assert term.size() == achieved
        assert term.buffer.size == achieved
        assert kernel32.buffer_size == kernel32.window == achieved

    def test_resize_after_external_resize(self, kernel32: FakeKernel32) -> None:
        term = ConsoleTerminal(kernel32=kernel32)
        # The user widens the console window behind our back.
        kernel32.buffer_size = kernel32.window = (16, 6)
        term.resize(12, 8)
        assert term.size() == (12, 8)
        assert kernel32.buffer_size == kernel32.window == (12, 8)
        assert term.buffer.size == (12, 8)

    def test_cursor(self, kernel32: FakeKernel32) -> None:
        term = ConsoleTerminal(kernel32=kernel32)
        term.set_cursor_pos(4, 3)
        assert term.get_cursor_pos() == (4, 3)
        with pytest.raises(CursorError):
            term.set_cursor_pos(4, 30)
        assert term.get_cursor_pos() == (4, 3)
