"""Windows console backend.

Draws into a private console screen buffer that is made active on
acquisition, so the user's original buffer (and its scrollback) comes
back untouched when the terminal is closed.
"""

from __future__ import annotations

import ctypes
import logging
from typing import Any, Optional

from cellterm.core.color import Color, ColorPair, DEFAULT_COLOR
from cellterm.errors import TerminalInitError
from cellterm.terminal.base import BufferedTerminal

logger = logging.getLogger(__name__)

STD_OUTPUT_HANDLE = -11
GENERIC_READ = 0x80000000
GENERIC_WRITE = 0x40000000
CONSOLE_TEXTMODE_BUFFER = 1
INVALID_HANDLE_VALUE = ctypes.c_void_p(-1).value

FOREGROUND_BLUE = 0x0001
FOREGROUND_GREEN = 0x0002
FOREGROUND_RED = 0x0004
FOREGROUND_INTENSITY = 0x0008
BACKGROUND_SHIFT = 4

# Console color bits for each hue index.
CONSOLE_HUES = (
    0,
    FOREGROUND_RED,
    FOREGROUND_GREEN,
    FOREGROUND_RED | FOREGROUND_GREEN,
    FOREGROUND_BLUE,
    FOREGROUND_RED | FOREGROUND_BLUE,
    FOREGROUND_GREEN | FOREGROUND_BLUE,
    FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_BLUE,
)


class COORD(ctypes.Structure):
    _fields_ = [("X", ctypes.c_short), ("Y", ctypes.c_short)]


class SMALL_RECT(ctypes.Structure):
    _fields_ = [
        ("Left", ctypes.c_short),
        ("Top", ctypes.c_short),
        ("Right", ctypes.c_short),
        ("Bottom", ctypes.c_short),
    ]


class CONSOLE_SCREEN_BUFFER_INFO(ctypes.Structure):
    _fields_ = [
        ("dwSize", COORD),
        ("dwCursorPosition", COORD),
        ("wAttributes", ctypes.c_ushort),
        ("srWindow", SMALL_RECT),
        ("dwMaximumWindowSize", COORD),
    ]


class _CharUnion(ctypes.Union):
    _fields_ = [("UnicodeChar", ctypes.c_wchar), ("AsciiChar", ctypes.c_char)]


class CHAR_INFO(ctypes.Structure):
    _fields_ = [("Char", _CharUnion), ("Attributes", ctypes.c_ushort)]


def color_bits(color: Color) -> int:
    """Foreground attribute bits for one color."""
    bits = CONSOLE_HUES[color.hue]
    if color.is_light:
        bits |= FOREGROUND_INTENSITY
    return bits


def attribute(fg: Color, bg: Color) -> int:
    """Console attribute word for a resolved color."""
    return color_bits(fg) | (color_bits(bg) << BACKGROUND_SHIFT)


def load_kernel32() -> Any:
    """Load kernel32 with handle-sized return types."""
    kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)  # type: ignore[attr-defined]
    kernel32.GetConsoleWindow.restype = ctypes.c_void_p
    kernel32.GetStdHandle.restype = ctypes.c_void_p
    kernel32.GetStdHandle.argtypes = [ctypes.c_ulong]
    kernel32.CreateConsoleScreenBuffer.restype = ctypes.c_void_p
    kernel32.CreateConsoleScreenBuffer.argtypes = [
        ctypes.c_ulong, ctypes.c_ulong, ctypes.c_void_p, ctypes.c_ulong, ctypes.c_void_p,
    ]
    kernel32.SetConsoleActiveScreenBuffer.argtypes = [ctypes.c_void_p]
    kernel32.GetConsoleScreenBufferInfo.argtypes = [
        ctypes.c_void_p, ctypes.POINTER(CONSOLE_SCREEN_BUFFER_INFO),
    ]
    kernel32.SetConsoleScreenBufferSize.argtypes = [ctypes.c_void_p, COORD]
    kernel32.SetConsoleWindowInfo.argtypes = [
        ctypes.c_void_p, ctypes.c_int, ctypes.POINTER(SMALL_RECT),
    ]
    kernel32.SetConsoleCursorPosition.argtypes = [ctypes.c_void_p, COORD]
    kernel32.WriteConsoleOutputW.argtypes = [
        ctypes.c_void_p, ctypes.POINTER(CHAR_INFO), COORD, COORD, ctypes.POINTER(SMALL_RECT),
    ]
    kernel32.CloseHandle.argtypes = [ctypes.c_void_p]
    return kernel32


class ConsoleTerminal(BufferedTerminal):
    """Terminal drawn into a dedicated Windows console screen buffer."""

    name = "console"

    def __init__(self, default_color: ColorPair = DEFAULT_COLOR, kernel32: Any = None) -> None:
        self._kernel32 = kernel32 if kernel32 is not None else load_kernel32()
        self._handle: Optional[int] = None
        self._old_handle: Optional[int] = None
        try:
            self._acquire()
            width, height = self._window_size()
            super().__init__(width, height, default_color)
            self._update_console_window(width, height)
            if not self._kernel32.SetConsoleActiveScreenBuffer(self._handle):
                raise TerminalInitError(
                    f"{TerminalInitError.description}: cannot activate screen buffer"
                )
        except Exception:
            self._release()
            raise
        logger.debug("console screen %sx%s", width, height)

    def _acquire(self) -> None:
        k = self._kernel32
        if not k.GetConsoleWindow():
            if not k.AllocConsole() or not k.GetConsoleWindow():
                raise TerminalInitError()
        self._old_handle = k.GetStdHandle(STD_OUTPUT_HANDLE)
        handle = k.CreateConsoleScreenBuffer(
            GENERIC_READ | GENERIC_WRITE, 0, None, CONSOLE_TEXTMODE_BUFFER, None
        )
        if not handle or handle == INVALID_HANDLE_VALUE:
            raise TerminalInitError(
                f"{TerminalInitError.description}: cannot create screen buffer"
            )
        self._handle = handle

    def _buffer_info(self) -> CONSOLE_SCREEN_BUFFER_INFO:
        info = CONSOLE_SCREEN_BUFFER_INFO()
        if not self._kernel32.GetConsoleScreenBufferInfo(self._handle, ctypes.byref(info)):
            raise ctypes.WinError(ctypes.get_last_error())  # type: ignore[attr-defined]
        return info

    def _window_size(self) -> tuple[int, int]:
        window = self._buffer_info().srWindow
        return window.Right - window.Left + 1, window.Bottom - window.Top + 1

    def _update_console_window(self, width: int, height: int) -> None:
        """
        Resize window and buffer together.

        The buffer may never be smaller than the window, so it is first
        grown to cover both sizes, then the window is set, then the buffer
        is trimmed to the window.
        """
        k = self._kernel32
        cur_width, cur_height = self._window_size()
        k.SetConsoleScreenBufferSize(
            self._handle, COORD(max(cur_width, width), max(cur_height, height))
        )
        k.SetConsoleWindowInfo(
            self._handle, 1, ctypes.byref(SMALL_RECT(0, 0, width - 1, height - 1))
        )
        k.SetConsoleScreenBufferSize(self._handle, COORD(width, height))

    def _query_size(self) -> tuple[int, int]:
        return self._window_size()

    def resize(self, width: int, height: int) -> None:
        self._update_console_window(width, height)
        achieved = self._window_size()
        if achieved != (width, height):
            # Trim the buffer back to whatever window the console allowed.
            self._update_console_window(*achieved)
        self._check_resize((width, height), achieved)

    def get_cursor_pos(self) -> tuple[int, int]:
        pos = self._buffer_info().dwCursorPosition
        return pos.X, pos.Y

    def set_cursor_pos(self, x: int, y: int) -> None:
        if not self._kernel32.SetConsoleCursorPosition(self._handle, COORD(x, y)):
            logger.debug("SetConsoleCursorPosition(%s, %s) rejected", x, y)
        self._check_cursor((x, y), self.get_cursor_pos())

    def present(self) -> None:
        width, height = self.size()
        cells = (CHAR_INFO * (width * height))()
        for i, (_, _, cell) in enumerate(self._buffer.cells()):
            cells[i].Char.UnicodeChar = cell.char
            cells[i].Attributes = attribute(cell.fg, cell.bg)
        region = SMALL_RECT(0, 0, width - 1, height - 1)
        self._kernel32.WriteConsoleOutputW(
            self._handle, cells, COORD(width, height), COORD(0, 0), ctypes.byref(region)
        )

    def _release(self) -> None:
        k = self._kernel32
        if self._old_handle:
            k.SetConsoleActiveScreenBuffer(self._old_handle)
            self._old_handle = None
        if self._handle:
            k.CloseHandle(self._handle)
            self._handle = None
