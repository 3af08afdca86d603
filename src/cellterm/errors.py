"""Error types raised by terminal backends.

Each error carries a fixed ``description`` used as its default message.
Rendering operations never raise these; only device-level requests
(acquisition, resize, cursor placement) can fail.
"""

from __future__ import annotations

from typing import ClassVar, Optional


class TerminalError(Exception):
    """Base class for all terminal errors."""

    description: ClassVar[str] = "Terminal error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.description)


class TerminalInitError(TerminalError):
    """The terminal device could not be acquired."""

    description = "Unable to get terminal"


class TerminalBusyError(TerminalError):
    """A terminal is already live in this process."""

    description = "Terminal already acquired"


class ResizeError(TerminalError):
    """The device could not honor the exact requested size."""

    description = "Unable to resize terminal"

    def __init__(self, requested: tuple[int, int], achieved: tuple[int, int]) -> None:
        self.requested = requested
        self.achieved = achieved
        super().__init__(
            f"{self.description}: requested {requested[0]}x{requested[1]}, "
            f"got {achieved[0]}x{achieved[1]}"
        )


class CursorError(TerminalError):
    """The device rejected or clamped a cursor position."""

    description = "Unable to place cursor"

    def __init__(self, requested: tuple[int, int], actual: tuple[int, int]) -> None:
        self.requested = requested
        self.actual = actual
        super().__init__(
            f"{self.description} at {requested}, cursor is at {actual}"
        )


class UnresolvedColorError(TerminalError, ValueError):
    """A color pair with a missing channel reached attribute encoding."""

    description = "Color pair is not fully resolved"
