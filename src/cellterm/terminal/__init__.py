"""Terminal backends and the single acquisition entry point."""

from __future__ import annotations

import logging
import os
from typing import Callable, Optional

from cellterm.config import BACKENDS, TerminalConfig
from cellterm.terminal import session
from cellterm.terminal.base import BufferedTerminal, Terminal
from cellterm.terminal.memory import MemoryTerminal

logger = logging.getLogger(__name__)


def default_backend() -> str:
    """Backend native to the current platform."""
    return "console" if os.name == "nt" else "curses"


def _factory(name: str, config: TerminalConfig) -> Callable[[], Terminal]:
    color = config.default_color
    if name == "memory":
        width, height = config.memory_size
        return lambda: MemoryTerminal(width, height, default_color=color)
    if name == "curses":
        from cellterm.terminal.curses_backend import CursesTerminal
        return lambda: CursesTerminal(color)
    if name == "console":
        from cellterm.terminal.console import ConsoleTerminal
        return lambda: ConsoleTerminal(color)
    raise ValueError(f"Unknown backend: {name!r} (expected one of {', '.join(BACKENDS)})")


def init_terminal(
    backend: Optional[str] = None,
    config: Optional[TerminalConfig] = None,
) -> Terminal:
    """
    Acquire the process's terminal.

    Only one terminal may be open at a time; asking for another before
    closing the first raises TerminalBusyError. Use the result as a
    context manager so the device is restored on every exit path:

        >>> with init_terminal() as term:
        ...     term.write("hello")
    """
    if config is None:
        config = TerminalConfig.from_env()
    name = backend or config.backend or default_backend()
    logger.debug("Opening %s terminal with %s", name, config.to_dict())
    return session.claim(_factory(name, config))


__all__ = [
    "BufferedTerminal",
    "MemoryTerminal",
    "Terminal",
    "default_backend",
    "init_terminal",
]
