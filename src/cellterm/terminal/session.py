"""Process-wide ownership of the live terminal."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

from cellterm.errors import TerminalBusyError

if TYPE_CHECKING:
    from cellterm.terminal.base import Terminal

logger = logging.getLogger(__name__)

_live: Optional[Terminal] = None


def claim(factory: Callable[[], Terminal]) -> Terminal:
    """
    Build a terminal with ``factory`` and record it as the live one.

    Only one terminal may be live per process since the underlying
    device is global. The claim is returned when the terminal closes.
    """
    global _live
    if _live is not None:
        raise TerminalBusyError(
            f"{TerminalBusyError.description}: a {_live.name} terminal is still open"
        )
    terminal = factory()
    _live = terminal
    logger.debug("Acquired %s terminal", terminal.name)
    return terminal


def release(terminal: Terminal) -> None:
    global _live
    if _live is terminal:
        _live = None


def live_terminal() -> Optional[Terminal]:
    """Return the terminal currently holding the claim, if any."""
    return _live
