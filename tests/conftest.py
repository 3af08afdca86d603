"""Shared fixtures for terminal tests."""

import pytest

from cellterm.terminal import session
from cellterm.terminal.memory import MemoryTerminal


@pytest.fixture(autouse=True)
def release_live_terminal():
    """Close any terminal a test left holding the process claim."""
    yield
    live = session.live_terminal()
    if live is not None:
        live.close()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's CELLTERM_* settings out of the tests."""
    for variable in ("CELLTERM_BACKEND", "CELLTERM_FG", "CELLTERM_BG", "CELLTERM_SIZE"):
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture
def term() -> MemoryTerminal:
    """A 10x4 memory terminal."""
    return MemoryTerminal(10, 4)


@pytest.fixture
def small_term() -> MemoryTerminal:
    """A 4x2 memory terminal."""
    return MemoryTerminal(4, 2)
