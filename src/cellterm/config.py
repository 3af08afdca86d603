"""Terminal configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from cellterm.core.color import Color, ColorPair

BACKENDS = ("curses", "console", "memory")


def _parse_size(value: str, variable: str) -> tuple[int, int]:
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError:
        raise ValueError(f"{variable} must look like 80x24, got {value!r}") from None
    if width < 1 or height < 1:
        raise ValueError(f"{variable} must be positive, got {value!r}")
    return width, height


@dataclass
class TerminalConfig:
    """
    Settings used when acquiring a terminal.

    Example:
        >>> config = (TerminalConfig()
        ...     .with_backend("memory")
        ...     .with_colors(fg=Color.LIGHT_GREEN)
        ...     .with_memory_size(40, 10))
    """

    # None = pick from the platform
    backend: Optional[str] = None

    default_fg: Color = Color.DARK_WHITE
    default_bg: Color = Color.DARK_BLACK

    # Device size for the memory backend
    memory_size: tuple[int, int] = field(default=(80, 24))

    def with_backend(self, backend: Optional[str]) -> TerminalConfig:
        """Set backend: 'curses', 'console', 'memory' or None for auto."""
        if backend is not None and backend not in BACKENDS:
            raise ValueError(f"Invalid backend: {backend}")
        self.backend = backend
        return self

    def with_colors(
        self,
        fg: Optional[Color] = None,
        bg: Optional[Color] = None,
    ) -> TerminalConfig:
        """Set default foreground and/or background."""
        if fg is not None:
            self.default_fg = fg
        if bg is not None:
            self.default_bg = bg
        return self

    def with_memory_size(self, width: int, height: int) -> TerminalConfig:
        """Set the simulated device size for the memory backend."""
        if width < 1 or height < 1:
            raise ValueError(f"Invalid size: {width}x{height}")
        self.memory_size = (width, height)
        return self

    @property
    def default_color(self) -> ColorPair:
        return ColorPair(self.default_fg, self.default_bg)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> TerminalConfig:
        """
        Build a config from ``CELLTERM_*`` environment variables.

        CELLTERM_BACKEND  curses | console | memory
        CELLTERM_FG       color name, e.g. light_green
        CELLTERM_BG       color name
        CELLTERM_SIZE     memory backend size, e.g. 80x24
        """
        env = os.environ if environ is None else environ
        config = cls()
        if backend := env.get("CELLTERM_BACKEND"):
            try:
                config.with_backend(backend.strip().lower())
            except ValueError:
                raise ValueError(f"CELLTERM_BACKEND: unknown backend {backend!r}") from None
        for variable, channel in (("CELLTERM_FG", "fg"), ("CELLTERM_BG", "bg")):
            if value := env.get(variable):
                try:
                    config.with_colors(**{channel: Color.parse(value)})
                except ValueError:
                    raise ValueError(f"{variable}: unknown color {value!r}") from None
        if size := env.get("CELLTERM_SIZE"):
            config.memory_size = _parse_size(size, "CELLTERM_SIZE")
        return config

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging."""
        return {
            "backend": self.backend,
            "default_fg": self.default_fg.name.lower(),
            "default_bg": self.default_bg.name.lower(),
            "memory_size": list(self.memory_size),
        }
