"""Color representation for terminal cells."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Optional

from cellterm.errors import UnresolvedColorError

LIGHT_BIT = 8
HUE_MASK = 7


class Color(IntEnum):
    """
    One of the 16 standard terminal colors.

    The value packs a 3-bit hue (ANSI order: black, red, green, yellow,
    blue, magenta, cyan, white) with a brightness bit, so every light
    color shares its hue index with the dark color below it.
    """
    DARK_BLACK = 0
    DARK_RED = 1
    DARK_GREEN = 2
    DARK_YELLOW = 3
    DARK_BLUE = 4
    DARK_MAGENTA = 5
    DARK_CYAN = 6
    DARK_WHITE = 7
    LIGHT_BLACK = 8
    LIGHT_RED = 9
    LIGHT_GREEN = 10
    LIGHT_YELLOW = 11
    LIGHT_BLUE = 12
    LIGHT_MAGENTA = 13
    LIGHT_CYAN = 14
    LIGHT_WHITE = 15

    @property
    def hue(self) -> int:
        """Hue index 0-7, shared by the dark and light variants."""
        return self.value & HUE_MASK

    @property
    def is_light(self) -> bool:
        return bool(self.value & LIGHT_BIT)

    def light(self) -> Color:
        return Color(self.hue | LIGHT_BIT)

    def dark(self) -> Color:
        return Color(self.hue)

    def to_sgr_fg(self) -> str:
        """Return SGR parameter for this color as foreground."""
        if self.is_light:
            return str(90 + self.hue)
        return str(30 + self.hue)

    def to_sgr_bg(self) -> str:
        """Return SGR parameter for this color as background."""
        if self.is_light:
            return str(100 + self.hue)
        return str(40 + self.hue)

    @classmethod
    def parse(cls, name: str) -> Color:
        """
        Look up a color by name.

        Accepts ``light_red``, ``Light-Red`` or ``LIGHT RED``; a bare hue
        name such as ``red`` means the dark variant.
        """
        key = name.strip().upper().replace("-", "_").replace(" ", "_")
        if key in cls.__members__:
            return cls[key]
        if f"DARK_{key}" in cls.__members__:
            return cls[f"DARK_{key}"]
        raise ValueError(f"Unknown color: {name!r}")


@dataclass(frozen=True)
class ColorPair:
    """
    A possibly partial foreground/background color choice.

    ``None`` in a channel means "inherit from context", never "no color".
    Pairs are layered with :meth:`compose`; a pair only becomes renderable
    once both channels are filled in.
    """
    fg: Optional[Color] = None
    bg: Optional[Color] = None

    EMPTY: ClassVar[ColorPair]

    @classmethod
    def of(cls, fg: Optional[Color] = None, bg: Optional[Color] = None) -> ColorPair:
        return cls(fg, bg)

    def compose(self, other: ColorPair) -> ColorPair:
        """Take this pair's channels where present, else ``other``'s."""
        return ColorPair(
            fg=self.fg if self.fg is not None else other.fg,
            bg=self.bg if self.bg is not None else other.bg,
        )

    @property
    def is_resolved(self) -> bool:
        return self.fg is not None and self.bg is not None

    def resolved(self) -> tuple[Color, Color]:
        """Return ``(fg, bg)``; a missing channel is a programming error."""
        if self.fg is None or self.bg is None:
            raise UnresolvedColorError(
                f"Color pair is not fully resolved: fg={self.fg!r}, bg={self.bg!r}"
            )
        return self.fg, self.bg


ColorPair.EMPTY = ColorPair()

DEFAULT_COLOR = ColorPair(Color.DARK_WHITE, Color.DARK_BLACK)
