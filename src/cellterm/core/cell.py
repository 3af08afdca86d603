"""Cell - one character position on the terminal grid."""

from dataclasses import dataclass

from cellterm.core.color import DEFAULT_COLOR, Color, ColorPair


@dataclass(slots=True)
class Cell:
    """
    A single character cell with a fully resolved color.

    Cells never hold a partial color: the renderer composes every
    written pair against the terminal default before storing it.
    """
    char: str = ' '
    fg: Color = Color.DARK_WHITE
    bg: Color = Color.DARK_BLACK

    @classmethod
    def blank(cls, color: ColorPair = DEFAULT_COLOR) -> "Cell":
        """Create an empty cell in the given color."""
        fg, bg = color.resolved()
        return cls(' ', fg, bg)

    @property
    def color(self) -> ColorPair:
        return ColorPair(self.fg, self.bg)

    def copy(self) -> "Cell":
        """Create a copy of this cell."""
        return Cell(char=self.char, fg=self.fg, bg=self.bg)

    def is_blank(self) -> bool:
        """Check if this cell shows nothing but background."""
        return self.char == ' '
