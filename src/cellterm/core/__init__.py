"""Core data structures: colors, cells and the cell buffer."""

from cellterm.core.buffer import CellBuffer, ColoredLine
from cellterm.core.cell import Cell
from cellterm.core.color import DEFAULT_COLOR, Color, ColorPair

__all__ = ["Cell", "CellBuffer", "Color", "ColorPair", "ColoredLine", "DEFAULT_COLOR"]
