"""Render cell grids to text."""

from cellterm.render.ansi import AnsiRenderer

__all__ = ["AnsiRenderer"]
