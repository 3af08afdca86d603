"""Composable drawing surfaces built on ``Terminal.print_at``."""

from cellterm.surface.base import BaseSurface, Drawable, Rect, render
from cellterm.surface.border import ASCII, DOUBLE, SINGLE, BorderSurface
from cellterm.surface.stack import Placement, StackSurface
from cellterm.surface.text import FillSurface, TextSurface

__all__ = [
    "ASCII",
    "BaseSurface",
    "BorderSurface",
    "DOUBLE",
    "Drawable",
    "FillSurface",
    "Placement",
    "Rect",
    "SINGLE",
    "StackSurface",
    "TextSurface",
    "render",
]
