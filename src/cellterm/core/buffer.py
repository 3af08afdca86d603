"""CellBuffer - flat grid of cells owned by a terminal backend."""

from __future__ import annotations

from itertools import islice
from typing import Iterable, Iterator

from cellterm.core.cell import Cell
from cellterm.core.color import DEFAULT_COLOR, ColorPair

# One logical line of output: characters paired with (possibly partial) colors.
ColoredLine = Iterable[tuple[str, ColorPair]]


class CellBuffer:
    """
    A fixed-size grid of Cells stored row-major in one flat list.

    Cell ``(x, y)`` lives at index ``y * width + x``. The buffer is what
    backends render into; it only reaches the device when the owning
    terminal presents it.
    """

    def __init__(self, width: int, height: int, fill: ColorPair = DEFAULT_COLOR) -> None:
        self._width = max(width, 0)
        self._height = max(height, 0)
        self._cells = [Cell.blank(fill) for _ in range(self._width * self._height)]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    def get(self, x: int, y: int) -> Cell:
        """Get the cell at position (x, y)."""
        if not 0 <= x < self._width:
            raise IndexError(f"x={x} out of bounds (width={self._width})")
        if not 0 <= y < self._height:
            raise IndexError(f"y={y} out of bounds (height={self._height})")
        return self._cells[y * self._width + x]

    def __getitem__(self, pos: tuple[int, int]) -> Cell:
        """Get cell using indexing: buffer[x, y]."""
        x, y = pos
        return self.get(x, y)

    def row(self, y: int) -> list[Cell]:
        start = y * self._width
        return self._cells[start:start + self._width]

    def rows(self) -> Iterator[list[Cell]]:
        """Iterate over rows."""
        for y in range(self._height):
            yield self.row(y)

    def cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Iterate over all cells as (x, y, cell) tuples."""
        for i, cell in enumerate(self._cells):
            yield i % self._width, i // self._width, cell

    def row_text(self, y: int) -> str:
        return ''.join(cell.char for cell in self.row(y))

    def lines(self) -> list[str]:
        return [self.row_text(y) for y in range(self._height)]

    def clear(self, fill: ColorPair = DEFAULT_COLOR) -> None:
        """Reset every cell to a blank in the given color."""
        self._cells = [Cell.blank(fill) for _ in range(self._width * self._height)]

    def resize(self, width: int, height: int, fill: ColorPair = DEFAULT_COLOR) -> None:
        """
        Reshape the grid, keeping the overlapping top-left region.

        Cells that become visible are blank in ``fill``.
        """
        width, height = max(width, 0), max(height, 0)
        if (width, height) == self.size:
            return
        cells = [Cell.blank(fill) for _ in range(width * height)]
        for y in range(min(height, self._height)):
            keep = min(width, self._width)
            src = y * self._width
            cells[y * width:y * width + keep] = self._cells[src:src + keep]
        self._width, self._height = width, height
        self._cells = cells

    def print_at(self, x: int, y: int, line: ColoredLine, default: ColorPair) -> int:
        """
        Write one logical line into row ``y`` starting at column ``x``.

        ``x`` may be negative, in which case the first ``-x`` elements of
        ``line`` are skipped as being off-screen to the left. Writing stops
        at a newline (consumed, not drawn), at the end of ``line``, or at
        the right edge of the row, whichever comes first. Rows outside the
        buffer are ignored. Each color is composed over ``default`` before
        it is stored.

        Returns the number of cells written.
        """
        if not 0 <= y < self._height:
            return 0
        stream = iter(line)
        if x < 0:
            for _ in islice(stream, -x):
                pass
            x = 0

        base = y * self._width
        col = x
        while col < self._width:
            item = next(stream, None)
            if item is None:
                break
            char, color = item
            if char == '\n':
                break
            fg, bg = color.compose(default).resolved()
            self._cells[base + col] = Cell(char, fg, bg)
            col += 1
        return max(col - x, 0)
