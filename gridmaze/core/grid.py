import logging
import numbers
from array import array
from enum import IntEnum
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple, Union

import numpy as np

from gridmaze.core.errors import InvalidDimensions, MazeError

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

MIN_SIZE = 3

# Direction Helpers (row, col)
UP = (-1, 0)
DOWN = (1, 0)
LEFT = (0, -1)
RIGHT = (0, 1)

CARVE_ORDER = (UP, DOWN, LEFT, RIGHT)
SEARCH_ORDER = (DOWN, RIGHT, UP, LEFT)


class Cell(IntEnum):
    WALL = 0
    PASSAGE = 1
    VISITED = 2
    PATH = 3
    # Presentation only, appears in snapshots and never in a live grid
    CURSOR = 4


GLYPHS: Dict[Cell, str] = {
    Cell.WALL: '#',
    Cell.PASSAGE: '.',
    Cell.VISITED: 'o',
    Cell.PATH: '*',
    Cell.CURSOR: '@',
}
CELLS_BY_GLYPH = {glyph: kind for kind, glyph in GLYPHS.items()}


def clamp_dimensions(rows, cols) -> Tuple[int, int]:
    """
    Returns (rows, cols) clamped up to MIN_SIZE.
    Only non-integers are rejected; small or negative sizes are clamped.
    """
    for value in (rows, cols):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidDimensions(f"Grid dimensions must be integers, got {value!r}")

    clamped = (max(int(rows), MIN_SIZE), max(int(cols), MIN_SIZE))
    if clamped != (rows, cols):
        logger.debug("Clamped grid %sx%s up to %dx%d", rows, cols, *clamped)
    return clamped


class GridView:
    """Read-only accessors shared by the live Grid and its Snapshots."""

    __slots__ = ('rows', 'cols', 'cells')

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.rows and 0 <= c < self.cols

    def get_index(self, r: int, c: int) -> int:
        if 0 <= r < self.rows and 0 <= c < self.cols:
            return r * self.cols + c
        raise IndexError(f"Coordinate ({r}, {c}) out of bounds")

    def get(self, r: int, c: int) -> Cell:
        return Cell(self.cells[self.get_index(r, c)])

    def is_open(self, r: int, c: int) -> bool:
        return self.in_bounds(r, c) and self.cells[r * self.cols + c] != Cell.WALL

    def get_neighbors(self, r: int, c: int, order: Sequence[Coord] = SEARCH_ORDER,
                      step: int = 1) -> Iterator[Tuple[int, int, int, int]]:
        """
        Yields (nr, nc, dr, dc) for in-bounds cells `step` away, in `order`.
        Does NOT check cell kinds.
        """
        for dr, dc in order:
            nr, nc = r + dr * step, c + dc * step
            if 0 <= nr < self.rows and 0 <= nc < self.cols:
                yield (nr, nc, dr, dc)

    def get_open_neighbors(self, r: int, c: int) -> Iterator[Coord]:
        for nr, nc, _, _ in self.get_neighbors(r, c):
            if self.cells[nr * self.cols + nc] != Cell.WALL:
                yield (nr, nc)

    def count(self, kind: Cell) -> int:
        return self.cells.count(kind)

    def positions(self, kind: Cell) -> Iterator[Coord]:
        for idx, val in enumerate(self.cells):
            if val == kind:
                yield divmod(idx, self.cols)

    def to_text(self, start: Optional[Coord] = None, end: Optional[Coord] = None) -> str:
        lines = []
        for r in range(self.rows):
            row = self.cells[r * self.cols:(r + 1) * self.cols]
            chars = [GLYPHS[Cell(v)] for v in row]
            if start is not None and start[0] == r:
                chars[start[1]] = 'S'
            if end is not None and end[0] == r:
                chars[end[1]] = 'E'
            lines.append(''.join(chars))
        return '\n'.join(lines)

    def _as_array(self) -> np.ndarray:
        return np.frombuffer(self.cells, dtype=np.uint8).reshape(self.rows, self.cols)

    def __repr__(self):
        return f"{type(self).__name__}({self.rows}x{self.cols})"


class Snapshot(GridView):
    """
    Immutable value copy of a Grid, handed to step observers.
    Safe to keep, or read from another thread, while the engine mutates the grid.
    """

    __slots__ = ()

    def __init__(self, rows: int, cols: int, cells: bytes):
        self.rows = rows
        self.cols = cols
        self.cells = bytes(cells)

    def to_numpy(self) -> np.ndarray:
        # Backed by bytes, so the array is read-only
        return self._as_array()


class Grid(GridView):
    """
    Thick-wall maze grid: rooms sit on even rows/cols, connectors between them.
    One byte per cell, row-major.
    """

    __slots__ = ()

    def __init__(self, rows: int, cols: int, fill: Cell = Cell.WALL):
        self.rows, self.cols = clamp_dimensions(rows, cols)
        self.cells = array('B', [fill]) * (self.rows * self.cols)

    @classmethod
    def from_text(cls, text: Union[str, Iterable[str]]) -> 'Grid':
        """
        Builds a grid from rows of glyphs ('#' wall, '.' passage, 'o' visited, '*' path).
        """
        lines = text.strip('\n').split('\n') if isinstance(text, str) else list(text)
        if len(lines) < MIN_SIZE or len(lines[0]) < MIN_SIZE:
            raise InvalidDimensions(f"Grid text must be at least {MIN_SIZE}x{MIN_SIZE}")
        if any(len(line) != len(lines[0]) for line in lines):
            raise InvalidDimensions("Grid text rows must all have the same length")

        grid = cls(len(lines), len(lines[0]))
        for r, line in enumerate(lines):
            for c, ch in enumerate(line):
                kind = CELLS_BY_GLYPH.get(ch)
                if kind is None or kind == Cell.CURSOR:
                    raise MazeError(f"Unknown cell glyph {ch!r} at ({r}, {c})")
                grid.cells[r * grid.cols + c] = kind
        return grid

    def set(self, r: int, c: int, kind: Cell):
        self.cells[self.get_index(r, c)] = kind

    def copy(self) -> 'Grid':
        clone = Grid.__new__(Grid)
        clone.rows = self.rows
        clone.cols = self.cols
        clone.cells = array('B', self.cells)
        return clone

    def snapshot(self, cursor: Optional[Coord] = None) -> Snapshot:
        data = bytearray(self.cells)
        if cursor is not None:
            data[self.get_index(*cursor)] = Cell.CURSOR
        return Snapshot(self.rows, self.cols, data)

    def reset_solution(self) -> int:
        """Turns VISITED and PATH cells back into PASSAGE. Returns how many changed."""
        reset = 0
        for idx, val in enumerate(self.cells):
            if val == Cell.VISITED or val == Cell.PATH:
                self.cells[idx] = Cell.PASSAGE
                reset += 1
        return reset

    def to_numpy(self) -> np.ndarray:
        return self._as_array().copy()
