"""
Grid - Spatial storage for the mine.

The Grid handles:
- Cell storage (position -> cell)
- Coordinate validation
- Neighbour queries
- Coordinate system conversions for top-down display

Coordinate System:
- Column increases to the RIGHT
- Row increases UPWARD (mathematical convention)
- Origin (1, 1) is at BOTTOM-LEFT
"""

from __future__ import annotations
from typing import Callable, Dict, Iterator, List, Optional

from ..core.types import Cell, CellKind, Position, EMPTY, WALL
from ..core.objects import cell_to_char


class Grid:
    """
    A 2D map of cells with mathematical coordinates (row+ = UP).

    The grid is logically dense over ``width x height``; positions outside
    the rectangle read as walls so edge rules never step off the map.

    Attributes:
        width: Number of columns
        height: Number of rows
    """

    def __init__(self, width: int, height: int, cells: Optional[Dict[Position, Cell]] = None):
        """
        Initialize a grid.

        Args:
            width: Grid width (must be positive)
            height: Grid height (must be positive)
            cells: Initial contents; missing positions are Empty

        Raises:
            ValueError: If dimensions are invalid
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive: {width}x{height}")

        self.width = width
        self.height = height
        self._cells: Dict[Position, Cell] = {}
        for pos, cell in (cells or {}).items():
            self.set(pos, cell)

    @classmethod
    def from_rows(cls, rows: List[List[Cell]]) -> Grid:
        """
        Build a grid from rows listed bottom-up (rows[0] is row 1).

        Shorter rows are padded with Empty cells.
        """
        height = len(rows)
        width = max((len(r) for r in rows), default=0)
        grid = cls(width, height)
        for y, row in enumerate(rows, start=1):
            for x, cell in enumerate(row, start=1):
                grid._cells[(x, y)] = cell
        return grid

    def in_bounds(self, pos: Position) -> bool:
        """Check if a position lies inside the grid rectangle."""
        x, y = pos
        return 1 <= x <= self.width and 1 <= y <= self.height

    def get(self, pos: Position) -> Cell:
        """Cell at ``pos``; Wall outside the rectangle, Empty for unset cells."""
        if not self.in_bounds(pos):
            return WALL
        return self._cells.get(pos, EMPTY)

    __getitem__ = get

    def set(self, pos: Position, cell: Cell) -> None:
        """
        Store a cell.

        Raises:
            ValueError: If the position is out of bounds
        """
        if not self.in_bounds(pos):
            raise ValueError(f"Position out of bounds: {pos}")
        self._cells[pos] = cell

    __setitem__ = set

    def neighbors(self, pos: Position) -> List[Position]:
        """
        Get the 4-adjacent neighbouring positions inside the grid.

        Order: up, down, left, right.
        """
        x, y = pos
        candidates = [
            (x, y + 1),  # UP
            (x, y - 1),  # DOWN
            (x - 1, y),  # LEFT
            (x + 1, y),  # RIGHT
        ]
        return [p for p in candidates if self.in_bounds(p)]

    def positions(self) -> Iterator[Position]:
        """All positions of the rectangle, bottom row first, left to right."""
        for y in range(1, self.height + 1):
            for x in range(1, self.width + 1):
                yield (x, y)

    def items(self) -> Iterator[tuple[Position, Cell]]:
        for pos in self.positions():
            yield pos, self.get(pos)

    def find(self, kind: CellKind) -> List[Position]:
        """Positions holding a cell of the given kind, in scan order."""
        return [pos for pos, cell in self.items() if cell.kind == kind]

    def count(self, predicate: Callable[[Cell], bool]) -> int:
        return sum(1 for _, cell in self.items() if predicate(cell))

    def copy(self) -> Grid:
        """Independent copy; cells are immutable so a shallow dict copy suffices."""
        clone = Grid(self.width, self.height)
        clone._cells = dict(self._cells)
        return clone

    def rows_top_down(self) -> List[List[Cell]]:
        """Rows for display, top row first."""
        return [
            [self.get((x, y)) for x in range(1, self.width + 1)]
            for y in range(self.height, 0, -1)
        ]

    def to_lines(self) -> List[str]:
        """Map characters, top row first (the authored layout)."""
        return ["".join(cell_to_char(c) for c in row) for row in self.rows_top_down()]

    def to_screen_y(self, row: int) -> int:
        """
        Convert a row number to a 0-based screen line (0 = top).
        """
        return self.height - row

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and all(self.get(p) == other.get(p) for p in self.positions())
        )

    def __str__(self) -> str:
        """String representation."""
        return "\n".join(self.to_lines())

    def __repr__(self) -> str:
        """Detailed representation."""
        return f"Grid(width={self.width}, height={self.height})"
