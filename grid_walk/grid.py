"""Immutable value grid.

The :class:`Grid` is the read-only table of integer cell values the marker
walks over. Rows are stored top to bottom, so row 0 is the goal row and
``rows - 1`` is where every run starts.

Cell data is kept in persistent vectors (``pyrsistent.PVector``) so a grid can
be shared freely between run states without defensive copies.
"""

import math
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from pyrsistent import pvector, thaw
from pyrsistent.typing import PVector

from grid_walk.position import Position
from grid_walk.types import CellValue


@dataclass(frozen=True)
class Grid:
    """Rectangular table of integer cell values.

    Attributes:
        rows (int): Number of rows (>= 1).
        cols (int): Number of columns (>= 1).
        data (PVector[PVector[int]]): ``data[row][col]`` cell values.
    """

    rows: int
    cols: int
    data: PVector[PVector[CellValue]]

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"Grid must be at least 1x1, got {self.rows}x{self.cols}")
        if len(self.data) != self.rows:
            raise ValueError(f"Grid has {len(self.data)} rows, expected {self.rows}")
        for index, row in enumerate(self.data):
            if len(row) != self.cols:
                raise ValueError(
                    f"Grid row {index} has {len(row)} cells, expected {self.cols}"
                )

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[CellValue]]) -> "Grid":
        """Build a grid from nested sequences (``rows[row][col]``)."""
        data: PVector[PVector[CellValue]] = pvector(pvector(row) for row in rows)
        return cls(rows=len(data), cols=len(data[0]) if data else 0, data=data)

    @property
    def bottom_row(self) -> int:
        return self.rows - 1

    def in_bounds(self, pos: Position) -> bool:
        """Return True if ``pos`` lies within the grid rectangle."""
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.cols

    def value(self, pos: Position) -> CellValue:
        """Cell value at ``pos``.

        Raises:
            IndexError: If ``pos`` is off-grid.
        """
        if not self.in_bounds(pos):
            raise IndexError(f"Position {pos} is outside the {self.rows}x{self.cols} grid")
        return self.data[pos.row][pos.col]

    def value_or_inf(self, pos: Position) -> float:
        """Cell value at ``pos``, or positive infinity when off-grid."""
        if not self.in_bounds(pos):
            return math.inf
        return self.data[pos.row][pos.col]

    def value_range(self) -> Tuple[CellValue, CellValue]:
        """Smallest and largest cell value."""
        values = [value for row in self.data for value in row]
        return min(values), max(values)

    def cells(self) -> Iterator[Tuple[Position, CellValue]]:
        """Iterate ``(position, value)`` pairs in row-major order."""
        for r, row in enumerate(self.data):
            for c, value in enumerate(row):
                yield Position(r, c), value

    def to_lists(self) -> List[List[CellValue]]:
        """Plain nested lists (JSON friendly)."""
        return thaw(self.data)
