"""Position value type.

Immutable integer grid coordinates. Row 0 is the top (goal) row and rows grow
downward; the walk starts on the bottom row.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Grid coordinate.

    Attributes:
        row: Row index (0 at top).
        col: Column index (0 at left).
    """

    row: int
    col: int

    def offset(self, drow: int, dcol: int) -> "Position":
        """Return the position shifted by ``(drow, dcol)`` (no bounds check)."""
        return Position(self.row + drow, self.col + dcol)
