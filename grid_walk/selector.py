"""Greedy move selection.

The selector looks one step ahead at three candidates (up, left, right) and
never backtracks. The vertical threshold biases it toward climbing:

1. Up is taken as the tentative move whenever it is on-grid and unvisited.
2. If up's value is below the threshold it is final, even when a lateral cell
   is numerically lower.
3. Otherwise (or when up is ineligible) left then right may replace the
   tentative move, each only on a strict improvement. Right therefore loses
   ties against left, and both lose ties against up.

Off-grid candidates count as positive infinity and visited candidates are
skipped entirely, so the selector never returns a cell already entered in the
current run.
"""

import math
from typing import AbstractSet, Optional

from grid_walk.actions import Action
from grid_walk.grid import Grid
from grid_walk.moves import neighbor
from grid_walk.position import Position
from grid_walk.state import RunState


def _is_eligible(grid: Grid, pos: Position, visited: AbstractSet[Position]) -> bool:
    return grid.in_bounds(pos) and pos not in visited


def select_move(
    grid: Grid,
    position: Position,
    visited: AbstractSet[Position],
    vertical_threshold: int,
) -> Optional[Position]:
    """Pick the next position for the marker.

    Args:
        grid (Grid): Cell values.
        position (Position): Current (on-grid) marker position.
        visited (AbstractSet[Position]): Cells already entered this run.
        vertical_threshold (int): Any integer; up moves with a value below it
            are always preferred.

    Returns:
        Position | None: Chosen neighbor, or ``None`` when up, left and right
            are all off-grid or visited.
    """
    best_move: Optional[Position] = None
    min_value: float = math.inf

    up = neighbor(position, Action.UP)
    up_value = grid.value_or_inf(up)
    if _is_eligible(grid, up, visited) and (
        up_value < vertical_threshold or best_move is None
    ):
        best_move = up
        min_value = up_value

    if best_move is None or min_value >= vertical_threshold:
        for action in (Action.LEFT, Action.RIGHT):
            candidate = neighbor(position, action)
            value = grid.value_or_inf(candidate)
            if _is_eligible(grid, candidate, visited) and value < min_value:
                best_move = candidate
                min_value = value

    return best_move


def greedy_select_fn(state: RunState) -> Optional[Position]:
    """``SelectFn`` adapter running :func:`select_move` on a run state."""
    return select_move(
        state.grid, state.position, state.visited, state.vertical_threshold
    )
