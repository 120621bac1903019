from typing import Iterable, Optional, Sequence, Tuple

from pyrsistent import pset, pvector

from grid_walk.grid import Grid
from grid_walk.position import Position
from grid_walk.selector import greedy_select_fn
from grid_walk.state import RunState
from grid_walk.types import SelectFn


# Rows are listed top to bottom; the last row is where runs start.
LATERAL_GRID: Sequence[Sequence[int]] = [
    [3, 3, 3],
    [8, 8, 2],
    [9, 1, 4],
]


def make_grid(rows: Sequence[Sequence[int]]) -> Grid:
    return Grid.from_rows(rows)


def make_run_state(
    *,
    rows: Sequence[Sequence[int]],
    position: Tuple[int, int],
    vertical_threshold: int = 5,
    visited: Iterable[Tuple[int, int]] = (),
    select_fn: Optional[SelectFn] = None,
) -> RunState:
    """Run state at an arbitrary position with a hand-picked visited set."""
    pos = Position(*position)
    return RunState(
        grid=make_grid(rows),
        position=pos,
        vertical_threshold=vertical_threshold,
        select_fn=select_fn if select_fn is not None else greedy_select_fn,
        visited=pset(Position(*p) for p in visited),
        trail=pvector([pos]),
    )


def never_select_fn(state: RunState) -> Optional[Position]:
    """Selector that never finds a move (forces fallback / blocking paths)."""
    return None


def static_grid_fn(rows: Sequence[Sequence[int]]):
    """Grid source / initial grid fn ignoring any keyword arguments."""
    grid = make_grid(rows)

    def grid_fn(**_: object) -> Grid:
        return grid

    return grid_fn
