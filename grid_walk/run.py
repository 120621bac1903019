"""Run construction.

:func:`new_run` is the single place a :class:`RunState` is born: the marker
sits on the bottom row of the chosen column with an empty visited set and a
zero score. Reset is simply building a new run and dropping the old one.
"""

from pyrsistent import pset, pvector

from grid_walk.grid import Grid
from grid_walk.loader import validate_start_column
from grid_walk.position import Position
from grid_walk.selector import greedy_select_fn
from grid_walk.state import RunState
from grid_walk.systems.terminal import top_system
from grid_walk.types import SelectFn


def new_run(
    grid: Grid,
    start_column: int,
    vertical_threshold: int,
    select_fn: SelectFn = greedy_select_fn,
) -> RunState:
    """Create a fresh run at the bottom of ``start_column``.

    A single-row grid starts (and ends) on the top row, so the returned state
    is already terminal.

    Raises:
        ValueError: If ``start_column`` is outside the grid.
    """
    validate_start_column(grid, start_column)
    start = Position(grid.bottom_row, start_column)
    state = RunState(
        grid=grid,
        position=start,
        vertical_threshold=vertical_threshold,
        select_fn=select_fn,
        visited=pset(),
        trail=pvector([start]),
    )
    return top_system(state)
