"""Run configuration.

``WalkConfig`` carries everything a caller chooses per run. It is a frozen
dataclass so the Streamlit front-end can keep it in session state and derive
new configs with :func:`dataclasses.replace`.
"""

from dataclasses import dataclass
from functools import partial
from typing import Optional

from grid_walk.driver import MOVE_INTERVAL, RendererFn, RunDriver
from grid_walk.loader import load_grid
from grid_walk.renderer.board import DEFAULT_RESOLUTION


DEFAULT_GRID_PATH = "grid-data.json"
DEFAULT_VERTICAL_THRESHOLD = 5


@dataclass(frozen=True)
class WalkConfig:
    """Per-run settings.

    Attributes:
        grid_path: JSON grid file consumed by the grid source.
        start_column: 0-based column of the bottom-row start cell.
        vertical_threshold: Up-move bias; any integer is accepted.
        move_interval: Seconds between ticks for interval schedulers.
        resolution: Target image width in pixels for the board renderer.
    """

    grid_path: str = DEFAULT_GRID_PATH
    start_column: int = 0
    vertical_threshold: int = DEFAULT_VERTICAL_THRESHOLD
    move_interval: float = MOVE_INTERVAL
    resolution: int = DEFAULT_RESOLUTION


def make_driver(config: WalkConfig, renderer: Optional[RendererFn] = None) -> RunDriver:
    """Driver whose grid source reads ``config.grid_path`` on every reset."""
    return RunDriver(grid_source=partial(load_grid, config.grid_path), renderer=renderer)
