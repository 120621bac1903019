"""Example grids.

``SAMPLE_GRID_DATA`` mirrors the ``grid-data.json`` file shipped at the
repository root; :func:`generate` produces seeded random grids for demos and
the Gymnasium environment.
"""

import random
from typing import Any, Dict, Optional

from grid_walk.grid import Grid
from grid_walk.loader import parse_grid_data


SAMPLE_GRID_DATA: Dict[str, Any] = {
    "rows": 8,
    "cols": 8,
    "data": [
        [3, 7, 2, 9, 4, 1, 8, 5],
        [6, 1, 8, 3, 7, 2, 4, 9],
        [2, 9, 4, 6, 1, 8, 3, 7],
        [8, 3, 7, 1, 9, 4, 6, 2],
        [1, 6, 2, 8, 3, 7, 9, 4],
        [9, 4, 6, 2, 8, 3, 1, 7],
        [4, 8, 1, 7, 2, 9, 5, 3],
        [7, 2, 9, 4, 6, 1, 3, 8],
    ],
}


def sample_grid() -> Grid:
    return parse_grid_data(SAMPLE_GRID_DATA)


def generate(
    rows: int = 9,
    cols: int = 9,
    low: int = 1,
    high: int = 9,
    seed: Optional[int] = None,
) -> Grid:
    """Random grid with values drawn uniformly from ``[low, high]``.

    The same ``seed`` always yields the same grid.
    """
    if low > high:
        raise ValueError(f"low ({low}) must not exceed high ({high})")
    rng = random.Random(seed)
    return Grid.from_rows(
        [[rng.randint(low, high) for _ in range(cols)] for _ in range(rows)]
    )
