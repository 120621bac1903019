"""Grid source: JSON grid files.

A grid file holds ``{"rows": int, "cols": int, "data": int[rows][cols]}``.
Every problem with a source (unreadable file, bad JSON, wrong shape, non
integer cells) is reported as :class:`GridLoadError`, so callers only need one
``except`` clause to abort run initialization.
"""

import json
import logging
import os
from typing import Any, Mapping, Union

from grid_walk.grid import Grid

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

REQUIRED_KEYS = ("rows", "cols", "data")


class GridLoadError(ValueError):
    """Raised when a grid source cannot be read or is malformed."""


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid cell value / dimension
    return isinstance(value, int) and not isinstance(value, bool)


def parse_grid_data(payload: Mapping[str, Any]) -> Grid:
    """Validate a decoded grid payload and build a :class:`Grid`.

    Raises:
        GridLoadError: If keys are missing, dimensions are not positive
            integers, or ``data`` does not match ``rows`` x ``cols`` integers.
    """
    if not isinstance(payload, Mapping):
        raise GridLoadError(f"Grid data must be an object, got {type(payload).__name__}")
    missing = [key for key in REQUIRED_KEYS if key not in payload]
    if missing:
        raise GridLoadError(f"Grid data is missing keys: {', '.join(missing)}")

    rows, cols, data = payload["rows"], payload["cols"], payload["data"]
    if not _is_int(rows) or not _is_int(cols) or rows < 1 or cols < 1:
        raise GridLoadError(f"Grid dimensions must be positive integers: {rows}x{cols}")
    if not isinstance(data, list) or len(data) != rows:
        raise GridLoadError(f"Grid data must be a list of {rows} rows")
    for index, row in enumerate(data):
        if not isinstance(row, list) or len(row) != cols:
            raise GridLoadError(f"Grid row {index} must be a list of {cols} cells")
        if not all(_is_int(value) for value in row):
            raise GridLoadError(f"Grid row {index} contains non-integer cells: {row}")

    return Grid.from_rows(data)


def load_grid(path: PathLike) -> Grid:
    """Read and validate a JSON grid file.

    Raises:
        GridLoadError: If the file cannot be read, is not JSON, or is malformed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except OSError as e:
        raise GridLoadError(f"Cannot read grid file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise GridLoadError(f"Grid file {path} is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise GridLoadError(f"Grid file {path} is not valid JSON: {e}") from e

    grid = parse_grid_data(payload)
    logger.debug("Loaded %dx%d grid from %s", grid.rows, grid.cols, path)
    return grid


def validate_start_column(grid: Grid, start_column: int) -> None:
    """Reject start columns outside ``[0, cols)``.

    Raises:
        ValueError: With the 1-based range shown to users.
    """
    if not 0 <= start_column < grid.cols:
        raise ValueError(f"Please select a column between 1 and {grid.cols}.")
