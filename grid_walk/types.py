"""Common type aliases and enumerations.

``SelectFn`` is the central extension point stored on
:class:`grid_walk.state.RunState`: it decides where the marker goes next.
"""

from enum import StrEnum, auto
from typing import Callable, Optional, TYPE_CHECKING


# Forward declarations to avoid circular imports:
if TYPE_CHECKING:
    from grid_walk.position import Position
    from grid_walk.state import RunState

CellValue = int

SelectFn = Callable[["RunState"], Optional["Position"]]


class RunPhase(StrEnum):
    """Lifecycle phase of a run (reflected in serialized observations)."""

    RUNNING = auto()
    TOP = auto()
    BLOCKED = auto()
