"""Neighbor lookup for directional actions.

The walk only ever goes up or sideways, so there is no ``DOWN`` offset.
"""

from typing import Dict, Tuple
from grid_walk.actions import Action
from grid_walk.position import Position


DIRECTION_OFFSETS: Dict[Action, Tuple[int, int]] = {
    Action.UP: (-1, 0),
    Action.LEFT: (0, -1),
    Action.RIGHT: (0, 1),
}


def neighbor(position: Position, action: Action) -> Position:
    """Adjacent cell in the direction of ``action``.

    Returns the raw coordinate without bounds checking; callers decide what an
    off-grid neighbor means.

    Raises:
        ValueError: If ``action`` is not a directional action.
    """
    if action not in DIRECTION_OFFSETS:
        raise ValueError(f"Action {action!r} has no direction")
    drow, dcol = DIRECTION_OFFSETS[action]
    return position.offset(drow, dcol)
