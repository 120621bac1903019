"""Action enumerations.

Defines the human readable :class:`Action` (string enum) used by the reducer
and a stable integer :class:`GymAction` mapping for Gymnasium compatibility.

``MOVE_ACTIONS`` is the canonical ordered list of directional actions. The
order matters: it is the order in which the greedy selector looks at
candidates (up first, then left, then right).
"""

from enum import IntEnum, StrEnum, auto


class Action(StrEnum):
    """String enum of marker actions.

    Members:
        UP, LEFT, RIGHT: Manual single-cell moves.
        GREEDY: Let the run's selector pick the move (one timer tick).
    """

    UP = auto()
    LEFT = auto()
    RIGHT = auto()
    GREEDY = auto()


MOVE_ACTIONS = [Action.UP, Action.LEFT, Action.RIGHT]


class GymAction(IntEnum):
    """Stable integer mapping for integration with Gymnasium ``Discrete`` spaces."""

    UP = 0  # start at 0 for explicitness
    LEFT = auto()
    RIGHT = auto()
    GREEDY = auto()
