"""Marker movement system.

Entering a cell is the only way a run's score and visited set change:

1. The destination is added to ``visited`` (a no-op for the forced upward
    fallback when the cell was already visited).
2. It is appended to ``trail``.
3. Its value is added to ``score``.

Callers decide *whether* a move is allowed; :func:`can_enter` is the check
used for manual moves.
"""

from dataclasses import replace

from grid_walk.position import Position
from grid_walk.state import RunState


def can_enter(state: RunState, next_pos: Position) -> bool:
    """Return True if ``next_pos`` is on-grid and not yet visited."""
    return state.grid.in_bounds(next_pos) and next_pos not in state.visited


def movement_system(state: RunState, next_pos: Position) -> RunState:
    """Move the marker into ``next_pos`` and collect its value.

    Args:
        state (RunState): Current state.
        next_pos (Position): On-grid destination.

    Returns:
        RunState: New state with updated position, visited set, trail and score.
    """
    return replace(
        state,
        position=next_pos,
        visited=state.visited.add(next_pos),
        trail=state.trail.append(next_pos),
        score=state.score + state.grid.value(next_pos),
    )
