"""Terminal condition systems.

Set ``state.phase`` exactly once when the run ends, either because the marker
reached the top row or because nothing moved it. Other reducers short-circuit
once the phase is terminal.
"""

from dataclasses import replace
from grid_walk.state import RunState
from grid_walk.types import RunPhase


def top_system(state: RunState) -> RunState:
    """Mark the run finished once the marker stands on row 0."""
    if state.is_terminal or state.position.row > 0:
        return state
    return replace(state, phase=RunPhase.TOP, message="Reached the top row")


def blocked_system(state: RunState) -> RunState:
    """Mark the run blocked (idempotent on terminal states)."""
    if state.is_terminal:
        return state
    return replace(state, phase=RunPhase.BLOCKED, message="No move available")
