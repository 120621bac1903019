"""Run reducers.

:func:`tick` is the step function a scheduler calls on every timer beat: it
asks the run's selector for a move, falls back to a forced upward move when
the selector has nothing, and returns a *new* :class:`RunState`.

:func:`step` applies an explicit :class:`grid_walk.actions.Action` (manual
moves, or ``GREEDY`` to delegate to :func:`tick`), and :func:`walk_to_top`
runs greedy moves back to back without the fallback.

All reducers return terminal states unchanged.
"""

from dataclasses import replace
from typing import Optional

from grid_walk.actions import Action, MOVE_ACTIONS
from grid_walk.moves import neighbor
from grid_walk.position import Position
from grid_walk.state import RunState
from grid_walk.systems.movement import can_enter, movement_system
from grid_walk.systems.terminal import blocked_system, top_system


def tick(state: RunState) -> RunState:
    """Advance the run by one timer beat.

    If the selector returns no move and the marker is below the top row, the
    marker is pushed straight up even if that cell was visited. When even that
    is impossible the run becomes ``BLOCKED``.

    Args:
        state (RunState): Previous run state.

    Returns:
        RunState: Next state, or ``state`` itself if it is already terminal.
    """
    if state.is_terminal:
        return state

    next_pos: Optional[Position] = state.select_fn(state)
    if next_pos is None:
        next_pos = _fallback_position(state)
    if next_pos is None:
        return blocked_system(state)

    return _after_step(movement_system(state, next_pos))


def step(state: RunState, action: Action) -> RunState:
    """Apply one action.

    Directional actions move the marker if the neighbor is on-grid and
    unvisited; otherwise the turn is consumed without moving.

    Raises:
        ValueError: If the action is not recognized.
    """
    if action == Action.GREEDY:
        return tick(state)
    if action not in MOVE_ACTIONS:
        raise ValueError("Action is not valid")

    if state.is_terminal:
        return state

    next_pos = neighbor(state.position, action)
    if can_enter(state, next_pos):
        state = movement_system(state, next_pos)
    return _after_step(state)


def walk_to_top(state: RunState) -> RunState:
    """Apply selector moves until the top row is reached or nothing is chosen.

    Unlike :func:`tick` there is no forced upward fallback: a ``None`` from
    the selector ends the run as ``BLOCKED``.
    """
    while not state.is_terminal:
        next_pos = state.select_fn(state)
        if next_pos is None:
            return blocked_system(state)
        state = _after_step(movement_system(state, next_pos))
    return state


def _fallback_position(state: RunState) -> Optional[Position]:
    """Cell straight above the marker, ignoring the visited set."""
    if state.position.row <= 0:
        return None
    return neighbor(state.position, Action.UP)


def _after_step(state: RunState) -> RunState:
    state = replace(state, turn=state.turn + 1)
    return top_system(state)
