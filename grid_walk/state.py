"""Immutable run state.

This module defines the frozen :class:`RunState` object that represents one
walk at a single tick. The reducer functions in :mod:`grid_walk.step` take a
previous ``RunState`` and return a *new* one; nothing is mutated in place.
This makes a run deterministic, trivially resettable (drop the object) and
easy to drive from any scheduler.

Design notes:

* ``visited`` is a persistent set (``pyrsistent.PSet``) that only grows during
    a run. The start cell is not in it until the marker re-enters it.
* ``trail`` records every occupied position in order, start first, so
    ``trail[1:]`` are exactly the cells that contributed to ``score``.
* ``phase`` is ``RUNNING`` until the top row is reached (``TOP``) or no move
    can be made (``BLOCKED``). Reducers short-circuit on terminal phases.
"""

from dataclasses import dataclass
from typing import Any, Optional
from pyrsistent import pmap, pset, pvector
from pyrsistent.typing import PMap, PSet, PVector

from grid_walk.grid import Grid
from grid_walk.position import Position
from grid_walk.types import RunPhase, SelectFn


@dataclass(frozen=True)
class RunState:
    """Immutable walk state.

    Attributes:
        grid (Grid): Cell values for this run.
        position (Position): Current marker position.
        vertical_threshold (int): Up-move bias handed to the selector.
        select_fn (SelectFn): Next-move policy used by ``tick``.
        visited (PSet[Position]): Cells entered during this run.
        trail (PVector[Position]): Occupied positions in order, start first.
        score (int): Sum of the values of every entered cell.
        turn (int): Number of ticks / actions applied (0-based).
        phase (RunPhase): Running or terminal marker.
        message (str | None): Optional informational / terminal message.
    """

    grid: Grid
    position: Position
    vertical_threshold: int
    select_fn: "SelectFn"

    visited: PSet[Position] = pset()
    trail: PVector[Position] = pvector()

    # Status
    score: int = 0
    turn: int = 0
    phase: RunPhase = RunPhase.RUNNING
    message: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.phase != RunPhase.RUNNING

    @property
    def description(self) -> PMap[str, Any]:
        """Compact summary of the scalar fields for diagnostics."""
        return pmap(
            {
                "position": (self.position.row, self.position.col),
                "score": self.score,
                "turn": self.turn,
                "phase": str(self.phase),
                "visited": len(self.visited),
                "vertical_threshold": self.vertical_threshold,
            }
        )
