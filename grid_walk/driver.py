"""Run driver and schedulers.

The :class:`RunDriver` owns the lifecycle of the current :class:`RunState`:
it is created on :meth:`RunDriver.reset` (loading a fresh grid from the grid
source) and discarded on the next reset. Each :meth:`RunDriver.tick` applies
one :func:`grid_walk.step.tick` and forwards a :class:`TickEvent` to the
renderer callback.

Scheduling is separate from the driver. A scheduler is any callable taking
the driver and calling ``tick`` until the run is no longer active:

* :func:`run_to_completion` ticks back to back (tests, batch use).
* :class:`IntervalScheduler` sleeps ``interval`` seconds between ticks, the
    0.3 s cadence of the interactive walk.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from grid_walk.grid import Grid
from grid_walk.loader import GridLoadError
from grid_walk.position import Position
from grid_walk.run import new_run
from grid_walk.selector import greedy_select_fn
from grid_walk.state import RunState
from grid_walk.step import tick
from grid_walk.types import RunPhase, SelectFn

logger = logging.getLogger(__name__)

MOVE_INTERVAL = 0.3


@dataclass(frozen=True)
class TickEvent:
    """What a renderer needs to redraw after one tick."""

    before: Position
    after: Position
    score: int
    phase: RunPhase


GridSource = Callable[[], Grid]
RendererFn = Callable[[TickEvent], None]
Scheduler = Callable[["RunDriver"], None]


class RunDriver:
    """Owns the current run and advances it one tick at a time."""

    def __init__(
        self,
        grid_source: GridSource,
        renderer: Optional[RendererFn] = None,
        select_fn: SelectFn = greedy_select_fn,
    ):
        """Create a driver with no active run.

        Arguments:
            grid_source: Zero-arg callable returning a validated ``Grid``;
                called on every reset. May raise ``GridLoadError``.
            renderer: Optional callback receiving a ``TickEvent`` per tick.
            select_fn: Move policy for new runs.
        """
        self._grid_source = grid_source
        self._renderer = renderer
        self._select_fn = select_fn
        self.state: Optional[RunState] = None

    @property
    def active(self) -> bool:
        """True while a run exists and has not reached a terminal phase."""
        return self.state is not None and not self.state.is_terminal

    def reset(self, start_column: int, vertical_threshold: int) -> Optional[RunState]:
        """Discard the current run and start a new one.

        Grid load failures are logged and leave no run active.

        Returns:
            RunState | None: The new run, or ``None`` if the grid failed to load.

        Raises:
            ValueError: If ``start_column`` is outside the loaded grid.
        """
        self.state = None
        try:
            grid = self._grid_source()
        except GridLoadError as e:
            logger.error("Error loading grid data: %s", e)
            return None

        self.state = new_run(grid, start_column, vertical_threshold, self._select_fn)
        logger.info(
            "Run started at %s on a %dx%d grid (vertical threshold %d)",
            self.state.position,
            grid.rows,
            grid.cols,
            vertical_threshold,
        )
        return self.state

    def tick(self) -> Optional[TickEvent]:
        """Advance the active run once.

        Returns:
            TickEvent | None: The tick's event, or ``None`` if no run is active.
        """
        if self.state is None or not self.active:
            return None

        before = self.state.position
        self.state = tick(self.state)
        event = TickEvent(
            before=before,
            after=self.state.position,
            score=self.state.score,
            phase=self.state.phase,
        )
        logger.debug(
            "Tick %d: %s -> %s (score %d)",
            self.state.turn,
            before,
            event.after,
            event.score,
        )

        if self._renderer is not None:
            self._renderer(event)
        if self.state.is_terminal:
            logger.info(
                "Run finished (%s) after %d ticks with score %d",
                self.state.phase,
                self.state.turn,
                self.state.score,
            )
        return event

    def run(self, scheduler: Optional[Scheduler] = None) -> Optional[RunState]:
        """Drive the active run with ``scheduler`` (default: back to back)."""
        (scheduler or run_to_completion)(self)
        return self.state

    def start(
        self,
        start_column: int,
        vertical_threshold: int,
        scheduler: Optional[Scheduler] = None,
    ) -> Optional[RunState]:
        """Reset, then run the new run to its end."""
        if self.reset(start_column, vertical_threshold) is None:
            return None
        return self.run(scheduler)


def run_to_completion(driver: RunDriver) -> None:
    """Tick until the driver's run is terminal."""
    while driver.active:
        driver.tick()


class IntervalScheduler:
    """Tick on a fixed cadence until the run ends.

    ``sleep`` is injectable so tests (or a game loop) can replace real time.
    ``max_ticks`` bounds the number of ticks for a single call.
    """

    def __init__(
        self,
        interval: float = MOVE_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
        max_ticks: Optional[int] = None,
    ):
        self.interval = interval
        self._sleep = sleep
        self.max_ticks = max_ticks

    def __call__(self, driver: RunDriver) -> None:
        ticks = 0
        while driver.active and (self.max_ticks is None or ticks < self.max_ticks):
            self._sleep(self.interval)
            driver.tick()
            ticks += 1
