"""Gymnasium environment wrapper for Grid Walk.

Provides a structured observation that pairs a rendered RGBA image of the
board with an info dictionary (marker position, run status, run config).
Reward is the *negative* score delta per step: the greedy walk minimizes the
values it collects, so cheaper cells earn more reward. ``terminated`` is
``True`` once the top row is reached, ``truncated`` when the run is blocked.

Observation schema:

``{"image": np.ndarray(H,W,4), "info": {"position": {...}, "status": {...}, "config": {...}}}``

Usage:

``env = GridWalkEnv(rows=9, cols=9, vertical_threshold=5)``

Customization hooks:
    * ``initial_grid_fn``: Callable returning a ``Grid`` (default: seeded generator).
    * ``select_fn``: Policy used for the ``GREEDY`` action.
    * ``start_column`` / ``vertical_threshold``: may also be overridden per
      episode through ``reset(options=...)``.
"""

import inspect

import gymnasium as gym
import numpy as np
from typing import Any, Callable, Dict, Optional, Tuple

from PIL.Image import Image as PILImage

from grid_walk.actions import Action
from grid_walk.examples.grids import generate
from grid_walk.grid import Grid
from grid_walk.renderer.board import DEFAULT_RESOLUTION, BoardRenderer
from grid_walk.run import new_run
from grid_walk.selector import greedy_select_fn
from grid_walk.state import RunState
from grid_walk.step import step
from grid_walk.types import RunPhase, SelectFn

ObsType = Dict[str, Any]


def accepts_seed(fn: Callable[..., Any]) -> bool:
    """Return True if ``fn`` takes a ``seed`` keyword (or arbitrary kwargs)."""
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return False
    return any(
        p.name == "seed" or p.kind == inspect.Parameter.VAR_KEYWORD for p in params
    )


def position_observation_dict(state: RunState) -> Dict[str, Any]:
    return {"row": int(state.position.row), "col": int(state.position.col)}


def status_observation_dict(state: RunState) -> Dict[str, Any]:
    """Status portion of observation (score, phase, turn)."""
    return {
        "score": int(state.score),
        "phase": str(state.phase),
        "turn": int(state.turn),
    }


def config_observation_dict(state: RunState) -> Dict[str, Any]:
    """Config portion of observation (dimensions, threshold, selector name)."""
    select_fn_name = getattr(state.select_fn, "__name__", str(state.select_fn))
    return {
        "rows": state.grid.rows,
        "cols": state.grid.cols,
        "vertical_threshold": int(state.vertical_threshold),
        "select_fn": select_fn_name,
    }


class GridWalkEnv(gym.Env[ObsType, np.integer]):
    """Gymnasium ``Env`` implementation for the grid walk.

    The action space is ``Discrete(len(Action))``; see :mod:`grid_walk.actions`.
    """

    metadata = {"render_modes": ["human", "texture"]}

    def __init__(
        self,
        render_mode: str = "texture",
        render_resolution: int = DEFAULT_RESOLUTION,
        initial_grid_fn: Callable[..., Grid] = generate,
        start_column: Optional[int] = None,
        vertical_threshold: int = 5,
        select_fn: SelectFn = greedy_select_fn,
        **kwargs: Any,
    ):
        """Create a new environment instance.

        Arguments:
            render_mode: "texture" to return PIL image frames, "human" to open window.
            render_resolution: Width (pixels) of rendered image; height is scaled.
            initial_grid_fn: Callable returning the ``Grid`` for a new episode.
            start_column: 0-based start column; defaults to the middle column.
            vertical_threshold: Up-move bias for the ``GREEDY`` action.
            select_fn: Move policy for the ``GREEDY`` action.
            **kwargs: Forwarded to ``initial_grid_fn`` (e.g. rows, cols, seed).
        """
        from gymnasium import spaces

        self._initial_grid_fn = initial_grid_fn
        self._initial_grid_kwargs = kwargs
        self._start_column = start_column
        self._vertical_threshold = vertical_threshold
        self._select_fn = select_fn

        # Runtime state
        self.state: Optional[RunState] = None

        # The first grid sizes the image space; reset() uses it for episode one.
        self._pending_grid: Optional[Grid] = self._make_grid(seed=None)
        self.rows: int = self._pending_grid.rows
        self.cols: int = self._pending_grid.cols
        self._render_mode = render_mode
        self._renderer = BoardRenderer(resolution=render_resolution)
        render_height, render_width = self._renderer.image_shape(self.rows, self.cols)

        def int_box(low: int, high: int) -> spaces.Box:
            return spaces.Box(
                low=np.array(low, dtype=np.int64),
                high=np.array(high, dtype=np.int64),
                shape=(),
                dtype=np.int64,
            )

        text_space_short = spaces.Text(max_length=32)
        text_space_medium = spaces.Text(max_length=128)

        self.observation_space = spaces.Dict(
            {
                "image": spaces.Box(
                    low=0,
                    high=255,
                    shape=(render_height, render_width, 4),
                    dtype=np.uint8,
                ),
                "info": spaces.Dict(
                    {
                        "position": spaces.Dict(
                            {
                                "row": int_box(0, 10_000),
                                "col": int_box(0, 10_000),
                            }
                        ),
                        "status": spaces.Dict(
                            {
                                "score": int_box(-1_000_000_000, 1_000_000_000),
                                "phase": text_space_short,  # "running" / "top" / "blocked"
                                "turn": int_box(0, 1_000_000_000),
                            }
                        ),
                        "config": spaces.Dict(
                            {
                                "rows": int_box(1, 10_000),
                                "cols": int_box(1, 10_000),
                                "vertical_threshold": int_box(
                                    -1_000_000_000, 1_000_000_000
                                ),
                                "select_fn": text_space_medium,
                            }
                        ),
                    }
                ),
            }
        )

        self.action_space = spaces.Discrete(len(Action))

        # Initialize first episode
        self.reset()

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None
    ) -> Tuple[ObsType, Dict[str, object]]:
        """Start a new episode.

        Arguments:
            seed: If given, forwarded to ``initial_grid_fn`` as ``seed`` when it
                accepts one; otherwise only the Gymnasium RNG is seeded.
            options: May contain ``start_column`` and ``vertical_threshold``.

        Returns:
            Observation dict and empty info dict per Gymnasium API.
        """
        super().reset(seed=seed)
        options = options or {}
        if seed is None and self._pending_grid is not None:
            grid = self._pending_grid
        else:
            grid = self._make_grid(seed=seed)
        self._pending_grid = None

        start_column = options.get("start_column", self._start_column)
        if start_column is None:
            start_column = grid.cols // 2
        vertical_threshold = options.get("vertical_threshold", self._vertical_threshold)

        self.state = new_run(grid, start_column, vertical_threshold, self._select_fn)
        return self._get_obs(), self._get_info()

    def _make_grid(self, seed: Optional[int]) -> Grid:
        grid_kwargs = dict(self._initial_grid_kwargs)
        if seed is not None and accepts_seed(self._initial_grid_fn):
            grid_kwargs["seed"] = seed
        return self._initial_grid_fn(**grid_kwargs)

    def step(
        self, action: np.integer
    ) -> Tuple[ObsType, float, bool, bool, Dict[str, object]]:
        """Apply one environment step.

        Arguments:
            action: Integer index into the ``Action`` enum.

        Returns:
            (observation, reward, terminated, truncated, info)
        """
        assert self.state is not None

        if not 0 <= action < len(Action):
            raise ValueError("Invalid action:", action)
        step_action: Action = [a for a in Action][int(action)]

        prev_score = self.state.score
        self.state = step(self.state, step_action)
        reward = float(prev_score - self.state.score)
        terminated = self.state.phase == RunPhase.TOP
        truncated = self.state.phase == RunPhase.BLOCKED
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self, mode: Optional[str] = None) -> Optional[PILImage]:  # type: ignore
        """Render the current state.

        Args:
            mode: "human" to display, "texture" to return PIL image. Defaults to
                instance's configured render mode.
        """
        render_mode = mode or self._render_mode
        assert self.state is not None
        img = self._renderer.render(self.state)
        if render_mode == "human":
            img.show()
            return None
        elif render_mode == "texture":
            return img
        else:
            raise NotImplementedError(f"Render mode '{render_mode}' not supported.")

    def state_info(self) -> Dict[str, Dict[str, Any]]:
        """Return structured ``info`` sub-dict used in observations."""
        assert self.state is not None
        return {
            "position": position_observation_dict(self.state),
            "status": status_observation_dict(self.state),
            "config": config_observation_dict(self.state),
        }

    def _get_obs(self) -> ObsType:
        assert self.state is not None
        img_np = np.array(self._renderer.render(self.state))
        return {"image": img_np, "info": self.state_info()}

    def _get_info(self) -> Dict[str, object]:
        """Return the step info (empty placeholder for compatibility)."""
        return {}

    def close(self) -> None:
        pass
