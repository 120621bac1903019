from dataclasses import replace

import pytest
from pyrsistent import pset

from grid_walk.actions import Action
from grid_walk.examples.grids import generate
from grid_walk.position import Position
from grid_walk.run import new_run
from grid_walk.step import step, tick, walk_to_top
from grid_walk.types import RunPhase
from tests.test_utils import (
    LATERAL_GRID,
    make_grid,
    make_run_state,
    never_select_fn,
)


def test_new_run_starts_on_bottom_row() -> None:
    state = new_run(make_grid(LATERAL_GRID), start_column=0, vertical_threshold=5)
    assert state.position == Position(2, 0)
    assert state.score == 0
    assert state.turn == 0
    assert len(state.visited) == 0
    assert list(state.trail) == [Position(2, 0)]
    assert state.phase == RunPhase.RUNNING


def test_new_run_rejects_off_grid_column() -> None:
    with pytest.raises(ValueError):
        new_run(make_grid(LATERAL_GRID), start_column=3, vertical_threshold=5)


def test_single_row_grid_is_already_at_top() -> None:
    state = new_run(make_grid([[5, 2, 9]]), start_column=0, vertical_threshold=100)
    assert state.phase == RunPhase.TOP
    assert tick(state) is state


def test_tick_sequence_with_lateral_moves() -> None:
    state = new_run(make_grid(LATERAL_GRID), start_column=0, vertical_threshold=5)
    expected = [
        ((2, 1), 1),  # up 8 >= 5, right 1 improves
        ((2, 2), 5),  # up 8 >= 5, start cell (9) not lower, right 4
        ((1, 2), 7),  # up 2 < 5
        ((0, 2), 10),  # up 3 < 5, top reached
    ]
    for pos, score in expected:
        state = tick(state)
        assert state.position == Position(*pos)
        assert state.score == score
    assert state.phase == RunPhase.TOP
    assert state.turn == 4
    assert list(state.trail) == [
        Position(2, 0),
        Position(2, 1),
        Position(2, 2),
        Position(1, 2),
        Position(0, 2),
    ]
    # terminal states are left untouched
    assert tick(state) is state


def test_first_tick_scores_exactly_the_entered_cell() -> None:
    state = new_run(
        make_grid([[1, 1, 1], [5, 2, 9]]), start_column=0, vertical_threshold=100
    )
    state = tick(state)
    assert state.position == Position(0, 0)
    assert state.score == 1
    assert state.phase == RunPhase.TOP


def test_fallback_moves_up_through_visited_cell() -> None:
    state = make_run_state(
        rows=[[1], [2], [3]], position=(2, 0), visited=[(1, 0)]
    )
    state = tick(state)
    assert state.position == Position(1, 0)
    assert state.score == 2
    assert state.phase == RunPhase.RUNNING
    state = tick(state)
    assert state.position == Position(0, 0)
    assert state.score == 3
    assert state.phase == RunPhase.TOP


def test_fallback_used_when_selector_finds_nothing() -> None:
    state = make_run_state(
        rows=LATERAL_GRID, position=(2, 1), select_fn=never_select_fn
    )
    state = tick(state)
    assert state.position == Position(1, 1)
    assert state.score == 8


def test_blocked_when_fallback_impossible() -> None:
    state = make_run_state(
        rows=[[1, 2]], position=(0, 0), select_fn=never_select_fn
    )
    state = tick(state)
    assert state.phase == RunPhase.BLOCKED
    assert state.message
    assert tick(state) is state


def test_walk_to_top_matches_ticks() -> None:
    start = new_run(make_grid(LATERAL_GRID), start_column=0, vertical_threshold=5)
    walked = walk_to_top(start)
    ticked = start
    while not ticked.is_terminal:
        ticked = tick(ticked)
    assert walked == ticked


def test_walk_to_top_has_no_fallback() -> None:
    state = make_run_state(
        rows=LATERAL_GRID, position=(2, 1), select_fn=never_select_fn
    )
    state = walk_to_top(state)
    assert state.phase == RunPhase.BLOCKED
    assert state.position == Position(2, 1)
    assert state.score == 0


def test_start_cell_can_be_reentered_once() -> None:
    # start (2,1): up 9 >= 5 so right (1) wins; from (2,2) up 9 >= 5 and the
    # unvisited start cell (2) is the lowest candidate
    rows = [
        [1, 1, 1],
        [9, 9, 9],
        [9, 2, 1],
    ]
    state = new_run(make_grid(rows), start_column=1, vertical_threshold=5)
    state = tick(state)
    assert state.position == Position(2, 2)
    state = tick(state)
    assert state.position == Position(2, 1)
    assert state.score == 3
    state = tick(state)
    # right is visited and left (9) does not beat up (9)
    assert state.position == Position(1, 1)


@pytest.mark.parametrize("seed", range(12))
@pytest.mark.parametrize("threshold", [-5, 0, 4, 100])
def test_runs_terminate_and_score_entered_cells(seed: int, threshold: int) -> None:
    grid = generate(rows=6, cols=7, low=-5, high=9, seed=seed)
    for column in range(grid.cols):
        state = new_run(grid, start_column=column, vertical_threshold=threshold)
        bound = grid.rows * grid.cols + grid.rows
        for _ in range(bound):
            if state.is_terminal:
                break
            before = state
            state = tick(state)
            # never re-selects a visited cell; rows never increase
            assert state.position not in before.visited
            assert state.position.row <= before.position.row
            assert state.score - before.score == grid.value(state.position)
        assert state.phase == RunPhase.TOP
        entered = list(state.trail)[1:]
        assert state.turn == len(entered)
        assert state.score == sum(grid.value(p) for p in entered)
        assert set(entered) == set(state.visited)


@pytest.mark.parametrize(
    "action, expected, score",
    [
        (Action.UP, (1, 1), 8),
        (Action.LEFT, (2, 0), 9),
        (Action.RIGHT, (2, 2), 4),
    ],
)
def test_manual_moves(action: Action, expected: tuple[int, int], score: int) -> None:
    state = new_run(make_grid(LATERAL_GRID), start_column=1, vertical_threshold=5)
    state = step(state, action)
    assert state.position == Position(*expected)
    assert state.score == score
    assert state.turn == 1


def test_manual_move_into_visited_or_off_grid_consumes_turn() -> None:
    state = new_run(make_grid(LATERAL_GRID), start_column=0, vertical_threshold=5)
    state = step(state, Action.LEFT)
    assert state.position == Position(2, 0)
    assert state.turn == 1
    state = replace(state, visited=pset([Position(1, 0)]))
    state = step(state, Action.UP)
    assert state.position == Position(2, 0)
    assert state.turn == 2
    assert state.score == 0


def test_greedy_action_delegates_to_tick() -> None:
    state = new_run(make_grid(LATERAL_GRID), start_column=0, vertical_threshold=5)
    assert step(state, Action.GREEDY) == tick(state)


def test_invalid_action_rejected() -> None:
    state = new_run(make_grid(LATERAL_GRID), start_column=0, vertical_threshold=5)
    with pytest.raises(ValueError):
        step(state, "DOWN")  # type: ignore[arg-type]
