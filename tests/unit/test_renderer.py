from dataclasses import replace

from pyrsistent import pset

from grid_walk.position import Position
from grid_walk.renderer import BoardRenderer, render
from grid_walk.renderer.board import (
    MARKER_COLOR,
    cell_size_for,
    dim,
    value_to_color,
)
from tests.test_utils import make_run_state


def test_image_size_follows_cell_size() -> None:
    state = make_run_state(rows=[[1, 2, 3], [4, 5, 6]], position=(1, 0))
    img = render(state, resolution=100)
    assert img.mode == "RGBA"
    assert img.size == (99, 66)
    assert BoardRenderer(resolution=100).image_shape(2, 3) == (66, 99)


def test_cell_size_never_zero() -> None:
    assert cell_size_for(cols=50, resolution=10) == 1


def test_marker_cell_highlighted() -> None:
    state = make_run_state(rows=[[1, 2], [3, 4]], position=(1, 1))
    img = render(state, resolution=100)
    # corner pixel inside the marker cell, away from outline and label
    assert img.getpixel((52, 52)) == (*MARKER_COLOR, 255)


def test_visited_cells_dimmed() -> None:
    state = make_run_state(rows=[[1, 1], [9, 9]], position=(1, 0))
    state = replace(state, visited=pset([Position(0, 1)]))
    img = render(state, resolution=100)
    fresh = img.getpixel((2, 2))
    visited = img.getpixel((52, 2))
    base = value_to_color(1, 1, 9)
    assert fresh == (*base, 255)
    assert visited == (*dim(base), 255)


def test_value_colors_span_green_to_red() -> None:
    low_r, low_g, _ = value_to_color(0, 0, 10)
    high_r, high_g, _ = value_to_color(10, 0, 10)
    assert low_g > low_r
    assert high_r > high_g
    assert value_to_color(3, 3, 3) == value_to_color(7, 7, 7)
