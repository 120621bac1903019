import colorsys
from functools import lru_cache
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from grid_walk.state import RunState


DEFAULT_RESOLUTION = 640

RGB = Tuple[int, int, int]

BACKGROUND_COLOR: Tuple[int, int, int, int] = (128, 128, 128, 255)
GRID_LINE_COLOR: RGB = (60, 60, 60)
MARKER_COLOR: RGB = (30, 90, 200)
TEXT_COLOR: RGB = (0, 0, 0)
MARKER_TEXT_COLOR: RGB = (255, 255, 255)
VISITED_DIM = 0.45
MARKER_LABEL = "@"


def cell_size_for(cols: int, resolution: int) -> int:
    """Square cell edge in pixels for a grid ``cols`` wide (at least 1)."""
    return max(resolution // cols, 1)


@lru_cache(maxsize=2048)
def value_to_color(value: int, low: int, high: int) -> RGB:
    """
    Deterministically map a cell value to an RGB colour: low values green,
    high values red, hue interpolated in between.
    """
    t = 0.5 if high == low else (value - low) / (high - low)
    h = (1.0 - t) / 3.0
    r, g, b = colorsys.hsv_to_rgb(h, 0.55, 0.95)
    return int(r * 255), int(g * 255), int(b * 255)


def dim(color: RGB, amount: float = VISITED_DIM) -> RGB:
    """Blend ``color`` toward grey by ``amount`` in [0, 1]."""
    grey = 128
    r, g, b = color
    return (
        int(r + (grey - r) * amount),
        int(g + (grey - g) * amount),
        int(b + (grey - b) * amount),
    )


def render(
    state: RunState,
    resolution: int = DEFAULT_RESOLUTION,
    font: Optional[ImageFont.ImageFont] = None,
) -> Image.Image:
    """
    Renders a run as a PIL Image, one labelled square per cell.
    """
    grid = state.grid
    cell_size = cell_size_for(grid.cols, resolution)
    img = Image.new(
        "RGBA", (grid.cols * cell_size, grid.rows * cell_size), BACKGROUND_COLOR
    )
    draw = ImageDraw.Draw(img)
    if font is None:
        font = ImageFont.load_default()

    low, high = grid.value_range()

    for pos, value in grid.cells():
        x0, y0 = pos.col * cell_size, pos.row * cell_size
        if pos == state.position:
            fill, label, text_color = MARKER_COLOR, MARKER_LABEL, MARKER_TEXT_COLOR
        else:
            fill = value_to_color(value, low, high)
            if pos in state.visited:
                fill = dim(fill)
            label, text_color = str(value), TEXT_COLOR

        draw.rectangle(
            [x0, y0, x0 + cell_size - 1, y0 + cell_size - 1],
            fill=fill,
            outline=GRID_LINE_COLOR,
        )
        left, top, right, bottom = draw.textbbox((0, 0), label, font=font)
        tx = x0 + (cell_size - (right - left)) // 2 - left
        ty = y0 + (cell_size - (bottom - top)) // 2 - top
        draw.text((tx, ty), label, fill=text_color, font=font)

    return img


class BoardRenderer:
    """Keeps render settings and the font between frames."""

    def __init__(self, resolution: int = DEFAULT_RESOLUTION):
        self.resolution = resolution
        self._font = ImageFont.load_default()

    def render(self, state: RunState) -> Image.Image:
        return render(state, resolution=self.resolution, font=self._font)

    def image_shape(self, rows: int, cols: int) -> Tuple[int, int]:
        """(height, width) in pixels of frames for a ``rows`` x ``cols`` grid."""
        cell_size = cell_size_for(cols, self.resolution)
        return rows * cell_size, cols * cell_size
