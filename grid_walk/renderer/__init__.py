"""Rendering subpackage.

Turns immutable ``RunState`` snapshots into Pillow images:

* One square cell per grid value, coloured on a green (low) to red (high)
    hue ramp over the grid's value range.
* Visited cells dimmed, the marker cell highlighted and labelled ``@``.

See :mod:`grid_walk.renderer.board` for the drawing routines.
"""

from .board import BoardRenderer, DEFAULT_RESOLUTION, render

__all__ = ["BoardRenderer", "DEFAULT_RESOLUTION", "render"]
