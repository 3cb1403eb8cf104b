#!/usr/bin/env python3
"""
Camera utilities for 2D scene-to-screen transforms.

Scene coordinates are the zoomed positions produced by Body.position (the star at
the origin, +y down as on screen). The camera only adds the viewport centre, a
pan offset and an optional tilt that squashes the y axis for a pseudo-3D view.
Zoom lives in SolarSystemModel because it also drives body sizes.
"""
import math
from typing import Tuple

from .constants import SAFE_COORD_LIMIT, VIEW_HEIGHT, VIEW_WIDTH
from .vector_utils import clamp


class Camera2D:
    """
    Simple 2D camera that maps scene coordinates to screen pixels.
    """

    def __init__(self, pan=(0.0, 0.0), tilt_deg: float = 0.0):
        self.pan = [pan[0], pan[1]]
        self.tilt_deg = clamp(tilt_deg, 0.0, 80.0)
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def set_tilt(self, tilt_deg: float) -> None:
        self.tilt_deg = clamp(tilt_deg, 0.0, 80.0)

    @property
    def _y_factor(self) -> float:
        return math.cos(math.radians(self.tilt_deg))

    def world_to_screen(self, pos: Tuple[float, float]) -> Tuple[float, float]:
        px = pos[0] + self.pan[0] + self.viewport_size[0] / 2
        py = pos[1] * self._y_factor + self.pan[1] + self.viewport_size[1] / 2
        return (px, py)

    def screen_to_world(self, screen: Tuple[float, float]) -> Tuple[float, float]:
        wx = screen[0] - self.viewport_size[0] / 2 - self.pan[0]
        wy = (screen[1] - self.viewport_size[1] / 2 - self.pan[1]) / self._y_factor
        return (wx, wy)

    def pan_pixels(self, dx_pixels, dy_pixels):
        self.pan[0] += dx_pixels
        self.pan[1] += dy_pixels

    def reset(self):
        self.pan = [0.0, 0.0]


def safe_point(pt):
    """Integer pixel for drawing, or None when it falls outside the safe range."""
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None
