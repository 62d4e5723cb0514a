#!/usr/bin/env python3
"""
Camera utilities for top-down world-to-screen transforms.

The viewport looks down the y axis: world x maps to screen x and world z to
screen y. World units are kilometers.
"""
from typing import Iterable, Optional, Tuple

from .constants import (
    DEFAULT_KM_PER_PIXEL,
    MIN_KM_PER_PIXEL,
    MAX_KM_PER_PIXEL,
    VIEW_WIDTH,
    VIEW_HEIGHT,
)
from .vector_utils import Vec3, clamp


class Camera2D:
    """
    Simple top-down camera that maps world (x, z) kilometers to screen pixels.
    """

    def __init__(self, center=(0.0, 0.0), km_per_pixel=DEFAULT_KM_PER_PIXEL):
        self.center = [center[0], center[1]]
        self.kmpp = km_per_pixel
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def world_to_screen(self, pos: Vec3) -> Tuple[int, int]:
        cx, cz = self.center
        px = (pos[0] - cx) / self.kmpp + self.viewport_size[0] / 2
        py = (pos[2] - cz) / self.kmpp + self.viewport_size[1] / 2
        return (int(px), int(py))

    def screen_to_world(self, screen: Tuple[int, int]) -> Vec3:
        cx, cz = self.center
        wx = (screen[0] - self.viewport_size[0] / 2) * self.kmpp + cx
        wz = (screen[1] - self.viewport_size[1] / 2) * self.kmpp + cz
        return (wx, 0.0, wz)

    def zoom(self, factor, pivot_screen: Optional[Tuple[int, int]] = None):
        factor = clamp(factor, 0.05, 20.0)
        before = None
        if pivot_screen is not None:
            before = self.screen_to_world(pivot_screen)
        self.kmpp = clamp(self.kmpp * (1.0 / factor), MIN_KM_PER_PIXEL, MAX_KM_PER_PIXEL)
        if pivot_screen is not None and before is not None:
            after = self.screen_to_world(pivot_screen)
            self.center[0] += (before[0] - after[0])
            self.center[1] += (before[2] - after[2])

    def pan_pixels(self, dx_pixels, dy_pixels):
        self.center[0] -= dx_pixels * self.kmpp
        self.center[1] -= dy_pixels * self.kmpp

    def fit_radius(self, radius_km: float, margin: float = 1.15) -> None:
        """Center on the origin and zoom so a circle of `radius_km` fits the viewport."""
        self.center = [0.0, 0.0]
        if radius_km <= 0:
            self.kmpp = DEFAULT_KM_PER_PIXEL
            return
        half = max(min(self.viewport_size) / 2, 1)
        self.kmpp = clamp(radius_km * margin / half, MIN_KM_PER_PIXEL, MAX_KM_PER_PIXEL)

    def fit_orbits(self, orbital_radii: Iterable[Optional[float]]) -> None:
        self.fit_radius(max((r for r in orbital_radii if r), default=0.0))
