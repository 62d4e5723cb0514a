#!/usr/bin/env python3
"""
Vector and angle helpers for 3D positions.

Positions are plain (x, y, z) tuples. Orbits lie in the x–z plane, so the
orbital offset always has y == 0.
"""
import math
from typing import Sequence, Tuple

from .constants import TWO_PI

Vec3 = Tuple[float, float, float]

ORIGIN: Vec3 = (0.0, 0.0, 0.0)


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def as_vec3(values: Sequence[float]) -> Vec3:
    """Coerce a 3-sequence of reals into a float tuple."""
    if len(values) != 3:
        raise ValueError(f"expected 3 components, got {len(values)}")
    return (float(values[0]), float(values[1]), float(values[2]))


def vec_add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def vec_sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def vec_scale(a: Vec3, s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)


def vec_len(a: Vec3) -> float:
    return math.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def normalize_angle(angle: float) -> float:
    """
    Wrap an angle in radians into [0, 2π).

    math.fmod keeps the sign of the dividend, so negative results are shifted
    up by one turn. A tiny negative input can round to exactly 2π after the
    shift; that case folds back to 0.
    """
    wrapped = math.fmod(angle, TWO_PI)
    if wrapped < 0:
        wrapped += TWO_PI
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped


def angular_velocity(period: float) -> float:
    """Radians per day for a circular orbit with the given period in days."""
    return TWO_PI / period


def orbit_offset(orbital_radius: float, angle: float) -> Vec3:
    """Offset from an orbit's center at the given phase angle."""
    return (orbital_radius * math.cos(angle), 0.0, orbital_radius * math.sin(angle))
