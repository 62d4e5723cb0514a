#!/usr/bin/env python3
"""
General utilities for the Solar System Simulator: input parsing and the
formatting used by the body info panel.
"""
import math
from typing import List, Optional, Tuple

from .data_models import BodySnapshot, SystemSnapshot


def try_float(val) -> Optional[float]:
    try:
        out = float(val)
    except (TypeError, ValueError):
        return None
    return out if math.isfinite(out) else None


def format_mass(mass: float) -> str:
    if mass >= 1e24:
        return f"{mass / 1e24:.3f} x 10^24"
    if mass >= 1e21:
        return f"{mass / 1e21:.3f} x 10^21"
    return f"{mass:.3e}"


def format_radius(radius: float) -> str:
    return f"{radius:.1f}" if radius >= 10000 else f"{radius:.2f}"


def format_distance(distance: float) -> str:
    if distance >= 1e9:
        return f"{distance / 1e9:.2f} x 10^9"
    if distance >= 1e6:
        return f"{distance / 1e6:.2f} x 10^6"
    return f"{distance:.0f}"


TITLES = {"star": "Star", "planet": "Planet", "moon": "Moon", "body": "Body"}


def describe_body(body: BodySnapshot, snapshot: SystemSnapshot) -> Tuple[str, List[Tuple[str, str]]]:
    """
    Title and (label, value) rows for the info panel.

    Moon rows include the parent's name and the live distance to it, both
    resolved through `parent_index` in the same snapshot.
    """
    title = f"{TITLES.get(body.kind, 'Body')}: {body.name}"
    rows = [
        ("Mass", f"{format_mass(body.mass)} kg"),
        ("Radius", f"{format_radius(body.radius)} km"),
    ]
    if body.luminosity is not None:
        rows.append(("Temperature", f"{body.temperature:g} K"))
        rows.append(("Luminosity", f"{body.luminosity:.2e} W"))
    if body.orbital_radius is not None:
        rows.append(("Orbital radius", f"{format_distance(body.orbital_radius)} km"))
        rows.append(("Orbital period", f"{body.orbital_period:g} days"))
        rows.append(("Angle", f"{math.degrees(body.current_angle):.1f} deg"))
    if body.parent_index is not None:
        parent = snapshot.bodies[body.parent_index]
        dx = body.position[0] - parent.position[0]
        dz = body.position[2] - parent.position[2]
        rows.append(("Parent planet", parent.name))
        rows.append(("Distance to planet", f"{math.hypot(dx, dz):.2f} km"))
    else:
        rows.append(("Position X", f"{body.position[0]:.2f} km"))
        rows.append(("Position Z", f"{body.position[2]:.2f} km"))
    return title, rows
