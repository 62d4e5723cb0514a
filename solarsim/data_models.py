#!/usr/bin/env python3
"""
Snapshot data models shared between the simulation, rendering, and UI.

A snapshot is an immutable copy of every body's state taken at a step boundary.
The simulation thread produces them; renderers and the control window only
ever read snapshots, never the live bodies.

Units
- position is in kilometers [km], mass in kilograms [kg], radius in kilometers [km].
- orbital_period is in simulated days; current_angle in radians.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

Vec3 = Tuple[float, float, float]
Color = Tuple[int, int, int]


@dataclass(frozen=True)
class BodySnapshot:
    """
    State of one body at a step boundary.

    Fields:
    - index: Slot of the body in its SolarSystem
    - kind: "body", "star", "planet" or "moon"
    - parent_index: Slot of the parent planet for moons, else None
    The optional fields are only set for the kinds that own them.
    """
    index: int
    name: str
    kind: str
    position: Vec3
    current_angle: float
    mass: float
    radius: float
    orbital_radius: Optional[float] = None
    orbital_period: Optional[float] = None
    luminosity: Optional[float] = None
    temperature: Optional[float] = None
    color: Optional[Color] = None
    size: Optional[float] = None
    parent_index: Optional[int] = None


@dataclass(frozen=True)
class SystemSnapshot:
    """All bodies of a system after `tick` steps totalling `elapsed_days`."""
    tick: int
    elapsed_days: float
    bodies: Tuple[BodySnapshot, ...] = field(default_factory=tuple)

    def by_name(self, name: str) -> Optional[BodySnapshot]:
        for body in self.bodies:
            if body.name == name:
                return body
        return None

    def children_of(self, index: int) -> Tuple[BodySnapshot, ...]:
        return tuple(b for b in self.bodies if b.parent_index == index)
