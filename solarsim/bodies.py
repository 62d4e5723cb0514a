#!/usr/bin/env python3
"""
Celestial body models: a generic body, stars, planets and moons.

Every body exposes the same `update_position(time_step)` capability; the
variant-specific motion lives in each class, so the SolarSystem never needs to
check what kind of body it is stepping.

Units and conventions
- mass in kilograms [kg], radius and orbital_radius in kilometers [km].
- orbital_period and time_step are in simulated days.
- current_angle is the orbital phase in radians, kept in [0, 2π) by every
  orbital update.
- Orbits lie in the x–z plane: y is always 0 for planets and moons.

Motion model
- CelestialBody integrates its velocity linearly.
- Star keeps its constructed position for the whole run.
- Planet recomputes its position from (orbital_radius, current_angle) on every
  update, so there is no accumulated drift over long runs.
- Moon does the same around its parent planet's current position. It must be
  updated after its parent within a step; SolarSystem orders the step with
  `update_phase` to guarantee that.
"""
import math
from typing import Any, Dict, Optional, Sequence, Tuple

from .constants import DEFAULT_BODY_COLOR, DEFAULT_MOON_COLOR, SIZE_PER_RADIUS_KM
from .vector_utils import (
    ORIGIN,
    Vec3,
    angular_velocity,
    as_vec3,
    normalize_angle,
    orbit_offset,
    vec_add,
    vec_scale,
)

Color = Tuple[int, int, int]


def _require_non_negative(label: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{label} must be a finite value >= 0, got {value!r}")
    return value


def _require_positive(label: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{label} must be a finite value > 0, got {value!r}")
    return value


def _coerce_color(color: Sequence[int]) -> Color:
    r, g, b = (max(0, min(255, int(c))) for c in color[:3])
    return (r, g, b)


class CelestialBody:
    """
    Base body with identity, physical scalars and a state vector.

    The default update moves the body in a straight line at its velocity.
    """

    kind = "body"
    # Bodies in phase 1 read another body's position and are stepped last.
    update_phase = 0

    def __init__(self, name: str, mass: float, radius: float,
                 position: Sequence[float] = ORIGIN, velocity: Sequence[float] = ORIGIN):
        self.name = str(name)
        self.mass = _require_non_negative(f"{name}: mass", mass)
        self.radius = _require_non_negative(f"{name}: radius", radius)
        self._position = as_vec3(position)
        self._velocity = as_vec3(velocity)
        self._initial_position = self._position
        self._initial_velocity = self._velocity
        self.current_angle = 0.0

    @property
    def position(self) -> Vec3:
        return self._position

    @position.setter
    def position(self, value: Sequence[float]) -> None:
        self._position = as_vec3(value)

    @property
    def velocity(self) -> Vec3:
        return self._velocity

    @velocity.setter
    def velocity(self, value: Sequence[float]) -> None:
        self._velocity = as_vec3(value)

    @property
    def parent(self) -> Optional["CelestialBody"]:
        """Body whose position this one depends on, if any."""
        return None

    def update_position(self, time_step: float) -> None:
        """Advance the position by velocity * time_step."""
        self._position = vec_add(self._position, vec_scale(self._velocity, time_step))

    def reset(self) -> None:
        """Return to the constructed position and velocity with a zero angle."""
        self.current_angle = 0.0
        self._position = self._initial_position
        self._velocity = self._initial_velocity

    def _snapshot_fields(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "position": self._position,
            "current_angle": self.current_angle,
            "mass": self.mass,
            "radius": self.radius,
        }

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(name={self.name!r}, mass={self.mass!r}, "
                f"radius={self.radius!r}, position={self._position!r})")


class Star(CelestialBody):
    """A stationary body that adds luminosity [W] and surface temperature [K]."""

    kind = "star"

    def __init__(self, name: str, mass: float, radius: float, luminosity: float,
                 temperature: float, position: Sequence[float] = ORIGIN):
        super().__init__(name, mass, radius, position=position)
        self.luminosity = _require_non_negative(f"{name}: luminosity", luminosity)
        self.temperature = _require_non_negative(f"{name}: temperature", temperature)

    def update_position(self, time_step: float) -> None:
        # Stars stay where they were placed, whatever their velocity says.
        return None

    def _snapshot_fields(self) -> Dict[str, Any]:
        fields = super()._snapshot_fields()
        fields.update(luminosity=self.luminosity, temperature=self.temperature)
        return fields

    def __repr__(self) -> str:
        return (f"Star(name={self.name!r}, mass={self.mass!r}, radius={self.radius!r}, "
                f"luminosity={self.luminosity!r}, temperature={self.temperature!r})")


class _OrbitingBody(CelestialBody):
    """
    Shared state and angle stepping for bodies on a fixed circular orbit.

    Subclasses provide `orbit_center()`; position is always
    orbit_center() + orbit_offset(orbital_radius, current_angle).
    """

    def __init__(self, name: str, mass: float, radius: float, orbital_radius: float,
                 orbital_period: float, color: Optional[Sequence[int]] = None,
                 size: Optional[float] = None, angle: float = 0.0):
        super().__init__(name, mass, radius)
        self.orbital_radius = _require_non_negative(f"{name}: orbital_radius", orbital_radius)
        self.orbital_period = _require_positive(f"{name}: orbital_period", orbital_period)
        self.color = _coerce_color(color if color is not None else self._default_color())
        self.size = float(size) if size is not None else self.radius * SIZE_PER_RADIUS_KM
        self.current_angle = normalize_angle(float(angle))
        self._place()

    def _default_color(self) -> Color:
        return DEFAULT_BODY_COLOR

    def orbit_center(self) -> Vec3:
        """Point the orbit is centred on. Subclasses must override this."""
        raise NotImplementedError

    @property
    def angular_velocity(self) -> float:
        """Radians per simulated day."""
        return angular_velocity(self.orbital_period)

    def _place(self) -> None:
        self._position = vec_add(self.orbit_center(),
                                 orbit_offset(self.orbital_radius, self.current_angle))

    def update_position(self, time_step: float) -> None:
        self.current_angle = normalize_angle(self.current_angle + self.angular_velocity * time_step)
        self._place()

    def reset(self) -> None:
        self.current_angle = 0.0
        self._place()

    def _snapshot_fields(self) -> Dict[str, Any]:
        fields = super()._snapshot_fields()
        fields.update(
            orbital_radius=self.orbital_radius,
            orbital_period=self.orbital_period,
            color=self.color,
            size=self.size,
        )
        return fields


class Planet(_OrbitingBody):
    """
    A body orbiting the coordinate origin at a fixed radius.

    Args:
        orbital_radius: Distance from the origin in km
        orbital_period: Simulated days per revolution (> 0)
        color: RGB tuple used for rendering (default white)
        size: Visual size for rendering (default radius / 1000)
        angle: Starting phase in radians
    """

    kind = "planet"

    def orbit_center(self) -> Vec3:
        return ORIGIN


class Moon(_OrbitingBody):
    """
    A body orbiting the current position of a parent planet.

    The parent is fixed for the moon's lifetime and is not owned by it.
    """

    kind = "moon"
    update_phase = 1

    def __init__(self, name: str, mass: float, radius: float, orbital_radius: float,
                 orbital_period: float, parent: Planet, color: Optional[Sequence[int]] = None,
                 size: Optional[float] = None, angle: float = 0.0):
        if parent is None:
            raise ValueError(f"{name}: a moon needs a parent planet")
        if not isinstance(parent, Planet):
            raise TypeError(f"{name}: parent must be a Planet, got {type(parent).__name__}")
        self._parent = parent
        super().__init__(name, mass, radius, orbital_radius, orbital_period,
                         color=color, size=size, angle=angle)

    def _default_color(self) -> Color:
        return DEFAULT_MOON_COLOR

    @property
    def parent(self) -> Planet:
        return self._parent

    def orbit_center(self) -> Vec3:
        return self._parent.position
