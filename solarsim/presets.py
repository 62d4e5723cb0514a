#!/usr/bin/env python3
"""
Built-in solar system preset.

Sun + the eight planets + Earth's Moon, the two Martian moons and the four
Galilean moons. Masses in kg, radii and orbital radii (semi-major axes) in km,
periods in days. Colours and visual sizes are only used by the renderers.
"""
from typing import List, Tuple

from .bodies import Moon, Planet, Star
from .constants import SOLAR_LUMINOSITY, SOLAR_MASS, SOLAR_RADIUS, SOLAR_TEMPERATURE
from .solar_system import SolarSystem

# name, mass, radius, orbital radius, period, colour, size
PLANETS: List[Tuple] = [
    ("Mercury", 3.3011e23, 2439.7, 57.9e6, 88.0, (169, 169, 169), 2.0),
    ("Venus", 4.8675e24, 6051.8, 108.2e6, 224.7, (255, 198, 73), 3.5),
    ("Earth", 5.97237e24, 6371.0, 149.6e6, 365.25, (0, 0, 255), 4.0),
    ("Mars", 6.4171e23, 3389.5, 227.9e6, 687.0, (255, 0, 0), 3.0),
    ("Jupiter", 1.8982e27, 69911.0, 778.5e6, 4332.59, (255, 165, 0), 8.5),
    ("Saturn", 5.6834e26, 58232.0, 1434.0e6, 10759.22, (210, 180, 140), 7.0),
    ("Uranus", 8.6810e25, 25362.0, 2871.0e6, 30688.5, (173, 216, 230), 5.5),
    ("Neptune", 1.02413e26, 24622.0, 4495.0e6, 60182.0, (0, 0, 139), 5.5),
]

# name, parent, mass, radius, orbital radius, period, colour, size
MOONS: List[Tuple] = [
    ("Moon", "Earth", 7.342e22, 1737.4, 384400.0, 27.32, (200, 200, 200), 1.5),
    ("Phobos", "Mars", 1.0659e16, 11.267, 9376.0, 0.3189, (150, 130, 110), 1.0),
    ("Deimos", "Mars", 1.4762e15, 6.2, 23463.2, 1.263, (170, 150, 130), 1.0),
    ("Io", "Jupiter", 8.9319e22, 1821.6, 421700.0, 1.769, (230, 220, 120), 1.5),
    ("Europa", "Jupiter", 4.7998e22, 1560.8, 671034.0, 3.551, (210, 200, 180), 1.5),
    ("Ganymede", "Jupiter", 1.4819e23, 2634.1, 1070412.0, 7.155, (160, 150, 140), 1.8),
    ("Callisto", "Jupiter", 1.0759e23, 2410.3, 1882709.0, 16.689, (110, 100, 90), 1.7),
]


def sun() -> Star:
    return Star("Sun", SOLAR_MASS, SOLAR_RADIUS, SOLAR_LUMINOSITY, SOLAR_TEMPERATURE)


def default_solar_system() -> SolarSystem:
    """Sun first, then planets inside-out, then moons."""
    system = SolarSystem()
    system.add_celestial_body(sun())

    planets = {}
    for name, mass, radius, orbital_radius, period, color, size in PLANETS:
        planet = Planet(name, mass, radius, orbital_radius, period, color=color, size=size)
        planets[name] = planet
        system.add_celestial_body(planet)

    for name, parent, mass, radius, orbital_radius, period, color, size in MOONS:
        system.add_celestial_body(
            Moon(name, mass, radius, orbital_radius, period, planets[parent], color=color, size=size)
        )
    return system
