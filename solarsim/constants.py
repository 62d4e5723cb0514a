#!/usr/bin/env python3
"""
Shared constants for the Solar System Simulator.

Units: kilograms [kg], kilometers [km], simulated days [d], watts [W], kelvin [K].
Wall-clock intervals are in seconds [s].

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""
import math

TWO_PI = 2.0 * math.pi

# Sun (used by the built-in preset and as the default remote-import star)
SOLAR_MASS = 1.989e30  # kg
SOLAR_RADIUS = 695700.0  # km
SOLAR_LUMINOSITY = 3.828e26  # W
SOLAR_TEMPERATURE = 5778.0  # K

# Driver policy
DEFAULT_TIME_STEP = 1.0  # simulated days per tick
TICK_INTERVAL_S = 0.05  # ~20 ticks per second

# Visual defaults
DEFAULT_BODY_COLOR = (255, 255, 255)
DEFAULT_MOON_COLOR = (200, 200, 200)
SIZE_PER_RADIUS_KM = 1.0 / 1000.0  # default visual size = radius / 1000

# Remote astronomical data
SOLAR_SYSTEM_API_URL = "https://api.le-systeme-solaire.net/rest/bodies/"
REMOTE_TIMEOUT_S = 15.0

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
BACKGROUND_COLOR = (5, 6, 14)
ORBIT_COLOR = (70, 70, 70)
MOON_ORBIT_COLOR = (120, 120, 160)
SELECTION_COLOR = (255, 255, 0)
STAR_COLOR = (255, 255, 0)
HUD_COLOR = (200, 200, 200)

# Moon orbits are tiny next to planetary ones; the viewport stretches them.
MOON_ORBIT_EXAGGERATION = 40.0

# Camera zoom bounds (kilometers-per-pixel)
DEFAULT_KM_PER_PIXEL = 5.0e6
MIN_KM_PER_PIXEL = 1.0e2
MAX_KM_PER_PIXEL = 1.0e9

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
