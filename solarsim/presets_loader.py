#!/usr/bin/env python3
"""
Preset JSON loading utilities.

Presets live in the package's templates/ directory and describe a whole
solar system. Users can add their own JSON files there and they'll be picked
up by the loader.

Schema
======
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "time_step": 1.0,                  # optional, simulated days per tick
  "bodies": [
    {"type": "star", "name": "Sun", "mass": 1.989e30, "radius": 695700,
     "luminosity": 3.828e26, "temperature": 5778},
    {"type": "planet", "name": "Earth", "mass": 5.97237e24, "radius": 6371,
     "orbital_radius": 1.496e8, "orbital_period": 365.25,
     "color": [0, 0, 255], "size": 4, "angle": 0.0},
    {"type": "moon", "name": "Moon", "parent": "Earth", "mass": 7.342e22,
     "radius": 1737.4, "orbital_radius": 384400, "orbital_period": 27.32},
    {"type": "body", "name": "Probe", "mass": 500, "radius": 0.01,
     "position": [0, 0, 0], "velocity": [1000, 0, 0]}
  ]
}

A moon's "parent" names a planet in the same file; it may appear before or
after the moon. Bodies are added to the system in file order.
"""
import json
import logging
import math
import os
from typing import Dict, List, Optional, Tuple

from .bodies import CelestialBody, Moon, Planet, Star
from .solar_system import SolarSystem

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")


class PresetError(ValueError):
  """A preset file is unreadable, malformed, or describes an invalid body."""


def _read_json(path: str) -> Optional[dict]:
  try:
    with open(path, "r", encoding="utf-8") as f:
      return json.load(f)
  except (OSError, ValueError) as e:
    logger.warning("Could not read preset %s: %s", path, e)
    return None


def _coerce_color(c) -> Optional[Tuple[int, int, int]]:
  if c is None:
    return None
  try:
    r, g, b = int(c[0]), int(c[1]), int(c[2])
  except (TypeError, ValueError, IndexError):
    return None
  r = max(0, min(255, r)); g = max(0, min(255, g)); b = max(0, min(255, b))
  return (r, g, b)


def list_templates(templates_dir: str = TEMPLATES_DIR) -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available templates."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(templates_dir):
    return items
  for fn in sorted(os.listdir(templates_dir)):
    if not fn.lower().endswith(".json"):
      continue
    data = _read_json(os.path.join(templates_dir, fn)) or {}
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def _build_body(entry: dict, planets: Dict[str, Planet]) -> CelestialBody:
  kind = str(entry.get("type", "body")).lower()
  name = entry.get("name", "Body")
  mass = float(entry["mass"])
  radius = float(entry["radius"])
  if kind == "star":
    return Star(name, mass, radius, float(entry.get("luminosity", 0.0)),
                float(entry.get("temperature", 0.0)),
                position=entry.get("position", (0.0, 0.0, 0.0)))
  if kind == "planet":
    return Planet(name, mass, radius, float(entry["orbital_radius"]), float(entry["orbital_period"]),
                  color=_coerce_color(entry.get("color")), size=entry.get("size"),
                  angle=float(entry.get("angle", 0.0)))
  if kind == "moon":
    parent_name = entry.get("parent")
    if parent_name not in planets:
      raise ValueError(f"{name}: unknown parent planet {parent_name!r}")
    return Moon(name, mass, radius, float(entry["orbital_radius"]), float(entry["orbital_period"]),
                planets[parent_name], color=_coerce_color(entry.get("color")),
                size=entry.get("size"), angle=float(entry.get("angle", 0.0)))
  if kind == "body":
    return CelestialBody(name, mass, radius,
                         position=entry.get("position", (0.0, 0.0, 0.0)),
                         velocity=entry.get("velocity", (0.0, 0.0, 0.0)))
  raise ValueError(f"{name}: unknown body type {kind!r}")


def build_system(data: dict, source: str = "<preset>") -> SolarSystem:
  """Build a SolarSystem from parsed preset data. Raises PresetError."""
  entries = data.get("bodies", [])
  if not isinstance(entries, list):
    raise PresetError(f"{source}: 'bodies' must be a list")

  slots: List[Optional[CelestialBody]] = [None] * len(entries)
  planets: Dict[str, Planet] = {}
  # Moons need their parent object, so everything else is built first.
  for moons_pass in (False, True):
    for i, entry in enumerate(entries):
      if not isinstance(entry, dict):
        raise PresetError(f"{source}: body #{i} is not an object")
      if (str(entry.get("type", "body")).lower() == "moon") != moons_pass:
        continue
      try:
        body = _build_body(entry, planets)
      except (KeyError, TypeError, ValueError) as e:
        raise PresetError(f"{source}: body #{i} ({entry.get('name', '?')}): {e}") from e
      if isinstance(body, Planet):
        planets.setdefault(body.name, body)
      slots[i] = body

  return SolarSystem([b for b in slots if b is not None])


def load_template(file_name: str, templates_dir: str = TEMPLATES_DIR) -> Tuple[SolarSystem, Optional[float], str]:
  """
  Load a template JSON by file name.
  Returns (system, time_step, display_name)
  """
  path = os.path.join(templates_dir, file_name)
  data = _read_json(path)
  if not isinstance(data, dict):
    raise PresetError(f"{file_name}: not a readable preset")
  display_name = data.get("name") or os.path.splitext(file_name)[0]
  time_step = data.get("time_step")
  if time_step is not None:
    try:
      time_step = float(time_step)
    except (TypeError, ValueError) as e:
      raise PresetError(f"{file_name}: invalid time_step {time_step!r}") from e
    if not math.isfinite(time_step) or time_step < 0:
      raise PresetError(f"{file_name}: time_step must be a finite value >= 0, got {time_step!r}")
  system = build_system(data, source=file_name)
  logger.info("Loaded preset %r (%d bodies)", display_name, len(system))
  return system, time_step, display_name
