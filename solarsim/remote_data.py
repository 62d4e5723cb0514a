#!/usr/bin/env python3
"""
Remote astronomical data import (le-systeme-solaire.net REST API).

The importer only hands plain physical parameters (mass, radius, orbital
radius, orbital period) to the ordinary body constructors; it never simulates
anything itself.

Record fields used
 - englishName / id
 - mass.massValue * 10**mass.massExponent    [kg]
 - meanRadius                                [km]
 - semimajorAxis                             [km]
 - sideralOrbit                              [days]
 - isPlanet, bodyType, aroundPlanet.planet
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import requests

from .bodies import Moon, Planet, Star
from .constants import REMOTE_TIMEOUT_S, SOLAR_SYSTEM_API_URL
from .presets import sun
from .solar_system import SolarSystem

logger = logging.getLogger(__name__)


class RemoteDataError(RuntimeError):
    """The remote service could not be reached or returned unusable data."""


@dataclass(frozen=True)
class BodyParameters:
    body_id: str
    name: str
    mass: float
    radius: float
    orbital_radius: float
    orbital_period: float
    is_planet: bool
    body_type: str
    parent_id: Optional[str] = None


# -----------------------
# Fetch
# -----------------------
def fetch_bodies(session: Optional[requests.Session] = None,
                 url: str = SOLAR_SYSTEM_API_URL,
                 timeout: float = REMOTE_TIMEOUT_S) -> List[Dict[str, Any]]:
    """
    GET the body list. Raises RemoteDataError on network, HTTP or payload errors.
    """
    session = session or requests.Session()
    try:
        resp = session.get(url, headers={"Accept": "application/json"}, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise RemoteDataError(f"Body list request failed: {e}") from e

    try:
        payload = resp.json()
    except ValueError as e:
        raise RemoteDataError("Body list response is not JSON") from e

    bodies = payload.get("bodies") if isinstance(payload, dict) else None
    if not isinstance(bodies, list):
        raise RemoteDataError("Body list response has no 'bodies' array")
    logger.info("Fetched %d body records from %s", len(bodies), url)
    return bodies


# -----------------------
# Parse
# -----------------------
def _number(record: Dict[str, Any], key: str) -> float:
    value = record.get(key)
    return float(value) if value is not None else 0.0


def _mass(record: Dict[str, Any]) -> float:
    mass = record.get("mass")
    if not isinstance(mass, dict):
        return 0.0
    value = mass.get("massValue")
    exponent = mass.get("massExponent")
    if value is None or exponent is None:
        return 0.0
    return float(value) * 10.0 ** float(exponent)


def parse_body(record: Dict[str, Any]) -> BodyParameters:
    """Turn one API record into plain parameters. Raises ValueError if unusable."""
    if not isinstance(record, dict):
        raise ValueError(f"Malformed body record: expected an object, got {type(record).__name__}")
    try:
        body_id = str(record.get("id") or record.get("englishName") or "")
        around = record.get("aroundPlanet")
        parent_id = around.get("planet") if isinstance(around, dict) else None
        return BodyParameters(
            body_id=body_id,
            name=str(record.get("englishName") or body_id),
            mass=_mass(record),
            radius=_number(record, "meanRadius"),
            orbital_radius=_number(record, "semimajorAxis"),
            orbital_period=_number(record, "sideralOrbit"),
            is_planet=bool(record.get("isPlanet")),
            body_type=str(record.get("bodyType") or ""),
            parent_id=parent_id,
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed body record {record.get('id')!r}: {e}") from e


# -----------------------
# Build
# -----------------------
def build_solar_system(records: Iterable[Dict[str, Any]], star: Optional[Star] = None) -> SolarSystem:
    """
    Star, then planets sorted by orbital radius, then moons of imported planets.
    Records that fail validation are skipped with a warning.
    """
    params = []
    for record in records:
        try:
            params.append(parse_body(record))
        except ValueError as e:
            logger.warning("%s", e)

    system = SolarSystem()
    system.add_celestial_body(star if star is not None else sun())

    planets: Dict[str, Planet] = {}
    for p in sorted((p for p in params if p.is_planet), key=lambda p: p.orbital_radius):
        try:
            planet = Planet(p.name, p.mass, p.radius, p.orbital_radius, p.orbital_period)
        except ValueError as e:
            logger.warning("Skipping planet %s: %s", p.name, e)
            continue
        planets[p.body_id] = planet
        system.add_celestial_body(planet)

    for p in params:
        if p.is_planet or p.body_type.lower() != "moon" or p.parent_id not in planets:
            continue
        try:
            moon = Moon(p.name, p.mass, p.radius, p.orbital_radius, p.orbital_period, planets[p.parent_id])
        except ValueError as e:
            logger.warning("Skipping moon %s: %s", p.name, e)
            continue
        system.add_celestial_body(moon)

    logger.info("Imported %d planets and %d moons", len(planets), len(system) - len(planets) - 1)
    return system


def load_remote_system(session: Optional[requests.Session] = None,
                       timeout: float = REMOTE_TIMEOUT_S) -> SolarSystem:
    return build_solar_system(fetch_bodies(session=session, timeout=timeout))
