import math

import pytest

from solarsim.bodies import CelestialBody, Moon, Planet, Star
from solarsim.constants import TWO_PI


def same_angle(a, b, tol=1e-9):
    d = abs(a - b) % TWO_PI
    return min(d, TWO_PI - d) < tol


def make_planet(orbital_radius=100.0, orbital_period=360.0, **kwargs):
    return Planet("P", 1.0e24, 1000.0, orbital_radius, orbital_period, **kwargs)


# -----------------------
# CelestialBody
# -----------------------

def test_default_update_integrates_velocity():
    body = CelestialBody("Probe", 1.0, 0.1, position=(1.0, 0.0, -1.0), velocity=(2.0, 0.5, 0.0))
    body.update_position(3.0)
    assert body.position == pytest.approx((7.0, 1.5, -1.0))


def test_body_reset_restores_constructed_state():
    body = CelestialBody("Probe", 1.0, 0.1, position=(1.0, 0.0, 0.0), velocity=(1.0, 0.0, 0.0))
    body.update_position(10.0)
    body.current_angle = 2.0
    body.reset()
    assert body.position == (1.0, 0.0, 0.0)
    assert body.current_angle == 0.0


def test_position_setter_validates_components():
    body = CelestialBody("Probe", 1.0, 0.1)
    body.position = [1, 2, 3]
    assert body.position == (1.0, 2.0, 3.0)
    with pytest.raises(ValueError):
        body.position = (1.0, 2.0)


@pytest.mark.parametrize("mass, radius", [(-1.0, 1.0), (1.0, -1.0), (float("nan"), 1.0), (1.0, float("inf"))])
def test_invalid_physical_values_rejected(mass, radius):
    with pytest.raises(ValueError):
        CelestialBody("Bad", mass, radius)


# -----------------------
# Star
# -----------------------

def test_star_never_moves():
    star = Star("Sun", 1.989e30, 695700, 3.828e26, 5778)
    star.velocity = (5.0, 0.0, 5.0)
    for _ in range(10):
        star.update_position(1.0)
    assert star.position == (0.0, 0.0, 0.0)
    assert star.luminosity == 3.828e26
    assert star.temperature == 5778
    assert "luminosity=3.828e+26" in repr(star)


def test_star_rejects_negative_luminosity():
    with pytest.raises(ValueError):
        Star("Sun", 1.0, 1.0, -1.0, 5778)


# -----------------------
# Planet
# -----------------------

def test_planet_quarter_orbit():
    planet = make_planet(100.0, 360.0)
    planet.update_position(90.0)
    assert planet.current_angle == pytest.approx(math.pi / 2)
    assert planet.position == pytest.approx((0.0, 0.0, 100.0), abs=1e-9)


def test_planet_starts_on_its_orbit():
    planet = make_planet(50.0, 10.0, angle=math.pi)
    assert planet.position == pytest.approx((-50.0, 0.0, 0.0), abs=1e-9)


@pytest.mark.parametrize("period", [0.0, -5.0, float("nan")])
def test_planet_rejects_non_positive_period(period):
    with pytest.raises(ValueError):
        make_planet(orbital_period=period)


def test_planet_rejects_negative_orbital_radius():
    with pytest.raises(ValueError):
        make_planet(orbital_radius=-1.0)


@pytest.mark.parametrize("start, step", [(0.0, 1.0), (6.0, 100.0), (0.1, -3.0), (3.0, -400.0), (0.0, 1e5)])
def test_planet_angle_normalized_and_congruent(start, step):
    planet = make_planet(100.0, 27.0, angle=start)
    expected = start + planet.angular_velocity * step
    planet.update_position(step)
    assert 0.0 <= planet.current_angle < TWO_PI
    assert same_angle(planet.current_angle, expected, tol=1e-6)


def test_planet_position_is_pure_function_of_angle():
    planet = make_planet(1.496e8, 365.25)
    for dt in [1.0, 0.3, 17.0, 250.5, 0.0, 1000.0] * 20:
        planet.update_position(dt)
        a = planet.current_angle
        assert planet.position == (1.496e8 * math.cos(a), 0.0, 1.496e8 * math.sin(a))


def test_planet_returns_after_one_period():
    planet = make_planet(100.0, 365.25, angle=0.7)
    start = planet.current_angle
    for _ in range(4):
        planet.update_position(365.25 / 4)
    assert same_angle(planet.current_angle, start)


def test_planet_default_visuals():
    planet = Planet("P", 1.0, 6371.0, 10.0, 1.0)
    assert planet.color == (255, 255, 255)
    assert planet.size == pytest.approx(6.371)


def test_planet_reset():
    planet = make_planet(100.0, 360.0)
    planet.update_position(45.0)
    planet.reset()
    assert planet.current_angle == 0.0
    assert planet.position == (100.0, 0.0, 0.0)


# -----------------------
# Moon
# -----------------------

def test_moon_quarter_orbit_around_parent():
    planet = make_planet(100.0, 360.0)
    assert planet.position == (100.0, 0.0, 0.0)
    moon = Moon("M", 1.0e22, 100.0, 10.0, 30.0, planet)
    moon.update_position(7.5)
    assert moon.current_angle == pytest.approx(math.pi / 2)
    assert moon.position == pytest.approx((100.0, 0.0, 10.0), abs=1e-9)


def test_moon_offset_matches_orbital_radius():
    planet = make_planet(100.0, 50.0)
    moon = Moon("M", 1.0, 1.0, 10.0, 3.0, planet)
    for _ in range(25):
        planet.update_position(1.3)
        moon.update_position(1.3)
        dx, dy, dz = (m - p for m, p in zip(moon.position, planet.position))
        assert math.sqrt(dx * dx + dy * dy + dz * dz) == pytest.approx(10.0)
        assert dx == pytest.approx(10.0 * math.cos(moon.current_angle), abs=1e-9)
        assert dz == pytest.approx(10.0 * math.sin(moon.current_angle), abs=1e-9)
        assert dy == 0.0


def test_moon_requires_planet_parent():
    with pytest.raises(ValueError):
        Moon("M", 1.0, 1.0, 10.0, 3.0, None)
    star = Star("Sun", 1.0, 1.0, 1.0, 1.0)
    with pytest.raises(TypeError):
        Moon("M", 1.0, 1.0, 10.0, 3.0, star)


def test_moon_rejects_zero_period():
    with pytest.raises(ValueError):
        Moon("M", 1.0, 1.0, 10.0, 0.0, make_planet())


def test_moon_reset_follows_parent_reset():
    planet = make_planet(100.0, 360.0)
    moon = Moon("M", 1.0, 1.0, 10.0, 30.0, planet)
    planet.update_position(90.0)
    moon.update_position(90.0)
    planet.reset()
    moon.reset()
    assert moon.current_angle == 0.0
    assert moon.position == (110.0, 0.0, 0.0)
    assert moon.parent is planet
