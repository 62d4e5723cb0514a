import pytest
import requests

from solarsim.bodies import Moon, Planet, Star
from solarsim.remote_data import (
    RemoteDataError,
    build_solar_system,
    fetch_bodies,
    load_remote_system,
    parse_body,
)


class FakeResponse:
    def __init__(self, payload=None, status=200, bad_json=False):
        self._payload = payload
        self.status_code = status
        self._bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._bad_json:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


def record(body_id, name, mass_value, mass_exp, radius, semimajor, period,
           is_planet=False, body_type="Moon", parent=None):
    rec = {
        "id": body_id,
        "englishName": name,
        "mass": {"massValue": mass_value, "massExponent": mass_exp},
        "meanRadius": radius,
        "semimajorAxis": semimajor,
        "sideralOrbit": period,
        "isPlanet": is_planet,
        "bodyType": body_type,
    }
    if parent is not None:
        rec["aroundPlanet"] = {"planet": parent, "rel": "..."}
    return rec


RECORDS = [
    record("mars", "Mars", 6.4171, 23, 3389.5, 227939200, 686.98, True, "Planet"),
    record("terre", "Earth", 5.97237, 24, 6371.0, 149598023, 365.256, True, "Planet"),
    record("lune", "Moon", 7.346, 22, 1737.0, 384400, 27.3217, parent="terre"),
    record("phobos", "Phobos", 1.0659, 16, 11.1, 9378, 0.31891, parent="mars"),
    record("ceres", "Ceres", 9.393, 20, 473.0, 413690250, 1680.0, False, "Dwarf Planet"),
    record("vulcain", "Vulcan", 1.0, 20, 100.0, 1000, 0, True, "Planet"),
    record("vulcanmoon", "Vulcan I", 1.0, 10, 1.0, 10, 1.0, parent="vulcain"),
    record("orphan", "Orphan", 1.0, 10, 1.0, 10, 1.0, parent="nowhere"),
]


def test_fetch_bodies_returns_records():
    session = FakeSession(FakeResponse({"bodies": RECORDS}))
    bodies = fetch_bodies(session=session, url="http://example.test/bodies", timeout=3)
    assert bodies == RECORDS
    assert session.calls == [("http://example.test/bodies", 3)]


@pytest.mark.parametrize("session", [
    FakeSession(error=requests.ConnectionError("down")),
    FakeSession(error=requests.Timeout("slow")),
    FakeSession(FakeResponse({"bodies": []}, status=503)),
    FakeSession(FakeResponse(bad_json=True)),
    FakeSession(FakeResponse({"results": []})),
    FakeSession(FakeResponse([1, 2, 3])),
])
def test_fetch_bodies_failures_raise_remote_error(session):
    with pytest.raises(RemoteDataError):
        fetch_bodies(session=session)


def test_parse_body_computes_mass_and_parent():
    p = parse_body(RECORDS[2])
    assert p.body_id == "lune"
    assert p.name == "Moon"
    assert p.mass == pytest.approx(7.346e22)
    assert p.radius == 1737.0
    assert p.orbital_period == pytest.approx(27.3217)
    assert p.parent_id == "terre"
    assert not p.is_planet


def test_parse_body_missing_values_default_to_zero():
    p = parse_body({"id": "x", "englishName": "X"})
    assert p.mass == 0.0
    assert p.orbital_period == 0.0
    assert p.parent_id is None


def test_parse_body_rejects_garbage():
    with pytest.raises(ValueError):
        parse_body({"id": "x", "meanRadius": "wide"})


def test_build_solar_system_orders_and_filters():
    system = build_solar_system(RECORDS)
    names = [b.name for b in system]
    assert names == ["Sun", "Earth", "Mars", "Moon", "Phobos"]
    bodies = system.get_celestial_bodies()
    assert isinstance(bodies[0], Star)
    assert all(isinstance(b, Planet) for b in bodies[1:3])
    assert all(isinstance(b, Moon) for b in bodies[3:])
    assert system.get_body("Phobos").parent is system.get_body("Mars")
    assert system.get_body("Earth").orbital_radius == 149598023.0


def test_build_solar_system_uses_given_star():
    star = Star("Other", 1.0, 1.0, 1.0, 1.0)
    system = build_solar_system([], star=star)
    assert system.get_celestial_bodies() == [star]


def test_load_remote_system_end_to_end():
    session = FakeSession(FakeResponse({"bodies": RECORDS}))
    system = load_remote_system(session=session)
    assert len(system) == 5
    snap = system.simulate_movement(1.0)
    assert snap[3].parent_index == 1


@pytest.mark.parametrize("bad", [None, "mars", 42, ["id", "x"]])
def test_parse_body_rejects_non_objects(bad):
    with pytest.raises(ValueError, match="expected an object"):
        parse_body(bad)


def test_build_solar_system_skips_non_object_records():
    system = build_solar_system([None, "junk", RECORDS[1], RECORDS[2]])
    assert [b.name for b in system] == ["Sun", "Earth", "Moon"]
