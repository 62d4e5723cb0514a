import math
import time

import pytest

from solarsim.bodies import CelestialBody, Moon, Planet, Star
from solarsim.controller import SimulationController
from solarsim.solar_system import SolarSystem

FAST = 0.002


def small_system():
    planet = Planet("Earth", 5.97e24, 6371, 100.0, 360.0)
    return SolarSystem([
        Star("Sun", 1.989e30, 695700, 3.828e26, 5778),
        planet,
        Moon("Moon", 7.3e22, 1737, 10.0, 30.0, planet),
    ])


def wait_for(predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return False


@pytest.fixture
def controller():
    ctl = SimulationController(small_system(), time_step=1.0, interval=FAST)
    yield ctl
    ctl.stop()


def test_initial_snapshot(controller):
    snap = controller.latest_snapshot()
    assert snap.tick == 0
    assert snap.elapsed_days == 0.0
    assert [b.name for b in snap.bodies] == ["Sun", "Earth", "Moon"]
    assert not controller.is_running


def test_step_once_advances_and_publishes(controller):
    snap = controller.step_once()
    assert snap.tick == 1
    assert snap.elapsed_days == 1.0
    assert controller.latest_snapshot() is snap
    assert snap.by_name("Earth").current_angle == pytest.approx(2 * math.pi / 360.0)
    assert [b.name for b in snap.children_of(1)] == ["Moon"]


def test_tick_does_nothing_while_paused(controller):
    snap = controller.tick()
    assert snap.tick == 0


def test_start_runs_until_stopped(controller):
    controller.start()
    assert wait_for(lambda: controller.latest_snapshot().tick >= 3)
    assert controller.is_running
    controller.stop()
    stopped_at = controller.latest_snapshot().tick
    time.sleep(10 * FAST)
    assert controller.latest_snapshot().tick == stopped_at
    assert not controller.is_running


def test_start_and_stop_are_idempotent(controller):
    controller.stop()
    controller.start()
    clock = controller._clock
    controller.start()
    assert controller._clock is clock
    controller.stop()
    controller.stop()
    assert controller._clock is None
    assert not clock.is_alive()


def test_reset_zeroes_state_and_pauses(controller):
    for _ in range(5):
        controller.step_once()
    controller.start()
    controller.reset()
    first = controller.latest_snapshot()
    controller.reset()
    second = controller.latest_snapshot()
    assert first == second
    assert first.tick == 0
    assert first.elapsed_days == 0.0
    assert first.by_name("Earth").position == (100.0, 0.0, 0.0)
    assert first.by_name("Moon").position == (110.0, 0.0, 0.0)
    assert not controller.is_running


def test_set_time_step_validates(controller):
    controller.set_time_step(2.5)
    assert controller.step_once().elapsed_days == 2.5
    with pytest.raises(ValueError):
        controller.set_time_step(-1.0)
    with pytest.raises(ValueError):
        SimulationController(small_system(), time_step=float("inf"))


def test_replace_system_pauses_and_republishes(controller):
    controller.start()
    replacement = SolarSystem([Star("Other", 1.0, 1.0, 1.0, 1.0)])
    controller.replace_system(replacement)
    snap = controller.latest_snapshot()
    assert not controller.is_running
    assert snap.tick == 0
    assert [b.name for b in snap.bodies] == ["Other"]


def test_failing_step_stops_the_clock(controller):
    class Broken(CelestialBody):
        def update_position(self, time_step):
            raise RuntimeError("boom")

    controller.system.add_celestial_body(Broken("B", 1.0, 1.0))
    controller.start()
    assert wait_for(lambda: not controller.playing)
    assert wait_for(lambda: not controller.is_running)
    assert controller.latest_snapshot().tick == 0


def test_stop_from_inside_a_step(controller):
    class Stopper(CelestialBody):
        def update_position(self, time_step):
            controller.stop()

    controller.system.add_celestial_body(Stopper("S", 1.0, 1.0))
    controller.start()
    assert wait_for(lambda: not controller.playing)
    ticks = controller.latest_snapshot().tick
    time.sleep(10 * FAST)
    assert controller.latest_snapshot().tick == ticks == 1
