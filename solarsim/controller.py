#!/usr/bin/env python3
"""
Simulation controller and periodic driver.

Threading model
- SimulationClock is a background thread that calls `SimulationController.tick()`
  at a fixed wall-clock cadence (TICK_INTERVAL_S).
- SimulationController owns the SolarSystem. Every mutation happens under a
  re-entrant lock, and every step publishes an immutable SystemSnapshot.
- Renderers and the UI read `latest_snapshot()` only; they never touch the live
  bodies, so they can run on any thread without further locking.

Controls
- start(), stop() and reset() are idempotent and safe to call from any state.
- Once stop() returns (when called off the clock thread) no further step runs.
"""
import logging
import math
import threading
from typing import Optional

from .constants import DEFAULT_TIME_STEP, TICK_INTERVAL_S
from .data_models import SystemSnapshot
from .solar_system import SolarSystem

logger = logging.getLogger(__name__)


class SimulationClock(threading.Thread):
    """Calls `controller.tick()` every `interval` seconds until stopped."""

    def __init__(self, controller: "SimulationController", interval: float = TICK_INTERVAL_S):
        super().__init__(name="simulation-clock", daemon=True)
        self.controller = controller
        self.interval = float(interval)
        self._stop_event = threading.Event()

    def stop(self) -> None:
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def run(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.controller.tick(clock=self)
            except Exception:
                logger.exception("Simulation step failed; stopping the clock")
                self._stop_event.set()
                self.controller._on_clock_failure(self)


class SimulationController:
    """
    Shared state between the simulation clock and its readers.
    Includes thread-safe operations guarded by a lock.
    """

    def __init__(self, system: Optional[SolarSystem] = None,
                 time_step: float = DEFAULT_TIME_STEP, interval: float = TICK_INTERVAL_S):
        self.lock = threading.RLock()
        self.system = system if system is not None else SolarSystem()
        self.time_step = _check_time_step(time_step)
        self.interval = float(interval)
        self.playing = False
        self.tick_count = 0
        self.elapsed_days = 0.0
        self._clock: Optional[SimulationClock] = None
        self._snapshot = self._make_snapshot()

    # -----------------------
    # Snapshots
    # -----------------------

    def _make_snapshot(self, bodies=None) -> SystemSnapshot:
        if bodies is None:
            bodies = self.system.snapshot()
        return SystemSnapshot(tick=self.tick_count, elapsed_days=self.elapsed_days, bodies=bodies)

    def latest_snapshot(self) -> SystemSnapshot:
        with self.lock:
            return self._snapshot

    # -----------------------
    # Stepping
    # -----------------------

    def _step(self) -> SystemSnapshot:
        bodies = self.system.simulate_movement(self.time_step)
        self.tick_count += 1
        self.elapsed_days += self.time_step
        self._snapshot = self._make_snapshot(bodies)
        return self._snapshot

    def tick(self, clock: Optional[SimulationClock] = None) -> SystemSnapshot:
        """
        One scheduled step. Does nothing while paused, or when called by a clock
        that has already been stopped or replaced.
        """
        with self.lock:
            if not self.playing:
                return self._snapshot
            if clock is not None and (clock is not self._clock or clock.stopped):
                return self._snapshot
            return self._step()

    def step_once(self) -> SystemSnapshot:
        """Advance a single step regardless of the play state."""
        with self.lock:
            return self._step()

    # -----------------------
    # Controls
    # -----------------------

    @property
    def is_running(self) -> bool:
        with self.lock:
            return self.playing and self._clock is not None and self._clock.is_alive()

    def start(self) -> None:
        with self.lock:
            self.playing = True
            if self._clock is not None and self._clock.is_alive() and not self._clock.stopped:
                return
            self._clock = SimulationClock(self, self.interval)
            self._clock.start()
        logger.info("Simulation started (time step %.3g d, every %.3g s)", self.time_step, self.interval)

    def stop(self) -> None:
        with self.lock:
            clock = self._clock
            self._clock = None
            was_playing = self.playing
            self.playing = False
            if clock is not None:
                clock.stop()
        # Join outside the lock: the clock may be waiting on it inside tick().
        if clock is not None and clock is not threading.current_thread():
            clock.join()
        if was_playing:
            logger.info("Simulation paused at tick %d", self.tick_count)

    def reset(self) -> None:
        self.stop()
        with self.lock:
            self.system.reset()
            self.tick_count = 0
            self.elapsed_days = 0.0
            self._snapshot = self._make_snapshot()

    def set_time_step(self, time_step: float) -> None:
        with self.lock:
            self.time_step = _check_time_step(time_step)

    def replace_system(self, system: SolarSystem) -> None:
        """Swap in a new body collection; the simulation is left paused."""
        self.stop()
        with self.lock:
            self.system = system
            self.tick_count = 0
            self.elapsed_days = 0.0
            self._snapshot = self._make_snapshot()
        logger.info("Loaded solar system with %d bodies", len(system))

    def _on_clock_failure(self, clock: SimulationClock) -> None:
        with self.lock:
            if self._clock is clock:
                self._clock = None
                self.playing = False


def _check_time_step(time_step: float) -> float:
    time_step = float(time_step)
    if not math.isfinite(time_step) or time_step < 0:
        raise ValueError(f"time_step must be a finite value >= 0, got {time_step!r}")
    return time_step
