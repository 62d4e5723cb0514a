#!/usr/bin/env python3
"""
SolarSystem: the ordered body collection and the per-step driver.

Stepping runs in two phases. Bodies whose `update_phase` is 0 (stars,
planets, free bodies) are updated first in insertion order, then every
phase-1 body (moons). A moon therefore always sees its parent's position for
the current step, wherever it sits in the collection.

The aggregate has no clock and no notion of running or paused; it advances
only when `simulate_movement` is called.
"""
import logging
import math
from typing import Dict, Iterator, List, Optional, Tuple

from .bodies import CelestialBody
from .data_models import BodySnapshot

logger = logging.getLogger(__name__)


class SolarSystem:
    """Owns an ordered sequence of celestial bodies and steps them together."""

    def __init__(self, bodies: Optional[List[CelestialBody]] = None):
        self._bodies: List[CelestialBody] = []
        for body in bodies or []:
            self.add_celestial_body(body)

    def __len__(self) -> int:
        return len(self._bodies)

    def __iter__(self) -> Iterator[CelestialBody]:
        return iter(self._bodies)

    def add_celestial_body(self, body: CelestialBody) -> int:
        """Append a body and return its slot index. Duplicates are allowed."""
        self._bodies.append(body)
        logger.debug("Added %s %r at slot %d", body.kind, body.name, len(self._bodies) - 1)
        return len(self._bodies) - 1

    def get_celestial_bodies(self) -> List[CelestialBody]:
        """Live, ordered body list. Read it; mutate only through body setters."""
        return self._bodies

    def get_body(self, name: str) -> CelestialBody:
        for body in self._bodies:
            if body.name == name:
                return body
        raise KeyError(name)

    def _update_order(self) -> List[CelestialBody]:
        # sorted() is stable, so insertion order holds inside each phase.
        return sorted(self._bodies, key=lambda b: b.update_phase)

    def simulate_movement(self, time_step: float) -> Tuple[BodySnapshot, ...]:
        """
        Advance every body by `time_step` simulated days.

        A zero step leaves the state unchanged. Errors raised by a body abort the
        step and propagate to the caller.

        Returns:
            Snapshot of every body after the step, in insertion order.
        """
        time_step = float(time_step)
        if not math.isfinite(time_step) or time_step < 0:
            raise ValueError(f"time_step must be a finite value >= 0, got {time_step!r}")
        for body in self._update_order():
            body.update_position(time_step)
        return self.snapshot()

    def reset(self) -> None:
        """Put every body back at angle 0, parents before the moons that follow them."""
        for body in self._update_order():
            body.reset()
        logger.info("Solar system reset (%d bodies)", len(self._bodies))

    def snapshot(self) -> Tuple[BodySnapshot, ...]:
        slots: Dict[int, int] = {}
        for i, body in enumerate(self._bodies):
            slots.setdefault(id(body), i)
        snapshots = []
        for i, body in enumerate(self._bodies):
            parent = body.parent
            parent_index = slots.get(id(parent)) if parent is not None else None
            snapshots.append(BodySnapshot(index=i, parent_index=parent_index, **body._snapshot_fields()))
        return tuple(snapshots)
