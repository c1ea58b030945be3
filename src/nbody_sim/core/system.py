"""The N-body engine: owns the bodies and advances them step by step.

Threading
- A single re-entrant lock guards the body list. ``step`` holds it for the
  whole accumulate-then-apply cycle, so a reader that takes the same lock (or
  calls :meth:`SimulatedSystem.snapshot`) never sees some bodies advanced and
  others not.
- :attr:`SimulatedSystem.elements` is the live list, not a copy. Readers
  running on another thread must hold :attr:`SimulatedSystem.lock` while
  they iterate it.
"""
from __future__ import annotations

import threading
from typing import Iterator, List, Optional

from .config import PHYSICS_CFG, PhysicsCfg
from .model import BoundingBox, Satellite
from .physics import (
    StateChangeCollector,
    center_of_mass,
    total_momentum,
    total_rotational_impulse,
)
from .vector import Vector


class SimulatedSystem:
    """A system of ``n`` bodies attracting each other.

    Each :meth:`step` first collects the force on every body from a consistent
    view of all positions, and only then moves the bodies. The iteration count
    grows by one per completed step; a step that raises leaves both the bodies
    and the count untouched.
    """

    def __init__(self, cfg: PhysicsCfg = PHYSICS_CFG) -> None:
        self.cfg = cfg
        self.lock = threading.RLock()
        self._bodies: List[Satellite] = []
        self._iteration_count = 0

    def step(self) -> None:
        with self.lock:
            collectors = [StateChangeCollector(body, self.cfg) for body in self._bodies]
            for collector in collectors:
                for other in self._bodies:
                    collector.influence(other)

            for collector in collectors:
                collector.apply()

            self._iteration_count += 1

    def advance(self, steps: int) -> None:
        if steps < 0:
            raise ValueError(f"steps must not be negative, got {steps}")
        for _ in range(steps):
            self.step()

    def add_bodies(self, *bodies: Satellite) -> None:
        with self.lock:
            self._bodies.extend(bodies)

    def clear(self) -> None:
        """Remove every body. The iteration count is kept."""

        with self.lock:
            self._bodies.clear()

    @property
    def elements(self) -> List[Satellite]:
        return self._bodies

    @property
    def iteration_count(self) -> int:
        return self._iteration_count

    def find(self, name: str) -> Optional[Satellite]:
        """Return the first body called ``name``, or ``None``."""

        with self.lock:
            for body in self._bodies:
                if body.name == name:
                    return body
        return None

    def bounding_box(self) -> Optional[BoundingBox]:
        """Extents of all current positions; ``None`` for an empty system."""

        with self.lock:
            return BoundingBox.around(body.position for body in self._bodies)

    def snapshot(self) -> List[Satellite]:
        """Independent copies of all bodies, taken between steps."""

        with self.lock:
            return [body.copy() for body in self._bodies]

    def center_of_mass(self) -> Vector:
        with self.lock:
            return center_of_mass(self._bodies, self.cfg)

    def total_momentum(self) -> Vector:
        with self.lock:
            return total_momentum(self._bodies)

    def total_rotational_impulse(self) -> Vector:
        with self.lock:
            return total_rotational_impulse(self._bodies, self.cfg)

    def __len__(self) -> int:
        return len(self._bodies)

    def __iter__(self) -> Iterator[Satellite]:
        return iter(self._bodies)


__all__ = ["SimulatedSystem"]
