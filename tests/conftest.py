from __future__ import annotations

import pytest

from nbody_sim.core.model import Satellite
from nbody_sim.core.system import SimulatedSystem
from nbody_sim.core.vector import NULLVECTOR, Vector

INITIAL_POSITION_PLANET_1 = Vector(100.0, 0.0, 0.0)
INITIAL_POSITION_PLANET_2 = Vector(0.0, 0.0, 0.0)
INITIAL_POSITION_PLANET_3 = Vector(0.0, 100.0, 0.0)


def make_planet(name: str, mass: int, position: Vector, velocity: Vector = NULLVECTOR) -> Satellite:
    return Satellite(name=name, mass=mass, radius=10, position=position, velocity=velocity)


@pytest.fixture
def system() -> SimulatedSystem:
    return SimulatedSystem()


@pytest.fixture
def planet1() -> Satellite:
    return make_planet("Planet 1", 8000000000000, INITIAL_POSITION_PLANET_1)


@pytest.fixture
def planet2() -> Satellite:
    return make_planet("Planet 2", 300000000000, INITIAL_POSITION_PLANET_2)


@pytest.fixture
def planet3() -> Satellite:
    return make_planet("Planet 3", 8000000000000, INITIAL_POSITION_PLANET_3)
