"""Simulation core: decimal vectors, bodies, the step engine and the builder."""

from .builder import BodySpec, OrbitalElements, SystemBuilder
from .config import NUMERIC_CFG, PHYSICS_CFG, NumericCfg, PhysicsCfg
from .errors import ConfigurationError, NumericalSingularityError, SimulationError
from .logging_utils import RunLogger
from .model import BoundingBox, Satellite
from .physics import (
    StateChangeCollector,
    center_of_mass,
    circular_speed,
    gravitational_force,
    rotational_impulse,
    total_momentum,
    total_rotational_impulse,
)
from .system import SimulatedSystem
from .vector import NULLVECTOR, Vector, as_vector

__all__ = [
    "BodySpec",
    "BoundingBox",
    "ConfigurationError",
    "NULLVECTOR",
    "NUMERIC_CFG",
    "NumericCfg",
    "NumericalSingularityError",
    "OrbitalElements",
    "PHYSICS_CFG",
    "PhysicsCfg",
    "RunLogger",
    "Satellite",
    "SimulatedSystem",
    "SimulationError",
    "StateChangeCollector",
    "SystemBuilder",
    "Vector",
    "as_vector",
    "center_of_mass",
    "circular_speed",
    "gravitational_force",
    "rotational_impulse",
    "total_momentum",
    "total_rotational_impulse",
]
