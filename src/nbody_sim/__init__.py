"""Exact-decimal N-body gravity simulation."""

from .core import (
    NULLVECTOR,
    PHYSICS_CFG,
    BoundingBox,
    ConfigurationError,
    NumericalSingularityError,
    PhysicsCfg,
    Satellite,
    SimulatedSystem,
    SystemBuilder,
    Vector,
)

__version__ = "0.1.0"

__all__ = [
    "BoundingBox",
    "ConfigurationError",
    "NULLVECTOR",
    "NumericalSingularityError",
    "PHYSICS_CFG",
    "PhysicsCfg",
    "Satellite",
    "SimulatedSystem",
    "SystemBuilder",
    "Vector",
]
