"""Gravitational influence between bodies and conserved quantities."""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Sequence

from .config import PHYSICS_CFG, PhysicsCfg
from .decimal_math import ZERO, add, divide, multiply, sqrt
from .errors import NumericalSingularityError
from .model import Satellite
from .vector import NULLVECTOR, Vector


def gravitational_force(
    body: Satellite,
    other: Satellite,
    cfg: PhysicsCfg = PHYSICS_CFG,
) -> Vector:
    """Newtonian force exerted on ``body`` by ``other``.

    The magnitude is ``G * m_body * m_other / r**2`` and the force points from
    ``body`` towards ``other``. Raises :class:`NumericalSingularityError` if the
    separation rounds to zero.
    """

    offset = other.position - body.position
    distance_squared = offset.length_squared()
    distance = sqrt(distance_squared, cfg.numeric)
    if not distance:
        raise NumericalSingularityError(body.name, other.name)

    magnitude = divide(
        multiply(multiply(cfg.gravitational_constant, body.mass), other.mass),
        distance_squared,
        cfg.numeric,
    )
    return offset.div(distance, cfg.numeric) * magnitude


class StateChangeCollector:
    """Accumulates the force on one body for the duration of a single step.

    Collectors only read positions and masses while influences are added;
    the body is touched once, by :meth:`apply`.
    """

    def __init__(self, body: Satellite, cfg: PhysicsCfg = PHYSICS_CFG) -> None:
        self.body = body
        self.cfg = cfg
        self.force = NULLVECTOR

    def influence(self, other: Satellite) -> None:
        """Add the pull of ``other`` on the collected body."""

        if other is self.body:
            return
        try:
            force = gravitational_force(self.body, other, self.cfg)
        except NumericalSingularityError:
            if self.cfg.singularity_policy == "skip":
                return
            raise
        self.force = self.force + force

    def acceleration(self) -> Vector:
        return self.force.div(self.body.mass, self.cfg.numeric)

    def apply(self) -> None:
        """Advance the body with semi-implicit Euler using the collected force."""

        dt = self.cfg.time_step
        velocity = self.body.velocity + self.acceleration() * dt
        self.body.velocity = velocity
        self.body.position = self.body.position + velocity * dt


def circular_speed(
    central_mass: Decimal,
    radius: Decimal,
    cfg: PhysicsCfg = PHYSICS_CFG,
) -> Decimal:
    """Speed of a circular orbit of ``radius`` around ``central_mass``."""

    return sqrt(
        divide(multiply(cfg.gravitational_constant, central_mass), radius, cfg.numeric),
        cfg.numeric,
    )


def total_mass(bodies: Iterable[Satellite]) -> Decimal:
    result = ZERO
    for body in bodies:
        result = add(result, body.mass)
    return result


def center_of_mass(bodies: Sequence[Satellite], cfg: PhysicsCfg = PHYSICS_CFG) -> Vector:
    if not bodies:
        raise ValueError("center of mass of an empty system is undefined")

    weighted = NULLVECTOR
    for body in bodies:
        weighted = weighted + body.position * body.mass
    return weighted.div(total_mass(bodies), cfg.numeric)


def total_momentum(bodies: Iterable[Satellite]) -> Vector:
    result = NULLVECTOR
    for body in bodies:
        result = result + body.momentum
    return result


def rotational_impulse(body: Satellite, reference: Vector) -> Vector:
    """Angular momentum of ``body`` about ``reference``, as ``(m v) x (p - reference)``."""

    return body.momentum.cross(body.position - reference)


def total_rotational_impulse(
    bodies: Sequence[Satellite],
    cfg: PhysicsCfg = PHYSICS_CFG,
) -> Vector:
    """Sum of every body's rotational impulse about the centre of mass."""

    center = center_of_mass(bodies, cfg)
    result = NULLVECTOR
    for body in bodies:
        result = result + rotational_impulse(body, center)
    return result


__all__ = [
    "StateChangeCollector",
    "center_of_mass",
    "circular_speed",
    "gravitational_force",
    "rotational_impulse",
    "total_mass",
    "total_momentum",
    "total_rotational_impulse",
]
