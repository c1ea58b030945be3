"""Build systems from human friendly body descriptions.

Each body is described by a :class:`BodySpec`, a plain record of optional
fields that may be filled in any order. Nothing is checked until
:meth:`SystemBuilder.resolve` (or :meth:`SystemBuilder.build`), which validates
every body spec at once and only then computes positions and velocities.

A body is placed either by an explicit ``position`` (optionally with a
``velocity``) or by orbital elements:

- ``semi_major_axis``: orbit radius around the reference body.
- ``inclination``: tilt of the orbital plane about the x axis, in degrees.
- ``theta``: phase angle along the orbit, in degrees.
- ``start_speed``: orbital speed relative to the reference body. Defaults to
  the circular speed ``sqrt(G * M / a)``.
- ``reference``: name of a body declared earlier. Defaults to the most massive
  body declared earlier, or the origin at rest if there is none.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence

from .config import PHYSICS_CFG, PhysicsCfg
from .decimal_math import ZERO, Number, cos_degrees, multiply, negate, sin_degrees, to_decimal
from .errors import ConfigurationError
from .model import Satellite
from .physics import circular_speed
from .system import SimulatedSystem
from .vector import NULLVECTOR, Vector, as_vector

_ORBIT_FIELDS = ("semi_major_axis", "inclination", "theta", "start_speed", "reference")


@dataclass(frozen=True)
class OrbitalElements:
    semi_major_axis: Decimal
    inclination: Decimal = ZERO
    theta: Decimal = ZERO
    start_speed: Optional[Decimal] = None
    reference: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "semi_major_axis", to_decimal(self.semi_major_axis))
        object.__setattr__(self, "inclination", to_decimal(self.inclination))
        object.__setattr__(self, "theta", to_decimal(self.theta))
        if self.start_speed is not None:
            object.__setattr__(self, "start_speed", to_decimal(self.start_speed))

    def direction(self) -> Vector:
        """Unit vector from the reference body to the orbiting body."""

        cos_t, sin_t = cos_degrees(self.theta), sin_degrees(self.theta)
        cos_i, sin_i = cos_degrees(self.inclination), sin_degrees(self.inclination)
        return Vector(cos_t, multiply(sin_t, cos_i), multiply(sin_t, sin_i))

    def tangent(self) -> Vector:
        """Unit vector of prograde motion at the start of the orbit."""

        cos_t, sin_t = cos_degrees(self.theta), sin_degrees(self.theta)
        cos_i, sin_i = cos_degrees(self.inclination), sin_degrees(self.inclination)
        return Vector(negate(sin_t), multiply(cos_t, cos_i), multiply(cos_t, sin_i))


@dataclass
class BodySpec:
    """Configuration of one body before it is turned into a :class:`Satellite`."""

    name: Optional[str] = None
    mass: Optional[Number] = None
    radius: Optional[Number] = None
    position: Optional[Vector] = None
    velocity: Optional[Vector] = None
    semi_major_axis: Optional[Number] = None
    inclination: Optional[Number] = None
    theta: Optional[Number] = None
    start_speed: Optional[Number] = None
    reference: Optional[str] = None

    def configure(self, **changes: object) -> "BodySpec":
        known = {f.name for f in dataclasses.fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ConfigurationError(f"unknown body field(s): {', '.join(unknown)}")
        for key, value in changes.items():
            setattr(self, key, value)
        return self

    def named(self, name: str) -> "BodySpec":
        return self.configure(name=name)

    def with_mass(self, mass: Number) -> "BodySpec":
        return self.configure(mass=mass)

    def with_radius(self, radius: Number) -> "BodySpec":
        return self.configure(radius=radius)

    def with_position(self, position: Vector) -> "BodySpec":
        return self.configure(position=position)

    def with_velocity(self, velocity: Vector) -> "BodySpec":
        return self.configure(velocity=velocity)

    def with_semi_major_axis(self, distance: Number) -> "BodySpec":
        return self.configure(semi_major_axis=distance)

    def with_inclination(self, degrees: Number) -> "BodySpec":
        return self.configure(inclination=degrees)

    def with_theta(self, degrees: Number) -> "BodySpec":
        return self.configure(theta=degrees)

    def with_start_speed(self, speed: Number) -> "BodySpec":
        return self.configure(start_speed=speed)

    def orbiting(self, reference: str) -> "BodySpec":
        return self.configure(reference=reference)

    @property
    def has_orbit(self) -> bool:
        return any(getattr(self, key) is not None for key in _ORBIT_FIELDS)

    @property
    def orbit(self) -> Optional[OrbitalElements]:
        if not self.has_orbit or self.semi_major_axis is None:
            return None
        return OrbitalElements(
            semi_major_axis=self.semi_major_axis,
            inclination=ZERO if self.inclination is None else self.inclination,
            theta=ZERO if self.theta is None else self.theta,
            start_speed=self.start_speed,
            reference=self.reference,
        )


def _label(index: int, spec: BodySpec) -> str:
    return f"body #{index} ({spec.name})" if spec.name else f"body #{index}"


def _check_number(
    label: str, field_name: str, value: object, problems: List[str]
) -> Optional[Decimal]:
    try:
        return to_decimal(value)
    except (TypeError, ValueError) as err:
        problems.append(f"{label}: invalid {field_name}: {err}")
        return None


def _check_vector(label: str, field_name: str, value: object, problems: List[str]) -> None:
    if value is None:
        return
    try:
        as_vector(value)
    except (TypeError, ValueError) as err:
        problems.append(f"{label}: invalid {field_name}: {err}")


class SystemBuilder:
    """Collects body specs in declaration order and turns them into a system."""

    def __init__(self, cfg: PhysicsCfg = PHYSICS_CFG) -> None:
        self.cfg = cfg
        self.specs: List[BodySpec] = []

    def create_object(self, **fields: object) -> BodySpec:
        spec = BodySpec().configure(**fields)
        self.specs.append(spec)
        return spec

    def validate(self) -> List[str]:
        """Return a description of every problem that would stop :meth:`resolve`."""

        problems: List[str] = []
        declared: set[str] = set()

        for index, spec in enumerate(self.specs, start=1):
            label = _label(index, spec)

            if not spec.name:
                problems.append(f"{label}: missing name")

            mass = None
            if spec.mass is None:
                problems.append(f"{label}: missing mass")
            else:
                mass = _check_number(label, "mass", spec.mass, problems)
                if mass is not None and mass <= 0:
                    problems.append(f"{label}: mass must be positive")
                    mass = None

            if spec.radius is not None:
                radius = _check_number(label, "radius", spec.radius, problems)
                if radius is not None and radius < 0:
                    problems.append(f"{label}: radius must not be negative")

            if spec.position is None and not spec.has_orbit:
                problems.append(f"{label}: needs either a position or orbital elements")
            elif spec.position is not None and spec.has_orbit:
                problems.append(f"{label}: has both a position and orbital elements")
            elif spec.has_orbit:
                self._validate_orbit(label, spec, declared, problems)

            for field_name in ("position", "velocity"):
                _check_vector(label, field_name, getattr(spec, field_name), problems)

            if spec.name and mass is not None:
                declared.add(spec.name)

        return problems

    def _validate_orbit(
        self,
        label: str,
        spec: BodySpec,
        declared: set[str],
        problems: List[str],
    ) -> None:
        if spec.velocity is not None:
            problems.append(f"{label}: velocity is derived from orbital elements, not given")
        if spec.semi_major_axis is None:
            problems.append(f"{label}: orbital elements need a semi-major axis")
        else:
            axis = _check_number(label, "semi-major axis", spec.semi_major_axis, problems)
            if axis is not None and axis <= 0:
                problems.append(f"{label}: semi-major axis must be positive")
        for field_name in ("inclination", "theta", "start_speed"):
            value = getattr(spec, field_name)
            if value is not None:
                _check_number(label, field_name.replace("_", " "), value, problems)

        if spec.reference is not None and spec.reference not in declared:
            problems.append(
                f"{label}: reference body {spec.reference!r} is not declared before it"
            )
        elif spec.start_speed is None and spec.reference is None and not declared:
            problems.append(f"{label}: no reference body to derive a circular speed from")

    def resolve(self) -> List[Satellite]:
        """Validate all specs, then create the satellites in declaration order."""

        problems = self.validate()
        if problems:
            raise ConfigurationError(
                "cannot build system:\n  " + "\n  ".join(problems), problems
            )

        satellites: List[Satellite] = []
        for spec in self.specs:
            position = spec.position if spec.position is not None else NULLVECTOR
            velocity = spec.velocity if spec.velocity is not None else NULLVECTOR
            orbit = spec.orbit
            if orbit is not None:
                position, velocity = self._orbit_state(orbit, satellites)
            satellites.append(
                Satellite(
                    name=spec.name,
                    mass=spec.mass,
                    radius=ZERO if spec.radius is None else spec.radius,
                    position=position,
                    velocity=velocity,
                )
            )
        return satellites

    def build(self) -> SimulatedSystem:
        system = SimulatedSystem(self.cfg)
        system.add_bodies(*self.resolve())
        return system

    def _orbit_state(
        self,
        orbit: OrbitalElements,
        previous: Sequence[Satellite],
    ) -> tuple[Vector, Vector]:
        reference = self._reference(orbit, previous)
        if orbit.start_speed is not None:
            speed = orbit.start_speed
        else:
            speed = circular_speed(reference.mass, orbit.semi_major_axis, self.cfg)

        position = orbit.direction() * orbit.semi_major_axis
        velocity = orbit.tangent() * speed
        if reference is not None:
            position = reference.position + position
            velocity = reference.velocity + velocity
        return position, velocity

    @staticmethod
    def _reference(orbit: OrbitalElements, previous: Sequence[Satellite]) -> Optional[Satellite]:
        if orbit.reference is not None:
            return next(body for body in previous if body.name == orbit.reference)
        if not previous:
            return None
        return max(previous, key=lambda body: body.mass)


__all__ = ["BodySpec", "OrbitalElements", "SystemBuilder"]
