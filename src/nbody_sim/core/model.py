"""Data models for the simulated bodies."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from .decimal_math import ZERO, to_decimal
from .errors import ConfigurationError
from .vector import NULLVECTOR, Vector, as_vector


@dataclass(eq=False)
class Satellite:
    """Mutable state of one simulated body.

    Instances compare by identity: two bodies with the same numbers are still
    two bodies. The radius only matters to observers; the engine treats every
    body as a point mass.
    """

    name: str
    mass: Decimal
    radius: Decimal = ZERO
    position: Vector = NULLVECTOR
    velocity: Vector = NULLVECTOR

    def __post_init__(self) -> None:
        self.mass = to_decimal(self.mass)
        self.radius = to_decimal(self.radius)
        self.position = as_vector(self.position)
        self.velocity = as_vector(self.velocity)
        if self.mass <= 0:
            raise ConfigurationError(f"{self.name}: mass must be positive, got {self.mass}")
        if self.radius < 0:
            raise ConfigurationError(
                f"{self.name}: radius must not be negative, got {self.radius}"
            )

    @property
    def momentum(self) -> Vector:
        return self.velocity * self.mass

    def copy(self) -> "Satellite":
        return dataclasses.replace(self)


@dataclass(frozen=True)
class BoundingBox:
    """Axis aligned box around a set of positions."""

    minimum: Vector
    maximum: Vector

    @classmethod
    def around(cls, points: Iterable[Vector]) -> Optional["BoundingBox"]:
        """Smallest box containing ``points``, or ``None`` when there are none."""

        points = list(points)
        if not points:
            return None
        return cls(
            minimum=Vector(
                min(p.x for p in points), min(p.y for p in points), min(p.z for p in points)
            ),
            maximum=Vector(
                max(p.x for p in points), max(p.y for p in points), max(p.z for p in points)
            ),
        )

    @property
    def size(self) -> Vector:
        return self.maximum - self.minimum

    def contains(self, point: Vector) -> bool:
        return (
            self.minimum.x <= point.x <= self.maximum.x
            and self.minimum.y <= point.y <= self.maximum.y
            and self.minimum.z <= point.z <= self.maximum.z
        )


__all__ = ["BoundingBox", "Satellite"]
