"""Three dimensional vectors with exact decimal components."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Iterator

from .config import NUMERIC_CFG, NumericCfg
from .decimal_math import (
    ZERO,
    Number,
    add,
    divide,
    multiply,
    negate,
    sqrt,
    subtract,
    to_decimal,
)


@dataclass(frozen=True)
class Vector:
    """Immutable vector; every operation returns a new instance.

    Sums, differences, scalar products, dot and cross products are exact.
    Only :meth:`div` and :meth:`length` round, following a :class:`NumericCfg`.
    """

    x: Decimal = ZERO
    y: Decimal = ZERO
    z: Decimal = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", to_decimal(self.x))
        object.__setattr__(self, "y", to_decimal(self.y))
        object.__setattr__(self, "z", to_decimal(self.z))

    def __iter__(self) -> Iterator[Decimal]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(add(self.x, other.x), add(self.y, other.y), add(self.z, other.z))

    def __sub__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(
            subtract(self.x, other.x),
            subtract(self.y, other.y),
            subtract(self.z, other.z),
        )

    def __neg__(self) -> "Vector":
        return Vector(negate(self.x), negate(self.y), negate(self.z))

    def __mul__(self, scalar: Number) -> "Vector":
        if isinstance(scalar, Vector):
            return NotImplemented
        factor = to_decimal(scalar)
        return Vector(
            multiply(self.x, factor),
            multiply(self.y, factor),
            multiply(self.z, factor),
        )

    __rmul__ = __mul__

    def __truediv__(self, scalar: Number) -> "Vector":
        if isinstance(scalar, Vector):
            return NotImplemented
        return self.div(scalar)

    def div(self, scalar: Number, cfg: NumericCfg = NUMERIC_CFG) -> "Vector":
        """Divide each component by ``scalar``, rounding per ``cfg``."""

        divisor = to_decimal(scalar)
        return Vector(
            divide(self.x, divisor, cfg),
            divide(self.y, divisor, cfg),
            divide(self.z, divisor, cfg),
        )

    def dot(self, other: "Vector") -> Decimal:
        return add(
            add(multiply(self.x, other.x), multiply(self.y, other.y)),
            multiply(self.z, other.z),
        )

    def cross(self, other: "Vector") -> "Vector":
        """Right-handed cross product ``self x other``."""

        return Vector(
            subtract(multiply(self.y, other.z), multiply(self.z, other.y)),
            subtract(multiply(self.z, other.x), multiply(self.x, other.z)),
            subtract(multiply(self.x, other.y), multiply(self.y, other.x)),
        )

    def length_squared(self) -> Decimal:
        return self.dot(self)

    def length(self, cfg: NumericCfg = NUMERIC_CFG) -> Decimal:
        return sqrt(self.length_squared(), cfg)

    def is_zero(self) -> bool:
        return not (self.x or self.y or self.z)

    def to_tuple(self) -> tuple[float, float, float]:
        return (float(self.x), float(self.y), float(self.z))

    def __repr__(self) -> str:
        return f"Vector({self.x}, {self.y}, {self.z})"


NULLVECTOR = Vector(ZERO, ZERO, ZERO)


def as_vector(value: object) -> Vector:
    """Coerce a :class:`Vector` or a sequence of exactly three numbers."""

    if isinstance(value, Vector):
        return value
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise TypeError(f"expected three coordinates, got {value!r}")
    components = tuple(value)
    if len(components) != 3:
        raise ValueError(f"expected three coordinates, got {len(components)}")
    return Vector(*components)


__all__ = ["NULLVECTOR", "Vector", "as_vector"]
