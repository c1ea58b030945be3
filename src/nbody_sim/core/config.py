"""Configuration dataclasses for the simulation core."""
from __future__ import annotations

import dataclasses
import decimal
from dataclasses import dataclass, field
from decimal import Decimal

from .errors import ConfigurationError

_ROUNDING_MODES = {
    decimal.ROUND_05UP,
    decimal.ROUND_CEILING,
    decimal.ROUND_DOWN,
    decimal.ROUND_FLOOR,
    decimal.ROUND_HALF_DOWN,
    decimal.ROUND_HALF_EVEN,
    decimal.ROUND_HALF_UP,
    decimal.ROUND_UP,
}

_SINGULARITY_POLICIES = {"raise", "skip"}


def _as_decimal(name: str, value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    # str() of a float is its shortest repr, so 0.1 becomes Decimal("0.1").
    try:
        return Decimal(str(value).strip())
    except decimal.InvalidOperation as err:
        raise ConfigurationError(f"{name} is not a decimal number: {value!r}") from err


@dataclass(frozen=True)
class NumericCfg:
    """Precision policy shared by every rounded operation.

    Addition, subtraction and multiplication are always exact. Division,
    square roots and trigonometric values are rounded to ``scale`` fractional
    digits using ``rounding``.
    """

    scale: int = 40
    rounding: str = decimal.ROUND_HALF_EVEN

    def __post_init__(self) -> None:
        if self.scale < 1:
            raise ConfigurationError(f"scale must be at least 1, got {self.scale}")
        if self.rounding not in _ROUNDING_MODES:
            raise ConfigurationError(f"unknown rounding mode {self.rounding!r}")

    @property
    def quantum(self) -> Decimal:
        return Decimal(1).scaleb(-self.scale)


@dataclass(frozen=True)
class PhysicsCfg:
    gravitational_constant: Decimal = Decimal("6.674E-11")
    time_step: Decimal = Decimal(1)
    singularity_policy: str = "raise"
    numeric: NumericCfg = field(default_factory=NumericCfg)

    def __post_init__(self) -> None:
        for name in ("gravitational_constant", "time_step"):
            object.__setattr__(self, name, _as_decimal(name, getattr(self, name)))
        if not isinstance(self.numeric, NumericCfg):
            raise ConfigurationError(
                f"numeric must be a NumericCfg, got {type(self.numeric).__name__}"
            )
        if not self.time_step.is_finite() or self.time_step <= 0:
            raise ConfigurationError(f"time_step must be positive, got {self.time_step}")
        if not self.gravitational_constant.is_finite():
            raise ConfigurationError("gravitational_constant must be finite")
        if self.singularity_policy not in _SINGULARITY_POLICIES:
            allowed = ", ".join(sorted(_SINGULARITY_POLICIES))
            raise ConfigurationError(
                f"singularity_policy must be one of {allowed}, got {self.singularity_policy!r}"
            )

    def replace(self, **changes: object) -> "PhysicsCfg":
        return dataclasses.replace(self, **changes)


NUMERIC_CFG = NumericCfg()
PHYSICS_CFG = PhysicsCfg(numeric=NUMERIC_CFG)


__all__ = ["NUMERIC_CFG", "PHYSICS_CFG", "NumericCfg", "PhysicsCfg"]
