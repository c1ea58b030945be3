"""Decimal scalar arithmetic with a single, explicit precision policy.

Every helper here goes through an explicit :class:`decimal.Context` instead of
the thread-local one, so results never depend on ``decimal.getcontext()``.

* ``add``, ``subtract``, ``multiply`` and ``negate`` use :data:`EXACT`, whose
  precision and exponent range are the largest ``decimal`` supports. They never
  round.
* ``divide`` and ``sqrt`` are correctly rounded to ``cfg.scale`` fractional
  digits with ``cfg.rounding``.
* ``cos_degrees`` and ``sin_degrees`` are evaluated in floating point and
  rounded to :data:`TRIG_DIGITS` fractional digits, which makes the values at
  multiples of 90 degrees exact.
"""
from __future__ import annotations

import decimal
import math
from decimal import Decimal
from typing import Union

from .config import NUMERIC_CFG, NumericCfg

Number = Union[Decimal, int, float, str]

EXACT = decimal.Context(
    prec=decimal.MAX_PREC,
    Emax=decimal.MAX_EMAX,
    Emin=decimal.MIN_EMIN,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
)

TRIG_DIGITS = 15

ZERO = Decimal(0)
ONE = Decimal(1)

_QUARTER = Decimal("0.25")
_HALF = Decimal("0.5")
_THREE_QUARTERS = Decimal("0.75")


def to_decimal(value: Number) -> Decimal:
    """Coerce ``value`` to a finite :class:`~decimal.Decimal`.

    Floats are converted through their shortest ``repr`` so ``0.1`` becomes
    ``Decimal("0.1")`` rather than its binary expansion.
    """

    if isinstance(value, bool):
        raise TypeError("booleans are not numbers here")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = EXACT.create_decimal(value.strip())
        except decimal.InvalidOperation as err:
            raise ValueError(f"not a decimal number: {value!r}") from err
    else:
        raise TypeError(f"cannot convert {type(value).__name__} to Decimal")

    if not result.is_finite():
        raise ValueError(f"expected a finite number, got {value!r}")
    return result


def add(a: Decimal, b: Decimal) -> Decimal:
    return EXACT.add(a, b)


def subtract(a: Decimal, b: Decimal) -> Decimal:
    return EXACT.subtract(a, b)


def multiply(a: Decimal, b: Decimal) -> Decimal:
    return EXACT.multiply(a, b)


def negate(a: Decimal) -> Decimal:
    return EXACT.minus(a)


def quantize(value: Decimal, cfg: NumericCfg = NUMERIC_CFG) -> Decimal:
    """Round ``value`` to the policy's number of fractional digits."""

    return value.quantize(cfg.quantum, rounding=cfg.rounding, context=EXACT)


def divide(dividend: Number, divisor: Number, cfg: NumericCfg = NUMERIC_CFG) -> Decimal:
    """Return ``dividend / divisor`` correctly rounded to ``cfg.scale`` digits.

    The quotient is first computed with two guard digits under
    ``ROUND_05UP``; rounding that intermediate to the final quantum then gives
    the same result as rounding the exact quotient, for every rounding mode.
    """

    dividend = to_decimal(dividend)
    divisor = to_decimal(divisor)
    if not divisor:
        raise ZeroDivisionError(f"cannot divide {dividend} by zero")
    if not dividend:
        return quantize(ZERO, cfg)

    digits = max(1, dividend.adjusted() - divisor.adjusted() + cfg.scale + 3)
    context = decimal.Context(
        prec=digits,
        rounding=decimal.ROUND_05UP,
        Emax=decimal.MAX_EMAX,
        Emin=decimal.MIN_EMIN,
    )
    return quantize(context.divide(dividend, divisor), cfg)


def sqrt(value: Number, cfg: NumericCfg = NUMERIC_CFG) -> Decimal:
    """Return the square root of ``value`` correctly rounded to ``cfg.scale`` digits."""

    value = to_decimal(value)
    if value < 0:
        raise ValueError(f"square root of negative number {value}")

    # Work on value * 10**(2 * scale) so the root's integer part is the
    # rounded result's digit string. isqrt gives the floor; comparing against
    # (root + 1/2)**2 tells on which side of the midpoint the true root lies.
    scaled = value.scaleb(2 * cfg.scale, context=EXACT)
    root = math.isqrt(int(scaled))
    square = Decimal(root * root)
    if scaled == square:
        fraction = ZERO
    else:
        midpoint = add(Decimal(root * root + root), _QUARTER)
        if scaled < midpoint:
            fraction = _QUARTER
        elif scaled == midpoint:
            fraction = _HALF
        else:
            fraction = _THREE_QUARTERS

    candidate = add(Decimal(root), fraction)
    rounded = candidate.quantize(ONE, rounding=cfg.rounding, context=EXACT)
    return rounded.scaleb(-cfg.scale, context=EXACT)


def _trig(value: float) -> Decimal:
    result = to_decimal(round(value, TRIG_DIGITS))
    # Avoid carrying a negative zero into positions and velocities.
    return result if result else ZERO


def cos_degrees(angle: Number) -> Decimal:
    return _trig(math.cos(math.radians(float(angle))))


def sin_degrees(angle: Number) -> Decimal:
    return _trig(math.sin(math.radians(float(angle))))


__all__ = [
    "EXACT",
    "ONE",
    "TRIG_DIGITS",
    "ZERO",
    "Number",
    "add",
    "cos_degrees",
    "divide",
    "multiply",
    "negate",
    "quantize",
    "sin_degrees",
    "sqrt",
    "subtract",
    "to_decimal",
]
