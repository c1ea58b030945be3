"""Exceptions raised by the simulation core."""
from __future__ import annotations

from typing import Sequence


class SimulationError(Exception):
    """Base class for every error raised by :mod:`nbody_sim`."""


class ConfigurationError(SimulationError, ValueError):
    """A configuration value or a body under construction is invalid."""

    def __init__(self, message: str, problems: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.problems = tuple(problems)


class NumericalSingularityError(SimulationError, ArithmeticError):
    """Two distinct bodies share a position, so their attraction is undefined."""

    def __init__(self, first: str, second: str) -> None:
        super().__init__(f"bodies {first!r} and {second!r} have zero separation")
        self.first = first
        self.second = second


__all__ = ["ConfigurationError", "NumericalSingularityError", "SimulationError"]
