"""Preset starting conditions."""

from .scenarios import (
    DEFAULT_SCENARIO_KEY,
    SCENARIO_DISPLAY_ORDER,
    SCENARIOS,
    Scenario,
    build_scenario,
)

__all__ = [
    "DEFAULT_SCENARIO_KEY",
    "SCENARIO_DISPLAY_ORDER",
    "SCENARIOS",
    "Scenario",
    "build_scenario",
]
