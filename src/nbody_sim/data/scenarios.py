"""Scenario definitions for preset simulation starting conditions."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ..core.builder import SystemBuilder
from ..core.config import PHYSICS_CFG, PhysicsCfg
from ..core.system import SimulatedSystem
from ..core.vector import NULLVECTOR, Vector


@dataclass(frozen=True)
class Scenario:
    key: str
    name: str
    description: str
    bodies: tuple[Mapping[str, object], ...]

    def builder(self, cfg: PhysicsCfg = PHYSICS_CFG) -> SystemBuilder:
        builder = SystemBuilder(cfg)
        for fields in self.bodies:
            builder.create_object(**fields)
        return builder

    def build(self, cfg: PhysicsCfg = PHYSICS_CFG) -> SimulatedSystem:
        return self.builder(cfg).build()


def _body(**fields: object) -> Mapping[str, object]:
    return MappingProxyType(fields)


SUN = _body(name="sun", radius=1392700000, mass="1.989E30", position=NULLVECTOR)
MERCURY = _body(
    name="mercury",
    radius=2439000,
    mass="3.302E23",
    inclination="7.0",
    semi_major_axis=57909000000,
    theta=90,
    start_speed=47870,
)


SCENARIO_DEFINITIONS: tuple[Scenario, ...] = (
    Scenario(
        key="sun_mercury",
        name="Sun and Mercury",
        description="Mercury on its inclined orbit around a resting Sun.",
        bodies=(SUN, MERCURY),
    ),
    Scenario(
        key="inner_planets",
        name="Inner planets",
        description="Sun, Mercury, Venus, Earth with its Moon, and Mars.",
        bodies=(
            SUN,
            MERCURY,
            _body(
                name="venus",
                radius=6052000,
                mass="4.869E24",
                inclination="3.39",
                semi_major_axis=108208000000,
                theta=180,
                start_speed=35020,
            ),
            _body(
                name="earth",
                radius=6371000,
                mass="5.972E24",
                semi_major_axis=149598023000,
                theta=270,
                start_speed=29780,
                reference="sun",
            ),
            _body(
                name="moon",
                radius=1737400,
                mass="7.342E22",
                inclination="5.145",
                semi_major_axis=384400000,
                theta=270,
                start_speed=1022,
                reference="earth",
            ),
            _body(
                name="mars",
                radius=3389500,
                mass="6.417E23",
                inclination="1.85",
                semi_major_axis=227939200000,
                theta=0,
                start_speed=24070,
                reference="sun",
            ),
        ),
    ),
    Scenario(
        key="two_body_fall",
        name="Two body fall",
        description="Two bodies at rest 100 m apart falling into each other.",
        bodies=(
            _body(name="Planet 1", radius=10, mass=8000000000000, position=Vector(100, 0, 0)),
            _body(name="Planet 2", radius=10, mass=300000000000, position=NULLVECTOR),
        ),
    ),
    Scenario(
        key="central_pull",
        name="Central pull",
        description="A light body at the origin between two heavy ones on the x and y axes.",
        bodies=(
            _body(name="Planet 1", radius=10, mass=8000000000000, position=Vector(100, 0, 0)),
            _body(name="Planet 2", radius=10, mass=300000000000, position=NULLVECTOR),
            _body(name="Planet 3", radius=10, mass=8000000000000, position=Vector(0, 100, 0)),
        ),
    ),
)

SCENARIOS: dict[str, Scenario] = {scenario.key: scenario for scenario in SCENARIO_DEFINITIONS}
SCENARIO_DISPLAY_ORDER: list[str] = [scenario.key for scenario in SCENARIO_DEFINITIONS]
DEFAULT_SCENARIO_KEY = SCENARIO_DISPLAY_ORDER[0]


def build_scenario(key: str, cfg: PhysicsCfg = PHYSICS_CFG) -> SimulatedSystem:
    try:
        scenario = SCENARIOS[key]
    except KeyError:
        available = ", ".join(SCENARIO_DISPLAY_ORDER)
        raise KeyError(f"Unknown scenario '{key}'. Available: {available}") from None
    return scenario.build(cfg)


__all__ = [
    "DEFAULT_SCENARIO_KEY",
    "SCENARIO_DEFINITIONS",
    "SCENARIO_DISPLAY_ORDER",
    "SCENARIOS",
    "Scenario",
    "build_scenario",
]
