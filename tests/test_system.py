from __future__ import annotations

import threading
from decimal import Decimal

import pytest

from nbody_sim.core.builder import SystemBuilder
from nbody_sim.core.config import PHYSICS_CFG
from nbody_sim.core.errors import NumericalSingularityError
from nbody_sim.core.model import Satellite
from nbody_sim.core.system import SimulatedSystem
from nbody_sim.core.vector import NULLVECTOR, Vector

INITIAL_POSITION_PLANET_1 = Vector(100.0, 0.0, 0.0)
INITIAL_POSITION_PLANET_2 = Vector(0.0, 0.0, 0.0)
MAXIMUM_STEPS_BEFORE_COLLISION_IS_EXPECTED = 100000
ROTATIONAL_IMPULSE_TOLERANCE = Decimal("1E-25")


def distance(a: Satellite, b: Satellite) -> Decimal:
    return (a.position - b.position).length()


def test_step_increases_iteration_count(system):
    assert system.iteration_count == 0
    system.step()
    assert system.iteration_count == 1
    system.step()
    assert system.iteration_count == 2
    system.advance(5)
    assert system.iteration_count == 7


def test_advance_rejects_negative_steps(system):
    with pytest.raises(ValueError):
        system.advance(-1)


def test_two_planets_fall_near_each_other_when_they_have_no_initial_velocity(
    system, planet1, planet2
):
    system.add_bodies(planet1, planet2)

    system.step()

    distance_before = (INITIAL_POSITION_PLANET_1 - INITIAL_POSITION_PLANET_2).length()
    assert distance(planet1, planet2) < distance_before


def test_step_has_symmetrical_result_when_one_central_body_is_pulled_between_two_others(
    system, planet1, planet2, planet3
):
    system.add_bodies(planet1, planet2, planet3)

    system.step()

    assert planet2.position.x == planet2.position.y
    assert planet2.position.x > 0
    assert planet1.position.x == planet3.position.y
    assert planet1.position.y == planet3.position.x


@pytest.mark.parametrize(
    "number_of_steps",
    [
        1,
        10,
        100,
        1000,
        pytest.param(10000, marks=pytest.mark.slow),
        pytest.param(100000, marks=pytest.mark.slow),
    ],
)
def test_rotational_impulse_after_steps_is_the_same_as_before(number_of_steps):
    builder = SystemBuilder()
    sun = builder.create_object().named("sun").with_radius(1392700000)
    sun.with_mass("1.989E30").with_position(NULLVECTOR)
    mercury = builder.create_object().named("mercury").with_radius(2439000)
    mercury.with_mass("3.302E23").with_inclination("7.0").with_semi_major_axis(57909000000)
    mercury.with_theta(90).with_start_speed(47870)
    system = builder.build()

    before = system.total_rotational_impulse()
    system.advance(number_of_steps)
    after = system.total_rotational_impulse()

    assert not before.is_zero()
    assert (before - after).length() <= before.length() * ROTATIONAL_IMPULSE_TOLERANCE


def test_two_planets_pass_each_other_when_they_have_no_initial_velocity(
    system, planet1, planet2
):
    system.add_bodies(planet1, planet2)

    last_distance = distance(planet1, planet2)
    steps = 0
    for steps in range(MAXIMUM_STEPS_BEFORE_COLLISION_IS_EXPECTED):
        system.step()
        new_distance = distance(planet1, planet2)
        if last_distance < new_distance:
            break
        last_distance = new_distance

    assert steps < MAXIMUM_STEPS_BEFORE_COLLISION_IS_EXPECTED - 1


def test_find_returns_first_match_or_none(system, planet1, planet2):
    duplicate = Satellite(name="Planet 1", mass=1, position=Vector(7, 7, 7))
    system.add_bodies(planet1, planet2, duplicate)
    assert system.find("Planet 1") is planet1
    assert system.find("Planet 2") is planet2
    assert system.find("unknown") is None
    assert system.find("planet 1") is None


def test_elements_is_the_live_ordered_list(system, planet1, planet2, planet3):
    system.add_bodies(planet3)
    system.add_bodies(planet1, planet2)
    assert system.elements == [planet3, planet1, planet2]
    assert system.elements is system.elements
    assert len(system) == 3
    assert list(system) == [planet3, planet1, planet2]


def test_bounding_box_of_single_body_is_its_position(system, planet1):
    system.add_bodies(planet1)
    box = system.bounding_box()
    assert box.minimum == planet1.position
    assert box.maximum == planet1.position


def test_bounding_box_follows_bodies(system, planet1, planet2, planet3):
    system.add_bodies(planet1, planet2, planet3)
    box = system.bounding_box()
    assert box.minimum == Vector(0, 0, 0)
    assert box.maximum == Vector(100, 100, 0)

    system.step()
    box = system.bounding_box()
    for body in system.elements:
        assert box.contains(body.position)
    assert box.maximum.x < 100


def test_bounding_box_of_empty_system_is_none(system):
    assert system.bounding_box() is None


def test_clear_keeps_iteration_count(system, planet1):
    system.add_bodies(planet1)
    system.step()
    system.clear()
    assert system.elements == []
    assert system.iteration_count == 1


def test_single_body_at_rest_does_not_move(system, planet1):
    system.add_bodies(planet1)
    system.advance(3)
    assert planet1.position == INITIAL_POSITION_PLANET_1
    assert planet1.velocity == NULLVECTOR


def test_singularity_aborts_the_step_without_partial_updates(system, planet1):
    twin = Satellite(name="twin", mass=5, position=planet1.position)
    mover = Satellite(name="mover", mass=1, position=Vector(-50, 0, 0))
    system.add_bodies(mover, planet1, twin)

    with pytest.raises(NumericalSingularityError):
        system.step()

    assert system.iteration_count == 0
    assert mover.position == Vector(-50, 0, 0)
    assert mover.velocity == NULLVECTOR


def test_skip_policy_steps_through_coincident_bodies(planet1):
    system = SimulatedSystem(PHYSICS_CFG.replace(singularity_policy="skip"))
    twin = Satellite(name="twin", mass=5, position=planet1.position)
    system.add_bodies(planet1, twin)
    system.step()
    assert system.iteration_count == 1
    assert planet1.velocity == NULLVECTOR


def test_total_momentum_stays_on_the_line_of_motion(system, planet1, planet2):
    system.add_bodies(planet1, planet2)
    system.advance(10)
    momentum = system.total_momentum()
    assert momentum.y == 0 and momentum.z == 0
    assert abs(momentum.x) <= Decimal("1E-20")


def test_snapshot_is_consistent_while_another_thread_steps(planet1, planet2, planet3):
    system = SimulatedSystem()
    system.add_bodies(planet1, planet2, planet3)
    started = threading.Event()

    def run():
        started.set()
        system.advance(20)

    worker = threading.Thread(target=run)
    with system.lock:
        worker.start()
        started.wait()
        snapshots = [system.snapshot()]
    while worker.is_alive():
        snapshots.append(system.snapshot())
    worker.join()
    snapshots.append(system.snapshot())

    assert system.iteration_count == 20
    for snapshot in snapshots:
        first, _, third = snapshot
        assert first.position.x == third.position.y
        assert first.position.y == third.position.x
