from __future__ import annotations

import decimal
from decimal import Decimal

import pytest

from nbody_sim.core.config import NumericCfg
from nbody_sim.core.vector import NULLVECTOR, Vector, as_vector


def test_components_are_coerced_to_decimal():
    v = Vector(1, 2.5, "3.25")
    assert v.x == Decimal(1)
    assert v.y == Decimal("2.5")
    assert v.z == Decimal("3.25")
    assert all(isinstance(c, Decimal) for c in v)


def test_nullvector_is_additive_identity():
    v = Vector("1.5", "-2", "7")
    assert v + NULLVECTOR == v
    assert NULLVECTOR + v == v
    assert v - v == NULLVECTOR
    assert NULLVECTOR.is_zero()


def test_operations_do_not_mutate_operands():
    a = Vector(1, 2, 3)
    b = Vector(4, 5, 6)
    a + b
    a * 3
    a.cross(b)
    assert a == Vector(1, 2, 3)
    assert b == Vector(4, 5, 6)


def test_add_sub_mul_are_exact():
    a = Vector("0.1", "0.2", "0.3")
    assert a + a + a == Vector("0.3", "0.6", "0.9")
    big = Vector("123456789012345678901234567890.123456789", 0, 0)
    assert (big * big.x).x == decimal.Context(prec=200).multiply(big.x, big.x)
    assert 2 * a == a * 2 == Vector("0.2", "0.4", "0.6")
    assert -a == Vector("-0.1", "-0.2", "-0.3")


def test_division_rounds_per_policy():
    v = Vector(1, 2, -1)
    assert v.div(3, NumericCfg(scale=4)) == Vector("0.3333", "0.6667", "-0.3333")
    assert (v / 2) == Vector("0.5", "1", "-0.5")


def test_division_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        Vector(1, 1, 1) / 0


def test_cross_product_is_right_handed():
    x = Vector(1, 0, 0)
    y = Vector(0, 1, 0)
    z = Vector(0, 0, 1)
    assert x.cross(y) == z
    assert y.cross(z) == x
    assert z.cross(x) == y
    assert y.cross(x) == -z


def test_dot_and_length():
    v = Vector(3, 4, 12)
    assert v.dot(Vector(1, 1, 1)) == 19
    assert v.length_squared() == 169
    assert v.length() == 13
    assert Vector(1, 1, 0).length(NumericCfg(scale=6)) == Decimal("1.414214")


def test_vectors_are_hashable_values():
    assert Vector(1, 2, 3) == Vector("1.0", "2.00", 3)
    assert len({Vector(1, 2, 3), Vector("1.0", "2.0", "3.0")}) == 1


def test_to_tuple_gives_floats():
    assert Vector("1.5", 2, "-0.25").to_tuple() == (1.5, 2.0, -0.25)


def test_as_vector_accepts_three_coordinates():
    v = Vector(1, 2, 3)
    assert as_vector(v) is v
    assert as_vector((1, "2.5", 3)) == Vector(1, Decimal("2.5"), 3)
    assert as_vector([0, 0, 0]) == NULLVECTOR


@pytest.mark.parametrize("value", [(0, 1), (1, 2, 3, 4), ()])
def test_as_vector_rejects_wrong_component_count(value):
    with pytest.raises(ValueError, match="three coordinates"):
        as_vector(value)


@pytest.mark.parametrize("value", ["123", b"123", 7, None])
def test_as_vector_rejects_non_sequences(value):
    with pytest.raises(TypeError, match="three coordinates"):
        as_vector(value)
