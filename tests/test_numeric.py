# -*- coding: utf-8 -*-
"""数值后端测试 (Numeric backend tests)"""

from fractions import Fraction

import numpy as np
import pytest

from pidctrl.core.numeric import BACKENDS, FixedPoint, clamp, fixed_point_type, get_backend


def test_fixed_point_construction():
    assert FixedPoint(1).raw == 1 << 16
    assert FixedPoint(1.5).raw == 3 << 15
    assert FixedPoint(np.int32(2)).raw == 2 << 16
    assert FixedPoint(Fraction(1, 4)).raw == 1 << 14
    assert FixedPoint.from_raw(123).raw == 123
    assert float(FixedPoint(-2.25)) == -2.25


def test_fixed_point_arithmetic():
    a = FixedPoint(1.5)
    b = FixedPoint(2.25)

    assert a + b == 3.75
    assert b - a == 0.75
    assert a * b == 3.375
    assert b / a == 1.5
    assert -a == -1.5
    assert abs(FixedPoint(-3)) == 3


def test_fixed_point_mixes_with_plain_numbers():
    x = FixedPoint(0.5)

    assert x + 1 == 1.5
    assert 1 + x == 1.5
    assert 2 - x == 1.5
    assert x * 4 == 2
    assert 3 * x == 1.5
    assert 1 / FixedPoint(4) == 0.25
    assert isinstance(2 - x, FixedPoint)


def test_fixed_point_division_truncates_toward_zero():
    third = FixedPoint(1) / FixedPoint(3)
    assert third.raw == 65536 // 3
    assert (FixedPoint(-1) / FixedPoint(3)).raw == -(65536 // 3)
    assert int(FixedPoint(-2.5)) == -2
    assert int(FixedPoint(2.75)) == 2


def test_fixed_point_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        FixedPoint(1) / FixedPoint(0)


def test_fixed_point_comparisons():
    assert FixedPoint(1) < FixedPoint(2)
    assert FixedPoint(2) <= 2
    assert FixedPoint(-1) < 0
    assert FixedPoint(3) > 2.5
    assert FixedPoint(3) >= FixedPoint(3)
    assert FixedPoint(0.1) == 0.1
    assert FixedPoint(1) != FixedPoint(1.5)
    assert (FixedPoint(1) == "1") is False


def test_fixed_point_precision_types():
    q8 = fixed_point_type(8)

    assert q8.FRAC_BITS == 8
    assert q8(0.1).raw == 26
    assert issubclass(q8, FixedPoint)

    # 转换到高精度类型
    assert FixedPoint(q8(1.5)).raw == 3 << 15
    assert q8(FixedPoint(1.5)).raw == 3 << 7

    # 混合运算按左操作数的精度
    assert (q8(1) + FixedPoint(0.5)).raw == 3 << 7


def test_fixed_point_type_rejects_negative_bits():
    with pytest.raises(ValueError):
        fixed_point_type(-1)


def test_fixed_point_repr_and_format():
    assert repr(FixedPoint(0.5)) == "FixedPoint(0.5)"
    assert f"{FixedPoint(1.25):.1f}" == "1.2"


def test_clamp():
    assert clamp(5, -1, 3) == 3
    assert clamp(-5, -1, 3) == -1
    assert clamp(2, -1, 3) == 2
    assert clamp(FixedPoint(9), FixedPoint(-1), FixedPoint(1)) == 1


def test_backend_registry():
    assert set(BACKENDS) == {"float", "float32", "float64", "fraction", "fixed"}
    assert get_backend("float32") is np.float32
    assert get_backend("fixed") is FixedPoint


def test_unknown_backend():
    with pytest.raises(KeyError, match="float32"):
        get_backend("decimal")


@pytest.mark.parametrize("name", sorted(BACKENDS))
def test_backends_satisfy_contract(name):
    num = get_backend(name)
    a, b = num(1.5), num(0.5)

    assert float(a + b) == pytest.approx(2.0)
    assert float(a - b) == pytest.approx(1.0)
    assert float(a * b) == pytest.approx(0.75)
    assert float(a / b) == pytest.approx(3.0)
    assert float(-a) == pytest.approx(-1.5)
    assert b < a and a > b and a >= a and b <= b
