# -*- coding: utf-8 -*-
"""
数值表示层 (Numeric Representation Layer)

[职责 Responsibility]
PID 控制器对数值类型是泛型的，只要类型满足下面的约定即可：
1. 比较运算 (<, <=, >, >=)
2. 四则运算 (+, -, *, /) 和取负
3. 可以从 Python float 构造: T(0.1)

满足约定的后端 (Backends):
- float            Python 原生浮点
- numpy.float32    单精度（模拟 MCU 上的 float）
- numpy.float64    双精度
- Fraction         精确有理数（测试用）
- FixedPoint       定点数（无 FPU 的 MCU）
"""

from fractions import Fraction
from typing import Protocol, TypeVar

import numpy as np


class Numeric(Protocol):
    """数值类型约定 (Numeric capability contract)"""

    def __add__(self, other): ...
    def __sub__(self, other): ...
    def __mul__(self, other): ...
    def __truediv__(self, other): ...
    def __neg__(self): ...
    def __lt__(self, other) -> bool: ...
    def __le__(self, other) -> bool: ...
    def __gt__(self, other) -> bool: ...
    def __ge__(self, other) -> bool: ...


T = TypeVar("T")


def clamp(value: T, lo: T, hi: T) -> T:
    """
    限幅 (Clamp value into [lo, hi])
    只使用比较运算，所以对所有后端都成立。
    """
    if value > hi:
        return hi
    if value < lo:
        return lo
    return value


class FixedPoint:
    """
    定点数 (Signed fixed-point number)

    内部用 Python int 保存原始值 raw，实际值 = raw / 2**FRAC_BITS。
    默认 16 位小数 (Q15.16 风格)。

    [使用方法]
    a = FixedPoint(1.5)
    b = a * 2           # 与普通数字混合运算
    float(b)            # 3.0
    Q8 = fixed_point_type(8)
    """

    FRAC_BITS = 16

    __slots__ = ("raw",)

    def __init__(self, value=0):
        if isinstance(value, FixedPoint):
            self.raw = self._rescale(value)
        elif isinstance(value, (int, np.integer)):
            self.raw = int(value) << self.FRAC_BITS
        else:
            self.raw = int(round(float(value) * (1 << self.FRAC_BITS)))

    @classmethod
    def from_raw(cls, raw):
        """直接用原始整数构造 (Build from raw integer)"""
        obj = cls.__new__(cls)
        obj.raw = int(raw)
        return obj

    def _rescale(self, other):
        shift = self.FRAC_BITS - other.FRAC_BITS
        if shift >= 0:
            return other.raw << shift
        return other.raw >> -shift

    def _coerce(self, other):
        """把另一个操作数转换成同精度的原始值"""
        if isinstance(other, FixedPoint):
            return self._rescale(other)
        if isinstance(other, (int, float, Fraction, np.number)):
            return type(self)(other).raw
        return None

    # ==========================
    # 四则运算
    # ==========================
    def __add__(self, other):
        raw = self._coerce(other)
        if raw is None:
            return NotImplemented
        return self.from_raw(self.raw + raw)

    __radd__ = __add__

    def __sub__(self, other):
        raw = self._coerce(other)
        if raw is None:
            return NotImplemented
        return self.from_raw(self.raw - raw)

    def __rsub__(self, other):
        raw = self._coerce(other)
        if raw is None:
            return NotImplemented
        return self.from_raw(raw - self.raw)

    def __mul__(self, other):
        raw = self._coerce(other)
        if raw is None:
            return NotImplemented
        return self.from_raw((self.raw * raw) >> self.FRAC_BITS)

    __rmul__ = __mul__

    def __truediv__(self, other):
        raw = self._coerce(other)
        if raw is None:
            return NotImplemented
        return self.from_raw(_div_trunc(self.raw << self.FRAC_BITS, raw))

    def __rtruediv__(self, other):
        raw = self._coerce(other)
        if raw is None:
            return NotImplemented
        return self.from_raw(_div_trunc(raw << self.FRAC_BITS, self.raw))

    def __neg__(self):
        return self.from_raw(-self.raw)

    def __pos__(self):
        return self

    def __abs__(self):
        return self.from_raw(abs(self.raw))

    # ==========================
    # 比较运算
    # ==========================
    def __eq__(self, other):
        raw = self._coerce(other)
        if raw is None:
            return NotImplemented
        return self.raw == raw

    def __lt__(self, other):
        raw = self._coerce(other)
        if raw is None:
            return NotImplemented
        return self.raw < raw

    def __le__(self, other):
        raw = self._coerce(other)
        if raw is None:
            return NotImplemented
        return self.raw <= raw

    def __gt__(self, other):
        raw = self._coerce(other)
        if raw is None:
            return NotImplemented
        return self.raw > raw

    def __ge__(self, other):
        raw = self._coerce(other)
        if raw is None:
            return NotImplemented
        return self.raw >= raw

    def __hash__(self):
        return hash((self.raw, self.FRAC_BITS))

    # ==========================
    # 类型转换
    # ==========================
    def __float__(self):
        return self.raw / (1 << self.FRAC_BITS)

    def __int__(self):
        # 向零取整，与 C 的 (int) 转换一致
        return int(_div_trunc(self.raw, 1 << self.FRAC_BITS))

    def __format__(self, spec):
        return format(float(self), spec)

    def __repr__(self):
        return f"{type(self).__name__}({float(self)!r})"


def _div_trunc(num, den):
    """整数除法，向零取整 (Integer division truncating toward zero)"""
    if den == 0:
        raise ZeroDivisionError("FixedPoint division by zero")
    q = abs(num) // abs(den)
    return q if (num >= 0) == (den > 0) else -q


def fixed_point_type(frac_bits):
    """
    生成指定精度的定点数类型
    Build a FixedPoint subclass with the given number of fractional bits.
    """
    if frac_bits < 0:
        raise ValueError(f"frac_bits must be >= 0, got {frac_bits}")
    return type(f"FixedPoint{frac_bits}", (FixedPoint,), {"FRAC_BITS": frac_bits, "__slots__": ()})


# ==========================
# 后端注册表 (Backend Registry)
# ==========================
BACKENDS = {
    "float": float,
    "float32": np.float32,
    "float64": np.float64,
    "fraction": Fraction,
    "fixed": FixedPoint,
}


def get_backend(name):
    """
    按名称获取数值类型
    :param name: 后端名称，例如 "float", "fixed"
    """
    try:
        return BACKENDS[name]
    except KeyError:
        raise KeyError(f"Unknown numeric backend {name!r}, choose from: {', '.join(sorted(BACKENDS))}") from None
