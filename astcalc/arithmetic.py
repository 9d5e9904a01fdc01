"""IEEE-754 flavoured float operations.

Python raises on some float operations that IEEE-754 defines as special
values, e.g. division by zero or an overflowing pow. The helpers here return
inf / -inf / nan instead.
"""
import math
from typing import Callable

from astcalc.utils import truthy

BinaryOperationImpl = Callable[[float, float], float]


def _is_odd_integer(v: float) -> bool:
    return math.isfinite(v) and float(v).is_integer() and v % 2 == 1


def ieee_div(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def ieee_pow(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _is_odd_integer(b) else math.inf
    except ValueError:
        if a == 0.0:
            # zero to a negative power: pole error
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        return math.nan


def logical_and(a: float, b: float) -> float:
    return 1.0 if truthy(a) and truthy(b) else 0.0


def logical_or(a: float, b: float) -> float:
    return 1.0 if truthy(a) or truthy(b) else 0.0
