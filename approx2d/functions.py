"""Test functions on the plane and small formatting helpers."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable

Function2D = Callable[[float, float], float]


def _affine(x: float, y: float, cx: float, cy: float, c0: float) -> float:
    """Evaluate ``cx * x + cy * y + c0``, skipping terms with zero coefficients."""
    terms = [coef * value for coef, value in ((cx, x), (cy, y)) if coef]
    if c0 or not terms:
        terms.append(float(c0))
    result = terms[0]
    for term in terms[1:]:
        result += term
    return float(result)


def f_0(x: float, y: float) -> float:
    """Constant one."""
    return _affine(x, y, 0.0, 0.0, 1.0)


def f_1(x: float, y: float) -> float:
    """The x coordinate."""
    return _affine(x, y, 1.0, 0.0, 0.0)


def f_2(x: float, y: float) -> float:
    """The y coordinate."""
    return _affine(x, y, 0.0, 1.0, 0.0)


def f_3(x: float, y: float) -> float:
    """Sum of the coordinates."""
    return x + y


def f_4(x: float, y: float) -> float:
    """Distance from the origin."""
    return math.sqrt(x * x + y * y)


def f_5(x: float, y: float) -> float:
    """Squared distance from the origin."""
    return x * x + y * y


def f_6(x: float, y: float) -> float:
    """exp(x^2 - y^2)."""
    return math.exp(x * x - y * y)


def f_7(x: float, y: float) -> float:
    """Runge-type bump 1 / (25 (x^2 + y^2) + 1)."""
    return 1.0 / (25 * (x * x + y * y) + 1)


FUNCTIONS: tuple[Function2D, ...] = (f_0, f_1, f_2, f_3, f_4, f_5, f_6, f_7)


def select_function(k: int) -> Function2D:
    """Return the test function with number ``k`` (0 to 7)."""
    if not 0 <= k < len(FUNCTIONS):
        raise ValueError(f"function number must be between 0 and {len(FUNCTIONS) - 1}, got {k}")
    return FUNCTIONS[k]


def format_vector(values: Iterable[float]) -> str:
    """Format numbers with six decimals, each followed by a space."""
    return "".join(f"{value:.6f} " for value in values)